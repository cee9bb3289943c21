"""Entry point bundling the resource APIs around one transport."""

import threading
from pathlib import Path
from typing import Dict, Optional, Type, Union

from pydantic import BaseModel

from hubspot_mapper.config.loader import ClientSettings, get_client_settings, load_config
from hubspot_mapper.mapping.model import Model
from hubspot_mapper.resources.associations import Associations
from hubspot_mapper.resources.companies import Companies
from hubspot_mapper.resources.contacts import Contacts
from hubspot_mapper.resources.deals import Deals
from hubspot_mapper.resources.tickets import Tickets
from hubspot_mapper.transport.rest import BaseRestClient, RestClient
from hubspot_mapper.utils.logging import get_logger

logger = get_logger(__name__)

ModelSource = Union[Model, Type[BaseModel]]


class HubSpot:
    """
    Access to the HubSpot resource APIs.

    Example:
        hubspot = HubSpot.from_settings(ClientSettings(access_token="pat-..."))
        deals = hubspot.deals(Deal)
        deal = deals.get(151088)
    """

    def __init__(self, rest: BaseRestClient):
        self.rest = rest
        self._models: Dict[type, Model] = {}
        self._models_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "HubSpot":
        rest = RestClient(
            settings.base_url,
            settings.api_key,
            access_token=settings.access_token,
            timeout=settings.timeout_seconds,
            quota_interval=settings.quota_interval_seconds,
            user_agent=settings.user_agent,
        )
        return cls(rest)

    @classmethod
    def from_config(cls, path: Optional[Path] = None) -> "HubSpot":
        """Build a client from a YAML config file plus environment credentials."""
        settings = get_client_settings(load_config(path))
        if not settings.api_key and not settings.access_token:
            logger.warning("No HubSpot credentials configured")
        return cls.from_settings(settings)

    def model(self, source: ModelSource) -> Model:
        """Model for an entity class, built once per class."""
        if isinstance(source, Model):
            return source
        with self._models_lock:
            model = self._models.get(source)
            if model is None:
                model = Model(source)
                self._models[source] = model
            return model

    def contacts(self, source: ModelSource) -> Contacts:
        return Contacts(self.rest, self.model(source))

    def companies(self, source: ModelSource) -> Companies:
        return Companies(self.rest, self.model(source))

    def deals(self, source: ModelSource) -> Deals:
        return Deals(self.rest, self.model(source))

    def tickets(self, source: ModelSource) -> Tickets:
        return Tickets(self.rest, self.model(source))

    def associations(self) -> Associations:
        return Associations(self.rest)
