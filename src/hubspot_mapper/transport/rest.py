"""REST transport for the HubSpot API."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from hubspot_mapper.errors import TransportError
from hubspot_mapper.transport.quota import DEFAULT_QUOTA_INTERVAL, QuotaGate
from hubspot_mapper.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.hubapi.com/"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_USER_AGENT = "hubspot-mapper/0.1"


@dataclass(frozen=True)
class Parameter:
    """Query parameter; keys may repeat (``property=a&property=b``)."""

    key: str
    value: str


def new_parameter(key: str, value: Any) -> Parameter:
    return Parameter(key=key, value=str(value))


class BaseRestClient(ABC):
    """
    Transport used by the resource APIs.

    Methods return the decoded JSON body, or None for 204/empty responses.
    """

    def __init__(self, quota_interval: float = DEFAULT_QUOTA_INTERVAL):
        self._quota = QuotaGate(quota_interval)

    def quota(self) -> QuotaGate:
        """Gate for rate limited calls; use as ``with rest.quota(): ...``."""
        return self._quota

    @abstractmethod
    def get(self, path: str, *params: Parameter) -> Any:
        pass

    @abstractmethod
    def post(self, path: str, body: Any, *params: Parameter) -> Any:
        pass

    @abstractmethod
    def put(self, path: str, body: Any, *params: Parameter) -> Any:
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        pass


class RestClient(BaseRestClient):
    """Sends requests to HubSpot using a ``requests.Session``."""

    def __init__(
        self,
        address: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        *,
        access_token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        quota_interval: float = DEFAULT_QUOTA_INTERVAL,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize client.

        Args:
            address: Base URL, paths are appended as-is (keep the trailing slash)
            api_key: Legacy API key, sent as ``hapikey`` query parameter
            access_token: Private app token, sent as bearer token
            timeout: Request timeout in seconds
            quota_interval: Minimum seconds between rate limited calls
            session: Optional session to reuse (connection pooling, tests)
        """
        super().__init__(quota_interval)
        self.address = address
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session or requests.Session()

    def _get_headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _build_params(self, params: Tuple[Parameter, ...]) -> List[Tuple[str, str]]:
        query: List[Tuple[str, str]] = []
        if self.api_key:
            query.append(("hapikey", self.api_key))
        query.extend((param.key, param.value) for param in params)
        return query

    def _request(self, method: str, path: str, body: Any = None, params: Tuple[Parameter, ...] = ()) -> Any:
        url = self.address + path
        headers = self._get_headers()
        data = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(body)

        try:
            response = self.session.request(
                method,
                url,
                params=self._build_params(params),
                data=data,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        if response.status_code < 200 or response.status_code >= 300:
            raise TransportError.from_status(response.status_code, response.reason or "", response.text or "")
        return self._read_response(response)

    def _read_response(self, response: requests.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON in response: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def get(self, path: str, *params: Parameter) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, body: Any, *params: Parameter) -> Any:
        return self._request("POST", path, body=body, params=params)

    def put(self, path: str, body: Any, *params: Parameter) -> Any:
        return self._request("PUT", path, body=body, params=params)

    def delete(self, path: str) -> None:
        self._request("DELETE", path)
