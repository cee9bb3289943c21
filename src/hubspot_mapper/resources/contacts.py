"""Contacts API."""

from typing import Any, Optional
from urllib.parse import quote

from pydantic import BaseModel

from hubspot_mapper.paging.page import Page, PageResponse
from hubspot_mapper.resources.base import ResourceAPI, page_parameters, property_parameters

# HubSpot expects the address unescaped apart from reserved characters
EMAIL_SAFE = "@+"


class Contacts(ResourceAPI):
    """Access to contacts (v1 contacts API, v3 search)."""

    id_key = "vid"
    deleted_key = "deleted"
    name_key = "property"
    search_url = "crm/v3/objects/contacts/search"

    def create_or_update(self, email: str, contact: Any) -> BaseModel:
        """Create a contact, or update the one with this email address."""
        request = self._properties_request(contact)
        response = self.rest.post(f"contacts/v1/contact/createOrUpdate/email/{quote(email, safe=EMAIL_SAFE)}", request)
        return self._to_entity(response)

    def update(self, contact_id: int, contact: Any, **kwargs: Any) -> None:
        request = self._properties_request(contact, **kwargs)
        self.rest.post(f"contacts/v1/contact/vid/{contact_id}/profile", request)

    def delete(self, contact_id: int) -> None:
        self.rest.delete(f"contacts/v1/contact/vid/{contact_id}")

    def get_by_id(self, contact_id: int) -> BaseModel:
        response = self.rest.get(f"contacts/v1/contact/vid/{contact_id}/profile")
        return self._to_entity(response)

    def get_by_email(self, email: str) -> BaseModel:
        response = self.rest.get(f"contacts/v1/contact/email/{quote(email, safe=EMAIL_SAFE)}/profile")
        return self._to_entity(response)

    def list_page(self, page: Optional[Page] = None, *props: str) -> PageResponse:
        """List a page of all contacts, optionally restricted to some properties."""
        parameters = page_parameters(page, "count", "vidOffset") + property_parameters("property", props)
        response = self.rest.get("contacts/v1/lists/all/contacts/all", *parameters)
        return self._convert_list_response(response, "contacts", "has-more", "vid-offset")
