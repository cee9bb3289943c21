"""Tickets API."""

from typing import Any

from pydantic import BaseModel

from hubspot_mapper.resources.base import ResourceAPI


class Tickets(ResourceAPI):
    id_key = "objectId"
    deleted_key = "isDeleted"
    search_url = "crm/v3/objects/tickets/search"

    def create(self, ticket: Any) -> BaseModel:
        response = self.rest.post("crm-objects/v1/objects/tickets", self._properties_request(ticket))
        return self._to_entity(response)

    def get(self, ticket_id: int) -> BaseModel:
        response = self.rest.get(f"crm-objects/v1/objects/tickets/{ticket_id}")
        return self._to_entity(response)
