"""Pytest configuration and fixtures."""

import json
from datetime import datetime
from typing import Any, List, Optional
from urllib.parse import urlencode

import pytest
from pydantic import BaseModel

from hubspot_mapper.mapping.model import hubspot_field
from hubspot_mapper.transport.rest import BaseRestClient, Parameter


class FakeRest(BaseRestClient):
    """
    Transport recording every request instead of sending it.

    Requests are recorded as ``"METHOD path?hapikey=xyz&..."`` and bodies are
    passed through JSON so unserializable payloads fail the test.
    """

    def __init__(self, *responses: Any):
        super().__init__(quota_interval=0)
        self.responses: List[Any] = list(responses)
        self.requests: List[str] = []
        self.bodies: List[Any] = []

    def respond(self, *responses: Any) -> None:
        self.responses = list(responses)

    def _record(self, method: str, path: str, params=(), body: Any = None) -> Any:
        query = urlencode([("hapikey", "xyz")] + [(p.key, p.value) for p in params])
        self.requests.append(f"{method} {path}?{query}")
        self.bodies.append(json.loads(json.dumps(body)) if body is not None else None)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0] if self.responses else None

    @property
    def last_request(self) -> str:
        return self.requests[-1]

    @property
    def last_body(self) -> Any:
        return self.bodies[-1]

    def get(self, path: str, *params: Parameter) -> Any:
        return self._record("GET", path, params)

    def post(self, path: str, body: Any, *params: Parameter) -> Any:
        return self._record("POST", path, params, body)

    def put(self, path: str, body: Any, *params: Parameter) -> Any:
        return self._record("PUT", path, params, body)

    def delete(self, path: str) -> None:
        self._record("DELETE", path)


class Person(BaseModel):
    id: int = hubspot_field("id", default=0)
    deleted: bool = hubspot_field("deleted", default=False)
    name: str = ""
    email: str = ""
    age: int = hubspot_field("name=humanage", default=0)


class Company(BaseModel):
    id: int = hubspot_field("id", default=0)
    deleted: bool = hubspot_field("deleted", default=False)
    name: str = ""
    website: str = ""
    vat_id: str = hubspot_field("name=umsatzsteuerid", default="")


class Deal(BaseModel):
    id: int = hubspot_field("id", default=0)
    is_deleted: bool = hubspot_field("deleted", default=False)
    contacts: List[int] = hubspot_field("contacts", default_factory=list)
    companies: List[int] = hubspot_field("companies", default_factory=list)
    name: str = hubspot_field("name=dealname", default="")
    stage: str = hubspot_field("name=dealstage", default="")
    close_date: Optional[datetime] = hubspot_field("name=closedate", default=None)
    created: Optional[datetime] = hubspot_field("name=createdate,noexport", default=None)
    amount: float = 0.0


class Ticket(BaseModel):
    id: int = hubspot_field("id", default=0)
    subject: str = hubspot_field("name=subject", default="")
    text: str = hubspot_field("name=content", default="")
    pipeline: int = hubspot_field("name=hs_pipeline", default=0)
    stage: int = hubspot_field("name=hs_pipeline_stage", default=0)


@pytest.fixture
def rest():
    """Recording transport without rate limiting."""
    return FakeRest()
