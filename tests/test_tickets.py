"""Tests for the tickets API against a recording transport."""

from conftest import FakeRest, Ticket
from hubspot_mapper.mapping.model import Model
from hubspot_mapper.resources.tickets import Tickets

TICKET = {
    "objectType": "TICKET",
    "portalId": 62515,
    "objectId": 176602,
    "properties": {
        "subject": {"value": "This is an example ticket", "timestamp": 1521154393958, "source": "API"},
        "content": {"value": "These are the details of the ticket."},
        "hs_pipeline": {"value": "0"},
        "hs_pipeline_stage": {"value": "4"},
    },
    "isDeleted": False,
}


def test_create():
    rest = FakeRest(TICKET)
    tickets = Tickets(rest, Model(Ticket))

    ticket = tickets.create(
        Ticket(subject="This is an example ticket", text="These are the details of the ticket.", stage=4)
    )

    assert rest.last_request == "POST crm-objects/v1/objects/tickets?hapikey=xyz"
    assert rest.last_body == {
        "properties": [
            {"name": "subject", "value": "This is an example ticket"},
            {"name": "content", "value": "These are the details of the ticket."},
            {"name": "hs_pipeline_stage", "value": 4},
        ]
    }
    assert ticket.id == 176602


def test_get():
    rest = FakeRest(TICKET)
    ticket = Tickets(rest, Model(Ticket)).get(176602)

    assert rest.last_request == "GET crm-objects/v1/objects/tickets/176602?hapikey=xyz"
    assert ticket == Ticket(
        id=176602,
        subject="This is an example ticket",
        text="These are the details of the ticket.",
        pipeline=0,
        stage=4,
    )


def test_query_uses_ticket_search():
    rest = FakeRest({"results": []})
    Tickets(rest, Model(Ticket)).query().execute()
    assert rest.last_request == "POST crm/v3/objects/tickets/search?hapikey=xyz"
