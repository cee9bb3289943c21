"""Tests for the contacts API against a recording transport."""

from conftest import FakeRest, Person
from hubspot_mapper.mapping.model import Model
from hubspot_mapper.paging.page import Page
from hubspot_mapper.query.filters import equals
from hubspot_mapper.resources.contacts import Contacts

PETER = {
    "vid": 61574,
    "canonical-vid": 61574,
    "portal-id": 62515,
    "is-contact": True,
    "properties": {
        "name": {"value": "Peter"},
        "email": {"value": "peter@lack.de"},
        "humanage": {"value": 28},
        "lastmodifieddate": {"value": "1484026585538"},
    },
}

MONIKA = {
    "vid": 51157,
    "properties": {
        "name": {"value": "Monika"},
        "email": {"value": "monika@left.de"},
        "humanage": {"value": "24"},
    },
}


def _contacts(*responses):
    rest = FakeRest(*responses)
    return rest, Contacts(rest, Model(Person))


def test_create_or_update():
    rest, contacts = _contacts(PETER)

    person = contacts.create_or_update("peter@lack.de", Person(name="Peter", email="peter@lack.de", age=28))

    assert rest.last_request == "POST contacts/v1/contact/createOrUpdate/email/peter@lack.de?hapikey=xyz"
    assert rest.last_body == {
        "properties": [
            {"property": "name", "value": "Peter"},
            {"property": "email", "value": "peter@lack.de"},
            {"property": "humanage", "value": 28},
        ]
    }
    assert person == Person(id=61574, name="Peter", email="peter@lack.de", age=28)


def test_update():
    rest, contacts = _contacts()
    contacts.update(61574, Person(name="Peter"))

    assert rest.last_request == "POST contacts/v1/contact/vid/61574/profile?hapikey=xyz"
    assert rest.last_body == {"properties": [{"property": "name", "value": "Peter"}]}


def test_update_can_clear_properties():
    rest, contacts = _contacts()
    contacts.update(61574, Person(name="Peter", age=0), keep_set_zeros=True)
    assert {"property": "humanage", "value": 0} in rest.last_body["properties"]


def test_delete():
    rest, contacts = _contacts()
    contacts.delete(61574)
    assert rest.last_request == "DELETE contacts/v1/contact/vid/61574?hapikey=xyz"


def test_get_by_id():
    rest, contacts = _contacts(PETER)
    person = contacts.get_by_id(61574)

    assert rest.last_request == "GET contacts/v1/contact/vid/61574/profile?hapikey=xyz"
    assert person.id == 61574
    assert person.age == 28


def test_get_by_email():
    rest, contacts = _contacts(PETER)
    person = contacts.get_by_email("peter@lack.de")

    assert rest.last_request == "GET contacts/v1/contact/email/peter@lack.de/profile?hapikey=xyz"
    assert person.email == "peter@lack.de"


def test_list_first_page():
    rest, contacts = _contacts({"contacts": [PETER, MONIKA], "has-more": True, "vid-offset": 51157})

    page = contacts.list_page(None)

    assert rest.last_request == "GET contacts/v1/lists/all/contacts/all?hapikey=xyz"
    assert [person.id for person in page.data] == [61574, 51157]
    assert page.data[1].age == 24
    assert page.has_more is True
    assert page.offset == 51157


def test_list_custom_page_with_properties():
    rest, contacts = _contacts({"contacts": [MONIKA], "has-more": False, "vid-offset": 51157})

    page = contacts.list_page(Page(offset=544, count=54), "name", "email")

    assert rest.last_request == (
        "GET contacts/v1/lists/all/contacts/all?hapikey=xyz&count=54&vidOffset=544&property=name&property=email"
    )
    assert page.has_more is False
    assert page.offset == 0


def test_list_skips_malformed_items():
    rest, contacts = _contacts({"contacts": [PETER, "garbage"], "has-more": False})
    page = contacts.list_page()
    assert len(page.data) == 1


def test_search():
    rest, contacts = _contacts({"results": [{"id": "61574", "properties": {"email": "peter@lack.de"}}]})

    page = contacts.query().where(equals("email", "peter@lack.de")).execute()

    assert rest.last_request == "POST crm/v3/objects/contacts/search?hapikey=xyz"
    assert page.data == [Person(id=61574, email="peter@lack.de")]
