"""Unit tests for converting entities to and from property bags."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel

from conftest import Deal, Person
from hubspot_mapper.mapping.codec import (
    create_properties_request,
    from_object,
    get_properties,
    to_entity,
    wire_value,
)
from hubspot_mapper.mapping.model import Model, hubspot_field


def _as_response(properties, name_key="name", **top_level):
    """Turn a write property bag into the read shape HubSpot answers with."""
    response = {"properties": {p[name_key]: {"value": p["value"]} for p in properties}}
    response.update(top_level)
    return response


def test_properties_in_field_order():
    model = Model(Person)
    person = Person(name="Peter", email="peter@lack.de", age=28)

    assert get_properties(person, model, name_key="property") == [
        {"property": "name", "value": "Peter"},
        {"property": "email", "value": "peter@lack.de"},
        {"property": "humanage", "value": 28},
    ]


def test_zero_values_are_omitted():
    """Zero values can't be told apart from unset fields and are not sent."""
    model = Model(Person)
    assert get_properties(Person(name="Peter"), model) == [{"name": "name", "value": "Peter"}]
    assert create_properties_request(Person(), model) == {"properties": []}


def test_keep_set_zeros_sends_explicit_zero_values():
    model = Model(Person)
    person = Person(name="Peter", age=0)

    assert get_properties(person, model, keep_set_zeros=True) == [
        {"name": "name", "value": "Peter"},
        {"name": "humanage", "value": 0},
    ]
    assert get_properties(person, model) == [{"name": "name", "value": "Peter"}]


def test_datetime_is_sent_as_milliseconds():
    model = Model(Deal)
    deal = Deal(name="TestDeal", close_date=datetime(2014, 8, 31, tzinfo=timezone.utc))
    properties = get_properties(deal, model)
    assert {"name": "closedate", "value": "1409443200000"} in properties


def test_wire_value():
    assert wire_value(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == "1000"
    assert wire_value((1, 2)) == [1, 2]
    assert wire_value("x") == "x"


def test_other_entity_class_uses_matching_fields():
    class Partial(BaseModel):
        name: str = ""

    model = Model(Person)
    assert get_properties(Partial(name="Monika"), model) == [{"name": "name", "value": "Monika"}]


def test_round_trip():
    """Writing an entity and reading the answer back yields the same values."""
    model = Model(Deal)
    deal = Deal(
        name="A new Deal",
        stage="appointmentscheduled",
        close_date=datetime(2014, 8, 31, tzinfo=timezone.utc),
        amount=60000.5,
    )

    response = _as_response(get_properties(deal, model), dealId=151088)
    result = to_entity(response, model, "dealId", "isDeleted")

    assert result.id == 151088
    assert result.name == deal.name
    assert result.stage == deal.stage
    assert result.close_date == deal.close_date
    assert result.amount == deal.amount


def test_to_entity_reads_id_deleted_and_associations():
    model = Model(Deal)
    response = {
        "dealId": 151088,
        "isDeleted": False,
        "associations": {"associatedVids": [27136], "associatedCompanyIds": [8954037], "associatedDealIds": []},
        "properties": {
            "dealname": {"value": "A new Deal", "timestamp": 1410381339020},
            "createdate": {"value": "1410381339020"},
            "amount": {"value": "60000"},
        },
    }

    deal = to_entity(response, model, "dealId", "isDeleted")
    assert deal.id == 151088
    assert deal.is_deleted is False
    assert deal.contacts == [27136]
    assert deal.companies == [8954037]
    assert deal.name == "A new Deal"
    assert deal.amount == 60000.0
    assert deal.created == datetime(2014, 9, 10, 20, 35, 39, 20000, tzinfo=timezone.utc)
    assert deal.close_date is None


def test_to_entity_skips_associations_when_disabled():
    model = Model(Deal)
    response = {"dealId": 1, "associations": {"associatedVids": [5]}}
    deal = to_entity(response, model, "dealId", associations=False)
    assert deal.contacts == []


def test_missing_and_malformed_properties_leave_zero_values():
    """Shape problems in a response never raise."""
    model = Model(Person)
    response = {
        "vid": "61574",
        "properties": {
            "name": "no value wrapper",
            "email": {"timestamp": 1},
            "humanage": {"value": "n/a"},
        },
    }

    person = to_entity(response, model, "vid", "deleted")
    assert person.id == 61574
    assert person.name == ""
    assert person.email == ""
    assert person.age == 0


def test_out_of_range_date_leaves_field_empty():
    response = {"dealId": 1, "properties": {"closedate": {"value": "99999999999999999999"}, "dealname": {"value": "x"}}}

    deal = to_entity(response, Model(Deal), "dealId")
    assert deal.id == 1
    assert deal.close_date is None
    assert deal.name == "x"


def test_non_mapping_response_gives_zero_entity():
    model = Model(Person)
    assert to_entity(["unexpected"], model, "vid") == Person()
    assert to_entity({"vid": 1, "properties": []}, model, "vid").id == 1


def test_required_fields_get_zero_values():
    class Strict(BaseModel):
        id: int = hubspot_field("id")
        tags: List[int] = hubspot_field("name=tags")
        note: Optional[str] = None

    entity = to_entity({"objectId": 3}, Model(Strict), "objectId")
    assert entity.id == 3
    assert entity.tags == []
    assert entity.note is None


def test_fields_set_tracks_wire_values():
    entity = to_entity({"vid": 1, "properties": {"name": {"value": "Peter"}}}, Model(Person), "vid")
    assert entity.model_fields_set == {"id", "name"}


def test_last_field_wins_for_shared_wire_name():
    class Twice(BaseModel):
        first: str = hubspot_field("name=label", default="")
        second: str = hubspot_field("name=label", default="")

    entity = to_entity({"properties": {"label": {"value": "x"}}}, Model(Twice), "objectId")
    assert entity.second == "x"
    assert entity.first == ""


def test_from_object_reads_flat_properties():
    model = Model(Deal)
    obj = {
        "id": "1775411525",
        "archived": False,
        "properties": {
            "amount": "142.00",
            "closedate": "2020-03-23T11:03:59.695Z",
            "dealname": "vertical GmbH (Lukass Maceks)",
        },
    }

    deal = from_object(obj, model)
    assert deal.id == 1775411525
    assert deal.amount == 142.0
    assert deal.close_date == datetime(2020, 3, 23, 11, 3, 59, 695000, tzinfo=timezone.utc)
    assert deal.name == "vertical GmbH (Lukass Maceks)"
