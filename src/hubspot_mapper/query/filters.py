"""Pydantic models for the CRM search payload."""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from hubspot_mapper.mapping.codec import wire_value


class FilterOperator(str, Enum):
    EQUALS = "EQ"
    NOT_EQUALS = "NEQ"
    LESS = "LT"
    LESS_EQUAL = "LTE"
    GREATER = "GT"
    GREATER_EQUAL = "GTE"
    HAS_PROPERTY = "HAS_PROPERTY"
    NOT_HAS_PROPERTY = "NOT_HAS_PROPERTY"
    CONTAINS_TOKEN = "CONTAINS_TOKEN"
    NOT_CONTAINS_TOKEN = "NOT_CONTAINS_TOKEN"


class SortDirection(str, Enum):
    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)


class Filter(_WireModel):
    """A filter on one property. Filters in a group are combined using AND."""

    property_name: str = Field(..., alias="propertyName")
    operator: FilterOperator
    value: Optional[Any] = None

    @field_serializer("value")
    def serialize_value(self, value: Any) -> Any:
        return wire_value(value)


class FilterGroup(_WireModel):
    """A group of filters. Groups are combined using OR."""

    filters: List[Filter] = Field(default_factory=list)


class Sort(_WireModel):
    property_name: str = Field(..., alias="propertyName")
    direction: SortDirection = SortDirection.ASCENDING


class QueryData(_WireModel):
    """Body posted to a search endpoint. ``filters`` and ``filter_groups`` are mutually exclusive."""

    filters: Optional[List[Filter]] = None
    filter_groups: Optional[List[FilterGroup]] = Field(default=None, alias="filterGroups")
    sorts: Optional[List[Sort]] = None
    properties: Optional[List[str]] = None
    limit: Optional[int] = None
    after: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def equals(property_name: str, value: Any) -> Filter:
    return Filter(property_name=property_name, operator=FilterOperator.EQUALS, value=value)


def not_equals(property_name: str, value: Any) -> Filter:
    return Filter(property_name=property_name, operator=FilterOperator.NOT_EQUALS, value=value)


def less(property_name: str, value: Any) -> Filter:
    return Filter(property_name=property_name, operator=FilterOperator.LESS, value=value)


def less_equal(property_name: str, value: Any) -> Filter:
    return Filter(property_name=property_name, operator=FilterOperator.LESS_EQUAL, value=value)


def greater(property_name: str, value: Any) -> Filter:
    return Filter(property_name=property_name, operator=FilterOperator.GREATER, value=value)


def greater_equal(property_name: str, value: Any) -> Filter:
    return Filter(property_name=property_name, operator=FilterOperator.GREATER_EQUAL, value=value)


def has_property(property_name: str) -> Filter:
    return Filter(property_name=property_name, operator=FilterOperator.HAS_PROPERTY)


def not_has_property(property_name: str) -> Filter:
    return Filter(property_name=property_name, operator=FilterOperator.NOT_HAS_PROPERTY)


def contains_token(property_name: str, value: Any = None) -> Filter:
    return Filter(property_name=property_name, operator=FilterOperator.CONTAINS_TOKEN, value=value)


def not_contains_token(property_name: str, value: Any = None) -> Filter:
    return Filter(property_name=property_name, operator=FilterOperator.NOT_CONTAINS_TOKEN, value=value)
