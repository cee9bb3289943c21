"""Typed entity mapping for the HubSpot CRM API."""

from .client import HubSpot
from .config.loader import ClientSettings, get_client_settings, load_config
from .errors import ConfigError, HubSpotError, ModelConfigurationError, ShapeError, TransportError
from .mapping.codec import create_properties_request, from_object, get_properties, to_entity
from .mapping.convert import (
    Coercion,
    CoercionStatus,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    coerce,
    convert,
)
from .mapping.model import AssociationKind, Model, ModelProperty, PropertyRole, hubspot_field, new_model
from .paging.page import Page, PageResponse, find_in_pages, iterate_pages, new_page
from .query.filters import (
    Filter,
    FilterGroup,
    FilterOperator,
    QueryData,
    Sort,
    SortDirection,
    contains_token,
    equals,
    greater,
    greater_equal,
    has_property,
    less,
    less_equal,
    not_contains_token,
    not_equals,
    not_has_property,
)
from .query.query import Query
from .resources.associations import Association, Associations, AssociationType
from .resources.companies import Companies
from .resources.contacts import Contacts
from .resources.deals import Deals
from .resources.tickets import Tickets
from .transport.quota import QuotaGate
from .transport.rest import BaseRestClient, Parameter, RestClient, new_parameter
from .utils.logging import configure_logging

__all__ = [
    "Association",
    "AssociationKind",
    "AssociationType",
    "Associations",
    "BaseRestClient",
    "ClientSettings",
    "Coercion",
    "CoercionStatus",
    "Companies",
    "ConfigError",
    "Contacts",
    "Deals",
    "Filter",
    "FilterGroup",
    "FilterOperator",
    "Float32",
    "Float64",
    "HubSpot",
    "HubSpotError",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Model",
    "ModelConfigurationError",
    "ModelProperty",
    "Page",
    "PageResponse",
    "Parameter",
    "PropertyRole",
    "Query",
    "QueryData",
    "QuotaGate",
    "RestClient",
    "ShapeError",
    "Sort",
    "SortDirection",
    "Tickets",
    "TransportError",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "coerce",
    "configure_logging",
    "contains_token",
    "convert",
    "create_properties_request",
    "equals",
    "find_in_pages",
    "from_object",
    "get_client_settings",
    "get_properties",
    "greater",
    "greater_equal",
    "has_property",
    "hubspot_field",
    "iterate_pages",
    "less",
    "less_equal",
    "load_config",
    "new_model",
    "new_page",
    "new_parameter",
    "not_contains_token",
    "not_equals",
    "not_has_property",
    "to_entity",
]
