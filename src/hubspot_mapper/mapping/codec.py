"""Conversion between entities and HubSpot property bags."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel

from hubspot_mapper.mapping.convert import convert, is_zero, zero_value
from hubspot_mapper.mapping.model import Model, ModelProperty, PropertyRole
from hubspot_mapper.utils.logging import get_logger
from hubspot_mapper.utils.time import to_unix_ms

logger = get_logger(__name__)


def wire_value(value: Any) -> Any:
    """Convert an entity field value into something HubSpot accepts in JSON."""
    if isinstance(value, datetime):
        # HubSpot expects date properties as unix milliseconds
        return str(to_unix_ms(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


def get_properties(
    entity: Any,
    model: Model,
    name_key: str = "name",
    keep_set_zeros: bool = False,
) -> List[Dict[str, Any]]:
    """
    Build the write property bag for an entity.

    Zero values are skipped since they can't be told apart from unset fields.
    With ``keep_set_zeros`` a zero value is sent when the field was explicitly
    set on the entity (pydantic ``model_fields_set``), which allows clearing
    a property.

    Args:
        entity: Entity instance (may be a different class than the model's)
        model: Model describing the entity
        name_key: Key holding the property name ("property" for contacts, "name" elsewhere)
        keep_set_zeros: Send explicitly set zero values

    Returns:
        List of ``{name_key: <hubspot name>, "value": <value>}`` dicts in field order
    """
    explicit = getattr(entity, "model_fields_set", set()) if keep_set_zeros else set()

    properties: List[Dict[str, Any]] = []
    for prop in model.exportable():
        # the entity might not be an instance of the model's class
        if not hasattr(entity, prop.field_name):
            continue
        value = prop.get_value(entity)
        if is_zero(value) and prop.field_name not in explicit:
            continue
        properties.append({name_key: prop.hubspot_name, "value": wire_value(value)})
    return properties


def create_properties_request(entity: Any, model: Model, name_key: str = "name", **kwargs: Any) -> Dict[str, Any]:
    """Wrap the property bag of an entity into a create/update request body."""
    return {"properties": get_properties(entity, model, name_key=name_key, **kwargs)}


def _assign(values: Dict[str, Any], prop: ModelProperty, data: Any, key: str) -> None:
    if not isinstance(data, Mapping) or key not in data:
        return
    values[prop.field_name] = convert(data[key], prop.annotation)


def _build(model: Model, values: Dict[str, Any]) -> BaseModel:
    """Create the entity with zero values for every field missing on the wire."""
    fields_set = set()
    complete: Dict[str, Any] = {}
    for name, prop in model.properties.items():
        value = values.get(name)
        if name in values and value is not None:
            fields_set.add(name)
            complete[name] = value
            continue
        field_info = model.entity_type.model_fields[name]
        if field_info.is_required():
            complete[name] = zero_value(prop.annotation)
        else:
            complete[name] = field_info.get_default(call_default_factory=True)
    return model.entity_type.model_construct(_fields_set=fields_set, **complete)


def _by_wire_name(model: Model) -> Dict[str, ModelProperty]:
    # last field declared for a wire name wins
    return {prop.hubspot_name: prop for prop in model.properties.values()}


def to_entity(
    response: Any,
    model: Model,
    id_key: str,
    deleted_key: Optional[str] = None,
    associations: bool = True,
) -> BaseModel:
    """
    Create an entity from a v1/v2 object response.

    Property values are read from ``properties.<name>.value``. Missing or
    malformed data leaves fields at their zero value; this never raises for
    shape problems.

    Args:
        response: Decoded JSON object
        model: Model of the entity class
        id_key: Top-level key holding the object id ("vid", "companyId", "dealId", "objectId")
        deleted_key: Top-level key holding the deleted flag
        associations: Read association ids from ``associations``
    """
    values: Dict[str, Any] = {}
    if not isinstance(response, Mapping):
        logger.warning(f"Unexpected {type(response).__name__} response for {model.entity_type.__name__}")
        return _build(model, values)

    if model.id_property is not None:
        _assign(values, model.id_property, response, id_key)
    if model.deleted_property is not None and deleted_key:
        _assign(values, model.deleted_property, response, deleted_key)

    if associations and model.associations:
        linked = response.get("associations")
        for kind, prop in model.associations.items():
            _assign(values, prop, linked, kind.wire_key)

    properties = response.get("properties")
    if isinstance(properties, Mapping):
        for hubspot_name, prop in _by_wire_name(model).items():
            if prop.role is PropertyRole.ASSOCIATION:
                continue
            _assign(values, prop, properties.get(hubspot_name), "value")

    return _build(model, values)


def from_object(obj: Mapping[str, Any], model: Model) -> BaseModel:
    """
    Create an entity from a v3 CRM object (search results).

    v3 objects carry the id as ``id``, the deleted flag as ``archived`` and
    plain property values (``properties.<name>`` holds the value directly).
    """
    values: Dict[str, Any] = {}
    if model.id_property is not None:
        _assign(values, model.id_property, obj, "id")
    if model.deleted_property is not None:
        _assign(values, model.deleted_property, obj, "archived")

    properties = obj.get("properties")
    if isinstance(properties, Mapping):
        for hubspot_name, prop in _by_wire_name(model).items():
            if prop.role is PropertyRole.ASSOCIATION:
                continue
            _assign(values, prop, properties, hubspot_name)

    return _build(model, values)
