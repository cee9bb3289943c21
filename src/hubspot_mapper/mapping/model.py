"""Entity schema derived from a pydantic model class.

Entity classes declare how their fields map onto HubSpot properties with a
comma separated tag stored under ``json_schema_extra["hubspot"]``::

    class Deal(BaseModel):
        id: int = hubspot_field("id", default=0)
        is_deleted: bool = hubspot_field("deleted", default=False)
        contacts: List[int] = hubspot_field("contacts", default_factory=list)
        name: str = hubspot_field("name=dealname", default="")
        stage: str = hubspot_field("name=dealstage", default="")
        amount: int = 0

Tag tokens:
    id           - receives the HubSpot object id
    deleted      - receives the deleted/archived flag
    noexport     - never sent on create/update
    name=<name>  - HubSpot property name (default: lower-cased field name)
    contacts, companies, deals
                 - receives the ids of associated objects (must be ``list[int]``)

Unknown tokens are ignored.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, Field

from hubspot_mapper.errors import ModelConfigurationError
from hubspot_mapper.mapping.convert import FloatWidth, IntWidth, list_element_type, unwrap
from hubspot_mapper.utils.logging import get_logger

logger = get_logger(__name__)

TAG_KEY = "hubspot"


class PropertyRole(str, Enum):
    NONE = "none"
    ID = "id"
    DELETED = "deleted"
    ASSOCIATION = "association"


class AssociationKind(str, Enum):
    """Association lists an entity can carry, with their key in v1 responses."""

    CONTACTS = "contacts"
    COMPANIES = "companies"
    DEALS = "deals"

    @property
    def wire_key(self) -> str:
        return _ASSOCIATION_WIRE_KEYS[self]


_ASSOCIATION_WIRE_KEYS = {
    AssociationKind.CONTACTS: "associatedVids",
    AssociationKind.COMPANIES: "associatedCompanyIds",
    AssociationKind.DEALS: "associatedDealIds",
}


def hubspot_field(tag: str, default: Any = ..., **kwargs: Any) -> Any:
    """Build a pydantic ``Field`` carrying a hubspot tag."""
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[TAG_KEY] = tag
    if "default_factory" in kwargs:
        return Field(json_schema_extra=extra, **kwargs)
    return Field(default, json_schema_extra=extra, **kwargs)


@dataclass(frozen=True)
class ModelProperty:
    """Mapping of one entity field onto a HubSpot property."""

    field_name: str
    hubspot_name: str
    annotation: Any
    no_export: bool = False
    role: PropertyRole = PropertyRole.NONE
    association: Optional[AssociationKind] = None

    def get_value(self, entity: Any) -> Any:
        return getattr(entity, self.field_name, None)


def _is_int_list(annotation: Any) -> bool:
    base, _, _ = unwrap(annotation)
    element = list_element_type(base)
    if element is None:
        return False
    element_base, _, element_optional = unwrap(element)
    return element_base is int and not element_optional


def _read_tag(field_info: Any) -> str:
    extra = field_info.json_schema_extra
    if isinstance(extra, dict):
        tag = extra.get(TAG_KEY)
        if isinstance(tag, str):
            return tag
    return ""


def _annotation(field_info: Any) -> Any:
    # pydantic moves top-level Annotated extras into field metadata
    markers = [item for item in field_info.metadata if isinstance(item, (IntWidth, FloatWidth))]
    if markers:
        return Annotated[(field_info.annotation, *markers)]
    return field_info.annotation


class Model:
    """
    Mapping of an entity class onto HubSpot properties.

    Built once per entity class and shared read-only afterwards.

    Raises:
        ModelConfigurationError: If the class is not a pydantic model or an
            association field is not typed ``list[int]``
    """

    def __init__(self, entity_type: Type[BaseModel]):
        if not (isinstance(entity_type, type) and issubclass(entity_type, BaseModel)):
            raise ModelConfigurationError(f"Entity type must be a pydantic model class, got {entity_type!r}")

        self.entity_type = entity_type
        self._id: Optional[ModelProperty] = None
        self._deleted: Optional[ModelProperty] = None
        self._associations: Dict[AssociationKind, ModelProperty] = {}
        properties: Dict[str, ModelProperty] = {}

        for name, field_info in entity_type.model_fields.items():
            prop = self._parse_field(name, _annotation(field_info), _read_tag(field_info))
            properties[name] = prop

        self._properties = MappingProxyType(properties)
        logger.debug(
            f"Built model for {entity_type.__name__}: {len(properties)} properties, "
            f"{len(self.exportable())} exportable"
        )

    def _parse_field(self, name: str, annotation: Any, tag: str) -> ModelProperty:
        hubspot_name = ""
        no_export = False
        role = PropertyRole.NONE
        association = None

        for attr in (token.strip() for token in tag.split(",")):
            if attr.startswith("name="):
                hubspot_name = attr[5:]
            elif attr == "id":
                role = PropertyRole.ID
            elif attr == "deleted":
                role = PropertyRole.DELETED
            elif attr == "noexport":
                no_export = True
            elif attr in AssociationKind._value2member_map_:
                if not _is_int_list(annotation):
                    raise ModelConfigurationError(
                        f"{self.entity_type.__name__}.{name}: '{attr}' field must be of type 'list[int]'"
                    )
                role = PropertyRole.ASSOCIATION
                association = AssociationKind(attr)

        prop = ModelProperty(
            field_name=name,
            hubspot_name=hubspot_name or name.lower(),
            annotation=annotation,
            no_export=no_export or role is not PropertyRole.NONE,
            role=role,
            association=association,
        )

        if role is PropertyRole.ID:
            self._id = prop
        elif role is PropertyRole.DELETED:
            self._deleted = prop
        elif association is not None:
            self._associations[association] = prop
        return prop

    @property
    def properties(self) -> Mapping[str, ModelProperty]:
        return self._properties

    @property
    def id_property(self) -> Optional[ModelProperty]:
        return self._id

    @property
    def deleted_property(self) -> Optional[ModelProperty]:
        return self._deleted

    @property
    def associations(self) -> Mapping[AssociationKind, ModelProperty]:
        return MappingProxyType(self._associations)

    def association_property(self, kind: AssociationKind) -> Optional[ModelProperty]:
        return self._associations.get(kind)

    def get_property(self, field_name: str) -> Optional[ModelProperty]:
        return self._properties.get(field_name)

    def exportable(self) -> List[ModelProperty]:
        """Properties sent on create/update, in field declaration order."""
        return [prop for prop in self._properties.values() if not prop.no_export]

    def get_id(self, entity: Any) -> Any:
        if self._id is None:
            return None
        return self._id.get_value(entity)

    def get_associations(self, entity: Any, kind: AssociationKind) -> Optional[List[int]]:
        prop = self._associations.get(kind)
        if prop is None:
            return None
        return list(prop.get_value(entity) or [])

    def __repr__(self) -> str:
        return f"Model({self.entity_type.__name__}, properties={list(self._properties)})"


def new_model(entity_type: Type[BaseModel]) -> Model:
    """Create the model for an entity class."""
    return Model(entity_type)
