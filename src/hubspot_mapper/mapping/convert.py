"""Best-effort coercion of decoded JSON values into entity field types.

HubSpot returns most property values as strings ("60000", "true",
"1409443200000") regardless of the property type, so values are converted
leniently instead of type-checked. A conversion never raises: the returned
``Coercion`` says whether the value was used as-is, converted, replaced by the
target's zero value, or whether the target type is not supported at all.
"""

import struct
import types
import typing
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, List, Optional, Tuple

from hubspot_mapper.utils.time import from_unix_ms, parse_iso_utc, to_utc_z


class CoercionStatus(str, Enum):
    EXACT = "exact"
    CONVERTED = "converted"
    SUBSTITUTED = "substituted"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Coercion:
    """Outcome of converting one wire value."""

    value: Any
    status: CoercionStatus

    @property
    def ok(self) -> bool:
        return self.status in (CoercionStatus.EXACT, CoercionStatus.CONVERTED)


@dataclass(frozen=True)
class IntWidth:
    """Marks an ``int`` field as a fixed-width integer."""

    bits: int
    signed: bool = True

    def fit(self, number: int) -> Optional[int]:
        if not self.signed:
            if number < 0:
                return None
            return number % (1 << self.bits)
        number %= 1 << self.bits
        if number >= 1 << (self.bits - 1):
            number -= 1 << self.bits
        return number


@dataclass(frozen=True)
class FloatWidth:
    bits: int = 64

    def fit(self, number: float) -> float:
        if self.bits == 32:
            return struct.unpack("f", struct.pack("f", number))[0]
        return number


Int8 = Annotated[int, IntWidth(8)]
Int16 = Annotated[int, IntWidth(16)]
Int32 = Annotated[int, IntWidth(32)]
Int64 = Annotated[int, IntWidth(64)]
UInt = Annotated[int, IntWidth(64, signed=False)]
UInt8 = Annotated[int, IntWidth(8, signed=False)]
UInt16 = Annotated[int, IntWidth(16, signed=False)]
UInt32 = Annotated[int, IntWidth(32, signed=False)]
UInt64 = Annotated[int, IntWidth(64, signed=False)]
Float32 = Annotated[float, FloatWidth(32)]
Float64 = Annotated[float, FloatWidth(64)]

_TRUE_STRINGS = {"1", "t", "T", "true", "TRUE", "True"}
_FALSE_STRINGS = {"0", "f", "F", "false", "FALSE", "False"}


def unwrap(target: Any) -> Tuple[Any, Any, bool]:
    """
    Split a type annotation into (base type, width marker, optional flag).

    ``Optional[Int32]`` becomes ``(int, IntWidth(32), True)``.
    """
    optional = False
    origin = typing.get_origin(target)
    if origin in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(target) if arg is not type(None)]
        if len(args) == 1:
            optional = len(args) != len(typing.get_args(target))
            target = args[0]

    marker = None
    if typing.get_origin(target) is Annotated:
        base, *extras = typing.get_args(target)
        for extra in extras:
            if isinstance(extra, (IntWidth, FloatWidth)):
                marker = extra
        target = base
    return target, marker, optional


def list_element_type(target: Any) -> Optional[Any]:
    """Return ``T`` for ``list[T]``/``List[T]`` annotations, else None."""
    target, _, _ = unwrap(target)
    if typing.get_origin(target) in (list, List):
        args = typing.get_args(target)
        return args[0] if args else Any
    return None


def zero_value(target: Any) -> Any:
    """Zero value of a field type, used for missing or unconvertible values."""
    base, _, optional = unwrap(target)
    if optional:
        return None
    if list_element_type(base) is not None:
        return []
    if base is bool:
        return False
    if base is int:
        return 0
    if base is float:
        return 0.0
    if base is str:
        return ""
    return None


def is_zero(value: Any) -> bool:
    """Whether a value is indistinguishable from an unset field."""
    if value is None:
        return True
    if isinstance(value, (bool, int, float, str, list, tuple, dict)):
        return not value
    return False


def _to_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        if value in _TRUE_STRINGS:
            return True
        if value in _FALSE_STRINGS:
            return False
    return None


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text, 0)
        except ValueError:
            pass
        # base 0 rejects leading zeros ("007")
        try:
            return int(text, 10)
        except ValueError:
            return None
    return None


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return to_utc_z(_to_datetime(value))
    if isinstance(value, (list, dict)):
        return None
    return str(value)


def _to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, str):
        # HubSpot sends unix time in milliseconds
        if value and value.isascii() and value.isdigit():
            try:
                return from_unix_ms(int(value))
            except (OverflowError, ValueError):
                return None
        try:
            return parse_iso_utc(value)
        except ValueError:
            return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def _matches(value: Any, base: Any, marker: Any) -> bool:
    if marker is not None or not isinstance(base, type):
        return False
    if base is int and isinstance(value, bool):
        return False
    if base is datetime:
        return isinstance(value, datetime) and value.tzinfo is not None
    return type(value) is base


def coerce(value: Any, target: Any) -> Coercion:
    """
    Convert a decoded wire value into ``target``.

    Args:
        value: JSON-native value (bool, number, string, list, None)
        target: Field annotation (``int``, ``Optional[datetime]``, ``list[int]``, ``Int8``...)

    Returns:
        Coercion describing the converted value
    """
    base, marker, optional = unwrap(target)

    if value is None and optional:
        return Coercion(None, CoercionStatus.EXACT)
    if _matches(value, base, marker):
        return Coercion(value, CoercionStatus.EXACT)

    element = list_element_type(base)
    if element is not None:
        if not isinstance(value, (list, tuple)):
            return Coercion(zero_value(target), CoercionStatus.SUBSTITUTED)
        items = [coerce(item, element) for item in value]
        status = CoercionStatus.CONVERTED
        if any(item.status is CoercionStatus.UNSUPPORTED for item in items):
            status = CoercionStatus.UNSUPPORTED
        elif any(item.status is CoercionStatus.SUBSTITUTED for item in items):
            status = CoercionStatus.SUBSTITUTED
        return Coercion([item.value for item in items], status)

    if base is bool:
        converted = _to_bool(value)
    elif base is int:
        converted = _to_int(value)
        if converted is not None and isinstance(marker, IntWidth):
            converted = marker.fit(converted)
    elif base is float:
        converted = _to_float(value)
        if converted is not None and isinstance(marker, FloatWidth):
            converted = marker.fit(converted)
    elif base is str:
        converted = _to_str(value)
    elif base is datetime:
        converted = _to_datetime(value)
    else:
        return Coercion(None, CoercionStatus.UNSUPPORTED)

    if converted is None:
        return Coercion(zero_value(target), CoercionStatus.SUBSTITUTED)
    return Coercion(converted, CoercionStatus.CONVERTED)


def convert(value: Any, target: Any) -> Any:
    """Shortcut for ``coerce(value, target).value``."""
    return coerce(value, target).value
