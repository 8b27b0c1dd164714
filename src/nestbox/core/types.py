"""
Value types and runtime classification for loosely-typed nested data
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, List, Optional, Union


Scalar = Union[str, bool, int, float, None]
NestedValue = Union[Scalar, List["NestedValue"], Dict[str, "NestedValue"]]
Composite = Union[List[NestedValue], Dict[str, NestedValue]]


class TypeTag(str, Enum):
    # Tags returned by classify(); numbers and None deliberately have none
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    BOOLEAN = "boolean"


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_iterable(value: Any) -> bool:
    """True for composites (mappings and arrays), False for scalars."""
    return is_object(value) or is_array(value)


_CHECKS = (
    (TypeTag.STRING, is_string),
    (TypeTag.ARRAY, is_array),
    (TypeTag.OBJECT, is_object),
    (TypeTag.BOOLEAN, is_boolean),
)


def classify(value: Any) -> Optional[TypeTag]:
    """
    Return the type tag of ``value``.

    Checks run in priority order string, array, object, boolean and the
    first match wins. Numbers, ``None`` and anything else stay unclassified
    and ``None`` is returned.
    """
    for tag, check in _CHECKS:
        if check(value):
            return tag
    return None
