"""Native type table for paramguard descriptors.

Maps each recognized native type name to a coarse category (scalar or
complex) and a priority. The priority is opaque to this package; callers
that need to rank candidate types (for example when a docstring lists
several) can read it from here.
"""

from enum import Enum
from types import MappingProxyType
from typing import Literal


class TypeCategory(Enum):
    """Coarse classification of a native type."""

    SCALAR = 1
    COMPLEX = 2


class NativeType(str, Enum):
    """Native type names a descriptor can declare."""

    INT = "int"
    BOOL = "bool"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    NULL = "null"
    RESOURCE = "resource"
    CALLABLE = "callable"

    @property
    def category(self) -> TypeCategory:
        return NATIVE_TYPES[self.value][0]

    @property
    def priority(self) -> int:
        return NATIVE_TYPES[self.value][1]


# name -> (category, priority)
NATIVE_TYPES = MappingProxyType(
    {
        "int": (TypeCategory.SCALAR, 9),
        "bool": (TypeCategory.SCALAR, 7),
        "float": (TypeCategory.SCALAR, 8),
        "string": (TypeCategory.SCALAR, 10),
        "array": (TypeCategory.COMPLEX, 6),
        "null": (TypeCategory.COMPLEX, 1),
        "resource": (TypeCategory.COMPLEX, 5),
        "callable": (TypeCategory.COMPLEX, 10),
    }
)

# Declared type of parameters that expect an instance of a named class
OBJECT_TYPE = "object"

# Runtime types that are never implicitly coerced to a scalar
STRUCTURAL_TYPES = frozenset({"array", OBJECT_TYPE, "callable", "resource"})

DeclaredType = Literal[
    "int", "bool", "float", "string", "array", "null", "resource", "callable", "object"
]


def lookup(name: str) -> NativeType | None:
    """Return the native type for ``name`` or None if it is not native."""
    try:
        return NativeType(name)
    except ValueError:
        return None


def is_native(name: str) -> bool:
    return name in NATIVE_TYPES


def is_scalar(name: str) -> bool:
    entry = NATIVE_TYPES.get(name)
    return entry is not None and entry[0] is TypeCategory.SCALAR
