"""Type conversion utilities for paramguard descriptors."""

from __future__ import annotations

import inspect
import io
import logging
import math
import re
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

import numpy as np
import pandas as pd

from .errors import TypeCastingError
from .types import OBJECT_TYPE, STRUCTURAL_TYPES

if TYPE_CHECKING:
    from .models import ParameterDescriptor

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")
_NUMERIC_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")


class TypeCaster:
    """Runtime type detection and coercion to a descriptor's declared type."""

    @staticmethod
    def native_type_of(value: Any) -> str:
        """Map a runtime value to its native type name (or ``"object"``)."""
        if value is None:
            return "null"
        if isinstance(value, (bool, np.bool_)):
            return "bool"
        if isinstance(value, (int, np.integer)):
            return "int"
        if isinstance(value, (float, np.floating)):
            return "float"
        if isinstance(value, str):
            return "string"
        if isinstance(value, (list, tuple, set, frozenset, dict, np.ndarray, pd.Series)):
            return "array"
        if isinstance(value, io.IOBase):
            return "resource"
        if inspect.isroutine(value):
            return "callable"
        return OBJECT_TYPE

    @staticmethod
    def is_sequence(value: Any) -> bool:
        """Whether ``value`` can stand for a list of elements.

        Mappings are not sequences, even though they count as ``"array"``.
        """
        return isinstance(value, (list, tuple, set, frozenset, np.ndarray, pd.Series))

    @staticmethod
    def as_list(value: Any) -> list[Any]:
        """Copy a sequence into a plain list."""
        if isinstance(value, (np.ndarray, pd.Series)):
            return value.tolist()
        return list(value)

    @staticmethod
    def is_numeric(value: Any) -> bool:
        """Whether ``value`` is a number or a string holding a decimal numeral."""
        if isinstance(value, (bool, np.bool_)):
            return False
        if isinstance(value, (int, float, np.integer, np.floating)):
            return True
        if isinstance(value, str):
            return _NUMERIC_RE.match(value) is not None
        return False

    @staticmethod
    def resolve_class(class_name: str) -> type | None:
        """Find an already imported class by dotted name.

        Only modules present in ``sys.modules`` are searched; nothing is
        imported. Returns None for bare names and unknown modules.
        """
        parts = class_name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module = sys.modules.get(".".join(parts[:split]))
            if module is None:
                continue
            target: Any = module
            for attr in parts[split:]:
                target = getattr(target, attr, None)
            return target if inspect.isclass(target) else None
        return None

    @staticmethod
    def is_instance_of(value: Any, class_name: str) -> bool:
        """Check ``value`` against a class given by dotted or bare name.

        A dotted name that resolves to a loaded class is checked with
        ``isinstance``, so ABC registrations count. Otherwise the value's MRO
        (without ``object``) is matched by name: dotted names against the full
        ``module.qualname`` or a trailing part of it, bare names against the
        qualname.
        """
        klass = TypeCaster.resolve_class(class_name)
        if klass is not None:
            try:
                return isinstance(value, klass)
            except TypeError:
                # Classes such as typing.Any refuse isinstance; match by name
                logger.debug(f"Cannot isinstance-check against {class_name}")

        dotted = "." in class_name
        suffix = "." + class_name
        for base in type(value).__mro__[:-1]:
            if not dotted:
                if base.__qualname__ == class_name:
                    return True
                continue
            qualified = f"{base.__module__}.{base.__qualname__}"
            if qualified == class_name or qualified.endswith(suffix):
                return True
        return False

    @staticmethod
    def to_type(
        descriptor: ParameterDescriptor,
        value: Any,
        creator: Callable[[str, Any], Any] | None = None,
    ) -> Any:
        """Coerce a single value to the descriptor's declared type.

        Args:
            descriptor: Descriptor holding the declared type and class
            value: Value to coerce
            creator: Optional factory ``(class_name, value) -> instance`` used
                when an object is expected but ``value`` is not one

        Returns:
            The coerced value

        Raises:
            TypeCastingError: If the value cannot take the declared type
        """
        declared = descriptor.type
        actual = TypeCaster.native_type_of(value)

        if declared == "callable":
            if not callable(value):
                raise TypeCastingError(descriptor, actual)
            return value

        if declared == OBJECT_TYPE:
            class_name = cast(str, descriptor.declared_class)
            if TypeCaster.is_instance_of(value, class_name):
                return value
            if creator is not None:
                logger.debug(f"Creating {class_name} for parameter '{descriptor.name}' from {actual}")
                return creator(class_name, value)
            raise TypeCastingError(descriptor, actual)

        if declared is None or declared == actual:
            return value

        if actual in STRUCTURAL_TYPES:
            raise TypeCastingError(descriptor, actual)

        if declared == "int":
            if not TypeCaster.is_numeric(value):
                raise TypeCastingError(descriptor, actual)
            if isinstance(value, str) and _INTEGER_RE.match(value):
                return int(value)
            number = float(value)
            if not math.isfinite(number):
                raise TypeCastingError(descriptor, actual)
            return int(number)

        if declared == "float":
            if not TypeCaster.is_numeric(value):
                raise TypeCastingError(descriptor, actual)
            return float(value)

        if declared == "bool":
            # Plain truthiness: any non-empty string, "false" included, is True
            return bool(value)

        if declared == "string":
            return "" if value is None else str(value)

        if declared == "null":
            return None

        if declared == "array":
            return [] if value is None else [value]

        # Nothing converts into a resource handle
        raise TypeCastingError(descriptor, actual)
