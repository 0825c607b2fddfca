"""Exceptions raised while filtering parameter values."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ParameterDescriptor


class ParameterError(Exception):
    """Base class for per-parameter failures.

    Attributes:
        descriptor: The descriptor of the parameter that rejected the value.
    """

    def __init__(self, descriptor: ParameterDescriptor, message: str):
        self.descriptor = descriptor
        super().__init__(message)


class TypeCastingError(ParameterError, TypeError):
    """Raised when a value cannot be reconciled with the declared type.

    Covers type, class, multiplicity and callability mismatches.
    """

    def __init__(self, descriptor: ParameterDescriptor, actual_type: str):
        self.actual_type = actual_type
        super().__init__(descriptor, _casting_message(descriptor, actual_type))


class ValidationError(ParameterError, ValueError):
    """Raised when a validation rule returns False or raises.

    The original exception, if any, is kept in ``cause`` and chained as
    ``__cause__``.
    """

    def __init__(
        self,
        descriptor: ParameterDescriptor,
        rule_name: str,
        cause: BaseException | None = None,
    ):
        self.rule_name = rule_name
        self.cause = cause
        message = f"Parameter {_label(descriptor)} failed validation rule '{rule_name}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(descriptor, message)
        if cause is not None:
            self.__cause__ = cause


def _label(descriptor: ParameterDescriptor) -> str:
    if descriptor.method:
        return f"${descriptor.name} of {descriptor.method}()"
    return f"${descriptor.name}"


def _casting_message(descriptor: ParameterDescriptor, actual_type: str) -> str:
    expected = descriptor.declared_class if descriptor.type == "object" else descriptor.type
    if expected is None:
        expected = "any"
    if descriptor.multiple:
        expected = f"{expected}[]"
    return f"Parameter {_label(descriptor)} expects {expected}, got {actual_type}"
