"""Pydantic models for paramguard descriptors.

This module contains the model definitions for the two metadata sources a
descriptor is reconciled from (structural metadata and documentation
annotations) and for the descriptor itself.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import Field, model_validator

from paramguard.models import GuardBaseModel

from .types import DeclaredType

if TYPE_CHECKING:
    from .rules import RuleContext


class ValidationRule(GuardBaseModel):
    """One named check plus the static arguments supplied to it.

    Attributes:
        rule_name: Name of the rule method looked up on the rule context.
        args: Arguments passed to the rule alongside the value.

    Example:
        >>> rule = ValidationRule(rule_name="min", args=[5])
        >>> rule.args
        (5,)
    """

    rule_name: str = Field(min_length=1)
    args: tuple[Any, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def accept_short_keys(cls, values: Any) -> Any:
        """Accept ``rule``/``name`` as aliases of ``rule_name`` in loaded documents."""
        if isinstance(values, dict) and "rule_name" not in values:
            values = dict(values)
            for key in ("rule", "name"):
                if key in values:
                    values["rule_name"] = values.pop(key)
                    break
        return values


class ParameterAnnotation(GuardBaseModel):
    """Documentation record for one parameter.

    Produced by a docstring parser or loaded from a document. The type string
    is free-form: ``int``, ``int[]``, ``int|string``, ``mixed`` or a class
    name such as ``.shapes.Circle``.

    Attributes:
        description: Free text, informational only.
        type: Raw type string as written in the documentation.
        rules: Validation rules in declaration order.
    """

    description: str = ""
    type: str | None = None
    rules: tuple[ValidationRule, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def normalize_rules(cls, values: Any) -> Any:
        """Accept ``desc``/``verify`` keys and rules given as a name -> args mapping."""
        if not isinstance(values, dict):
            return values
        values = dict(values)
        if "desc" in values and "description" not in values:
            values["description"] = values.pop("desc")
        if "verify" in values and "rules" not in values:
            values["rules"] = values.pop("verify")
        rules = values.get("rules")
        if isinstance(rules, Mapping):
            values["rules"] = [_rule_entry(name, spec) for name, spec in rules.items()]
        elif isinstance(rules, (list, tuple)):
            # Bare rule names carry no arguments
            values["rules"] = [{"rule_name": r} if isinstance(r, str) else r for r in rules]
        elif rules is None:
            values["rules"] = ()
        return values


def _rule_entry(name: str, spec: Any) -> dict[str, Any]:
    if isinstance(spec, Mapping):
        return {"rule_name": name, "args": spec.get("args", ())}
    if spec is None:
        return {"rule_name": name}
    if isinstance(spec, (list, tuple)):
        return {"rule_name": name, "args": spec}
    return {"rule_name": name, "args": (spec,)}


class ParameterMetadata(GuardBaseModel):
    """Structural metadata for one formal parameter.

    This is what signature introspection can tell about a parameter without
    reading any documentation.

    Attributes:
        method: Name of the declaring function.
        name: Parameter name.
        position: Zero-based position in the argument list.
        is_optional: Whether the parameter may be omitted.
        default_available: Whether ``default`` holds a real default value.
        default: The default value, if available.
        is_array: Whether the signature declares a sequence type.
        class_name: Dotted name of the declared class, if any.
    """

    method: str = ""
    name: str
    position: int = Field(default=0, ge=0)
    is_optional: bool = False
    default_available: bool = False
    default: Any = None
    is_array: bool = False
    class_name: str | None = None


class ParameterDescriptor(GuardBaseModel):
    """Canonical, immutable record of one formal parameter.

    Built once per parameter by :func:`paramguard.descriptor.import_parameter`
    and read concurrently afterwards.

    Attributes:
        method: Name of the declaring function.
        name: Parameter name.
        position: Zero-based position in the argument list.
        description: Documentation text.
        rules: Validation rules, executed in order.
        multiple: The value must be a sequence of the declared element type.
        type: Declared native type name, ``"object"``, or None for any type.
        declared_class: Required class name when ``type`` is ``"object"``.
        optional: Whether the parameter may be omitted.
        default: Default value copied from structural metadata.

    Example:
        >>> descriptor = ParameterDescriptor(name="count", type="int")
        >>> descriptor.filter("42")
        42
    """

    method: str = ""
    name: str
    position: int = Field(default=0, ge=0)
    description: str = ""
    rules: tuple[ValidationRule, ...] = ()
    multiple: bool = False
    type: DeclaredType | None = None
    declared_class: str | None = None
    optional: bool = False
    default: Any = None

    @model_validator(mode="after")
    def check_declared_class(self) -> ParameterDescriptor:
        """An object type needs a class name to check instances against."""
        if self.type == "object" and not self.declared_class:
            raise ValueError("declared_class is required when type is 'object'")
        return self

    @classmethod
    def from_metadata(
        cls,
        metadata: ParameterMetadata,
        annotations: Mapping[str, ParameterAnnotation | Mapping[str, Any]] | None = None,
    ) -> ParameterDescriptor:
        """Reconcile structural metadata and documentation into a descriptor."""
        from .core import import_parameter

        return import_parameter(metadata, annotations)

    def filter(self, value: Any, context: RuleContext | None = None) -> Any:
        """Coerce ``value`` to the declared shape and run the validation rules."""
        from .core import filter_value

        return filter_value(self, value, context)

    def to_type(self, value: Any, creator: Callable[[str, Any], Any] | None = None) -> Any:
        """Coerce ``value`` to the declared type without running rules."""
        from .converters import TypeCaster

        return TypeCaster.to_type(self, value, creator)
