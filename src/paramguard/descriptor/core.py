"""Core descriptor logic: reconciliation and per-call filtering."""

import logging
from collections.abc import Mapping
from typing import Any, cast

from pydantic import ValidationError as PydanticValidationError

from .converters import TypeCaster
from .errors import TypeCastingError, ValidationError
from .models import ParameterAnnotation, ParameterDescriptor, ParameterMetadata
from .rules import RuleContext, resolve_rule
from .types import OBJECT_TYPE, is_native

logger = logging.getLogger(__name__)

UNION_SEPARATOR = "|"
ARRAY_SUFFIX = "[]"
NAMESPACE_SEPARATOR = "."
MIXED_TYPE = "mixed"


def import_parameter(
    metadata: ParameterMetadata,
    annotations: Mapping[str, ParameterAnnotation | Mapping[str, Any]] | None = None,
) -> ParameterDescriptor:
    """Build a descriptor from structural metadata and documentation.

    Structural metadata wins whenever it says anything about the type: a
    declared sequence makes the parameter untyped and multiple, a declared
    class makes it an object parameter. Only otherwise is the documented type
    string consulted. Malformed documentation never raises; the parameter
    just ends up untyped.

    Args:
        metadata: Structural metadata of the parameter
        annotations: Documentation records keyed by parameter name

    Returns:
        The reconciled descriptor
    """
    annotation = _annotation_for(metadata.name, annotations)

    multiple = False
    declared_type: str | None = None
    declared_class: str | None = None

    if metadata.is_array:
        multiple = True
    elif metadata.class_name:
        declared_type = OBJECT_TYPE
        declared_class = metadata.class_name
    elif annotation is not None and annotation.type is not None:
        raw_type = annotation.type.strip()
        if UNION_SEPARATOR in raw_type:
            pass  # unions stay untyped
        elif raw_type == MIXED_TYPE:
            # Unreachable for a literal "mixed"
            if ARRAY_SUFFIX in raw_type:
                multiple = True
        else:
            type_name = raw_type
            if type_name.endswith(ARRAY_SUFFIX):
                type_name = type_name[: -len(ARRAY_SUFFIX)]
                multiple = True
            if is_native(type_name):
                declared_type = type_name
            else:
                class_name = type_name.lstrip(NAMESPACE_SEPARATOR)
                if class_name:
                    declared_type = OBJECT_TYPE
                    declared_class = class_name

    descriptor = ParameterDescriptor(
        method=metadata.method,
        name=metadata.name,
        position=metadata.position,
        description=annotation.description if annotation is not None else "",
        rules=annotation.rules if annotation is not None else (),
        multiple=multiple,
        type=declared_type,
        declared_class=declared_class,
        optional=metadata.is_optional,
        default=metadata.default if metadata.default_available else None,
    )
    logger.debug(
        f"Imported parameter '{descriptor.name}' of '{descriptor.method}': "
        f"type={descriptor.type} class={descriptor.declared_class} multiple={descriptor.multiple}"
    )
    return descriptor


def _annotation_for(
    name: str, annotations: Mapping[str, ParameterAnnotation | Mapping[str, Any]] | None
) -> ParameterAnnotation | None:
    if not annotations or name not in annotations:
        return None
    entry = annotations[name]
    if isinstance(entry, ParameterAnnotation):
        return entry
    if not isinstance(entry, Mapping):
        logger.debug(f"Ignoring annotation of '{name}': expected a mapping, got {type(entry).__name__}")
        return None
    try:
        return ParameterAnnotation.model_validate(dict(entry))
    except PydanticValidationError as e:
        logger.debug(f"Malformed annotation of '{name}', keeping its valid fields: {e}")
        return _salvage_annotation(entry)


def _salvage_annotation(entry: Mapping[str, Any]) -> ParameterAnnotation:
    """Keep each field of a malformed annotation that validates on its own."""
    fields: dict[str, Any] = {}
    for key, value in entry.items():
        try:
            partial = ParameterAnnotation.model_validate({key: value})
        except PydanticValidationError:
            continue
        for field, info in ParameterAnnotation.model_fields.items():
            if getattr(partial, field) != info.default:
                fields[field] = getattr(partial, field)
    return ParameterAnnotation(**fields)


def filter_value(
    descriptor: ParameterDescriptor, value: Any, context: RuleContext | None = None
) -> Any:
    """Coerce a call-time value to the descriptor's shape and validate it.

    Validation only runs when ``context`` is given; rules run in declaration
    order and the first failure stops evaluation.

    Args:
        descriptor: Descriptor of the parameter
        value: Value passed at call time
        context: Object or mapping supplying the rule implementations

    Returns:
        The coerced value. Sequences come back as new lists.

    Raises:
        TypeCastingError: If the value cannot take the declared shape
        ValidationError: If a rule returns False or raises
    """
    if descriptor.multiple:
        if not TypeCaster.is_sequence(value):
            raise TypeCastingError(descriptor, TypeCaster.native_type_of(value))
        value = TypeCaster.as_list(value)

    if descriptor.type is not None:
        if descriptor.type == TypeCaster.native_type_of(value):
            if descriptor.type == OBJECT_TYPE:
                _check_instances(descriptor, value)
        elif descriptor.multiple:
            value = [TypeCaster.to_type(descriptor, item) for item in value]
        else:
            value = TypeCaster.to_type(descriptor, value)

    if descriptor.rules and context is not None:
        items = value if descriptor.multiple else [value]
        for rule in descriptor.rules:
            for item in items:
                _apply_rule(descriptor, context, rule.rule_name, rule.args, item)

    return value


def _check_instances(descriptor: ParameterDescriptor, value: Any) -> None:
    class_name = cast(str, descriptor.declared_class)
    items = value if descriptor.multiple else [value]
    for item in items:
        if not TypeCaster.is_instance_of(item, class_name):
            raise TypeCastingError(descriptor, TypeCaster.native_type_of(item))


def _apply_rule(
    descriptor: ParameterDescriptor,
    context: RuleContext,
    rule_name: str,
    args: tuple[Any, ...],
    item: Any,
) -> None:
    try:
        result = resolve_rule(context, rule_name)(item, args)
    except Exception as e:
        logger.debug(f"Rule '{rule_name}' raised for parameter '{descriptor.name}': {e}")
        raise ValidationError(descriptor, rule_name, cause=e) from e
    if result is False:
        raise ValidationError(descriptor, rule_name)
