"""Structural metadata from Python signatures.

Turns ``inspect.Parameter`` objects into :class:`ParameterMetadata` so that
descriptors can be imported straight from a function. Only what the
signature says structurally is reported: whether the parameter takes a
sequence and which class it requires. Scalar annotations such as ``int`` are
left to the documentation, like any other type detail.
"""

import collections.abc
import inspect
import logging
import types
import typing
from collections.abc import Callable, Mapping
from typing import Any

from .core import import_parameter
from .models import ParameterAnnotation, ParameterDescriptor, ParameterMetadata

logger = logging.getLogger(__name__)

_ARRAY_TYPES = (list, tuple, set, frozenset)
_NON_CLASS_TYPES = frozenset({int, float, bool, str, bytes, complex, dict, object, type(None)})
_IMPLICIT_PARAMS = frozenset({"self", "cls"})


def metadata_from_parameter(
    param: inspect.Parameter, func: Callable[..., Any], position: int
) -> ParameterMetadata:
    """Build structural metadata for one parameter of ``func``.

    Args:
        param: Parameter taken from ``inspect.signature(func)``
        func: The declaring function
        position: Zero-based position of the parameter

    Returns:
        Structural metadata for the parameter
    """
    has_default = param.default is not inspect.Parameter.empty
    variadic = param.kind is inspect.Parameter.VAR_POSITIONAL
    annotation = _unwrap_optional(param.annotation)

    is_array = variadic or _is_array_annotation(annotation)
    class_name = None
    if not is_array and _is_class_annotation(annotation):
        class_name = f"{annotation.__module__}.{annotation.__qualname__}"

    return ParameterMetadata(
        method=getattr(func, "__name__", ""),
        name=param.name,
        position=position,
        is_optional=has_default or variadic,
        default_available=has_default,
        default=param.default if has_default else None,
        is_array=is_array,
        class_name=class_name,
    )


def describe_function(
    func: Callable[..., Any],
    annotations: Mapping[str, ParameterAnnotation | Mapping[str, Any]] | None = None,
) -> list[ParameterDescriptor]:
    """Import a descriptor for every parameter of ``func``, in order.

    ``self``/``cls`` and ``**kwargs`` are skipped; ``*args`` is described as
    an optional multiple parameter.

    Args:
        func: Function or method to describe
        annotations: Documentation records keyed by parameter name

    Returns:
        Descriptors ordered by position
    """
    descriptors = []
    position = 0
    for param in _signature(func).parameters.values():
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            continue
        if position == 0 and param.name in _IMPLICIT_PARAMS:
            continue
        metadata = metadata_from_parameter(param, func, position)
        descriptors.append(import_parameter(metadata, annotations))
        position += 1
    return descriptors


def _signature(func: Callable[..., Any]) -> inspect.Signature:
    try:
        return inspect.signature(func, eval_str=True)
    except (NameError, SyntaxError, TypeError) as e:
        # Unresolvable string annotations; fall back to the raw strings
        logger.debug(f"Could not evaluate annotations of {func!r}: {e}")
        return inspect.signature(func)


def _unwrap_optional(annotation: Any) -> Any:
    """Reduce ``X | None`` and ``Optional[X]`` to ``X``."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_array_annotation(annotation: Any) -> bool:
    """Lists, tuples, sets and sequence ABCs, bare or parameterized."""
    if annotation is typing.Any:
        return False
    target = typing.get_origin(annotation) or annotation
    if target in _ARRAY_TYPES:
        return True
    return (
        inspect.isclass(target)
        and issubclass(target, (collections.abc.Sequence, collections.abc.Set))
        and not issubclass(target, (str, bytes, bytearray))
    )


def _is_class_annotation(annotation: Any) -> bool:
    if annotation is inspect.Parameter.empty or annotation is typing.Any:
        return False
    if not inspect.isclass(annotation) or typing.get_origin(annotation) is not None:
        return False
    return annotation not in _NON_CLASS_TYPES
