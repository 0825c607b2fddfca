"""Validation rule contexts.

A rule context supplies the implementations of the named rules listed on a
descriptor. Any object exposing rule methods by name works; ``RuleRegistry``
is an explicit alternative that keeps rules in a mapping.

Example:
    >>> rules = RuleRegistry()
    >>>
    >>> @rules.register("min")
    ... def minimum(value, args):
    ...     return value >= args[0]
    >>>
    >>> rules["min"](7, (5,))
    True
"""

from collections.abc import Callable, Iterator, Mapping
from typing import Any, TypeAlias

# Called as rule(value, args); fails by returning False or raising
RuleCallable: TypeAlias = Callable[[Any, tuple[Any, ...]], Any]

# A Mapping of rule names, or any object with rule methods
RuleContext: TypeAlias = Any


class RuleRegistry(Mapping[str, RuleCallable]):
    """Explicit name -> rule mapping usable as a rule context."""

    def __init__(self, rules: Mapping[str, RuleCallable] | None = None):
        self._rules: dict[str, RuleCallable] = dict(rules or {})

    def register(self, name: str | None = None) -> Callable[[RuleCallable], RuleCallable]:
        """Decorator registering a rule under ``name`` (defaults to the function name)."""

        def decorator(func: RuleCallable) -> RuleCallable:
            self._rules[name or func.__name__] = func
            return func

        return decorator

    def add(self, name: str, rule: RuleCallable) -> None:
        self._rules[name] = rule

    def __getitem__(self, name: str) -> RuleCallable:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


def resolve_rule(context: Any, rule_name: str) -> RuleCallable:
    """Find the rule called ``rule_name`` on a context.

    Mappings are looked up by key, other objects by attribute.

    Raises:
        KeyError: If a mapping context has no such rule
        AttributeError: If an object context has no such method
        TypeError: If the attribute found is not callable
    """
    if isinstance(context, Mapping):
        rule = context[rule_name]
    else:
        rule = getattr(context, rule_name)
    if not callable(rule):
        raise TypeError(f"Rule '{rule_name}' is not callable")
    return rule
