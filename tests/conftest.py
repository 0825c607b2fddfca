"""
Global pytest configuration and fixtures.
"""

import pytest

from paramguard.descriptor import ParameterMetadata, RuleRegistry


@pytest.fixture
def rules() -> RuleRegistry:
    """A small rule registry covering the rules used across the tests."""
    registry = RuleRegistry()

    @registry.register("min")
    def minimum(value, args):
        return value >= args[0]

    @registry.register("max")
    def maximum(value, args):
        return value <= args[0]

    @registry.register()
    def nonempty(value, args):
        return len(value) > 0

    @registry.register()
    def explode(value, args):
        raise RuntimeError(f"cannot check {value!r}")

    return registry


@pytest.fixture
def metadata():
    """Factory for structural metadata with sensible defaults."""

    def _make(name: str = "value", **kwargs) -> ParameterMetadata:
        kwargs.setdefault("method", "handler")
        return ParameterMetadata(name=name, **kwargs)

    return _make
