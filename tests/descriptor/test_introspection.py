"""Tests for building descriptors from Python signatures."""

import inspect
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Optional

import pytest

from paramguard.descriptor import TypeCastingError, describe_function, metadata_from_parameter


class Point:
    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y


def move(point: Point, steps: int, path: list[Point], tags: Sequence[str] = (), label: Optional[str] = None):
    """Fixture function, never called."""


def configure(anything: Any, items: Sequence, options: Mapping, hook: Callable, tags: set[str]):
    """Fixture function, never called."""


class Service:
    def run(self, target: Point | None, *extra, dry_run=False, **options):
        """Fixture method, never called."""


def param_of(func, name) -> inspect.Parameter:
    return inspect.signature(func).parameters[name]


class TestMetadataFromParameter:
    """Test structural metadata extraction."""

    def test_class_annotation(self):
        metadata = metadata_from_parameter(param_of(move, "point"), move, 0)
        assert metadata.method == "move"
        assert metadata.name == "point"
        assert metadata.class_name == f"{Point.__module__}.Point"
        assert metadata.is_array is False
        assert metadata.is_optional is False

    def test_scalar_annotation_is_not_structural(self):
        metadata = metadata_from_parameter(param_of(move, "steps"), move, 1)
        assert metadata.class_name is None
        assert metadata.is_array is False

    @pytest.mark.parametrize("name", ["path", "tags"])
    def test_sequence_annotations(self, name):
        metadata = metadata_from_parameter(param_of(move, name), move, 2)
        assert metadata.is_array is True
        assert metadata.class_name is None

    def test_default_value(self):
        metadata = metadata_from_parameter(param_of(move, "tags"), move, 3)
        assert metadata.is_optional is True
        assert metadata.default_available is True
        assert metadata.default == ()

    def test_optional_scalar(self):
        metadata = metadata_from_parameter(param_of(move, "label"), move, 4)
        assert metadata.class_name is None
        assert metadata.default_available is True
        assert metadata.default is None


class TestDescribeFunction:
    """Test describing whole signatures."""

    def test_function(self):
        descriptors = describe_function(
            move, {"steps": {"type": "int", "rules": [{"rule": "min", "args": [1]}]}}
        )
        assert [d.name for d in descriptors] == ["point", "steps", "path", "tags", "label"]
        assert [d.position for d in descriptors] == [0, 1, 2, 3, 4]

        point, steps, path, tags, label = descriptors
        assert point.type == "object"
        assert steps.type == "int"
        assert steps.rules[0].rule_name == "min"
        assert path.multiple is True and path.type is None
        assert tags.optional is True
        assert label.type is None

    def test_method_skips_self_and_kwargs(self):
        descriptors = describe_function(Service.run)
        assert [d.name for d in descriptors] == ["target", "extra", "dry_run"]
        target, extra, dry_run = descriptors
        assert target.type == "object"
        assert target.declared_class == f"{Point.__module__}.Point"
        assert extra.multiple is True and extra.optional is True
        assert dry_run.default is False

    def test_bound_method(self):
        descriptors = describe_function(Service().run)
        assert descriptors[0].name == "target"
        assert descriptors[0].position == 0

    def test_describe_then_filter(self):
        point_descriptor = describe_function(move)[0]
        point = Point()
        assert point_descriptor.filter(point) is point
        with pytest.raises(TypeCastingError):
            point_descriptor.filter({"x": 1})
        created = point_descriptor.to_type({"x": 1}, lambda name, value: Point(**value))
        assert created.x == 1


class TestLooseAnnotations:
    """Annotations that name an ABC or no type at all."""

    def test_any_is_untyped(self):
        metadata = metadata_from_parameter(param_of(configure, "anything"), configure, 0)
        assert metadata.class_name is None
        assert metadata.is_array is False

        anything = describe_function(configure)[0]
        assert anything.type is None
        assert anything.filter(5) == 5

    def test_bare_sequence_is_multiple(self):
        items = describe_function(configure)[1]
        assert items.multiple is True
        assert items.declared_class is None
        assert items.filter([1, 2]) == [1, 2]

    def test_bare_mapping_accepts_dict(self):
        options = describe_function(configure)[2]
        assert options.declared_class == "collections.abc.Mapping"
        assert options.filter({"a": 1}) == {"a": 1}
        with pytest.raises(TypeCastingError):
            options.filter([("a", 1)])

    def test_bare_callable_accepts_function(self):
        hook = describe_function(configure)[3]
        assert hook.filter(len) is len

    def test_set_annotation_accepts_set(self):
        tags = describe_function(configure)[4]
        assert tags.multiple is True
        assert tags.filter({"a"}) == ["a"]
        assert sorted(tags.filter(frozenset({"a", "b"}))) == ["a", "b"]
