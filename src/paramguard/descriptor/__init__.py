"""paramguard descriptors - parameter type reconciliation, coercion and validation.

A ``ParameterDescriptor`` is built once per formal parameter from two
metadata sources and then used on every call to make the passed value
type-safe before the call happens:

- Structural metadata: name, position, optionality, default, whether the
  signature declares a sequence or a class
- Documentation annotations: description, a free-form type string
  (``int``, ``int[]``, ``int|string``, ``mixed``, ``.pkg.Class``) and an
  ordered list of named validation rules

## Key Components

### Construction
- `import_parameter`: Reconcile metadata and annotations into a descriptor
- `describe_function`: Import descriptors for every parameter of a function
- `load_annotations`: Read annotations from YAML or JSON

### Per-call operations
- `filter_value`: Multiplicity check, type coercion, then validation rules
- `TypeCaster.to_type`: Coercion alone, with an optional object creator

### Errors
- `TypeCastingError`: The value cannot take the declared shape
- `ValidationError`: A rule returned False or raised

## Quick Example

```python
from paramguard.descriptor import ParameterMetadata, RuleRegistry, import_parameter

descriptor = import_parameter(
    ParameterMetadata(method="fetch", name="ids", position=0),
    {"ids": {"type": "int[]", "rules": [{"rule": "min", "args": [1]}]}},
)

rules = RuleRegistry()

@rules.register("min")
def minimum(value, args):
    return value >= args[0]

descriptor.filter([1, "2", 3.0], rules)
# Returns: [1, 2, 3]
```
"""

from .converters import TypeCaster
from .core import filter_value, import_parameter
from .errors import ParameterError, TypeCastingError, ValidationError
from .introspection import describe_function, metadata_from_parameter
from .loaders import load_annotations, load_annotations_from_file
from .models import ParameterAnnotation, ParameterDescriptor, ParameterMetadata, ValidationRule
from .rules import RuleCallable, RuleContext, RuleRegistry, resolve_rule
from .types import NATIVE_TYPES, OBJECT_TYPE, NativeType, TypeCategory

__all__ = [
    # Types
    "NativeType",
    "TypeCategory",
    "NATIVE_TYPES",
    "OBJECT_TYPE",
    # Models
    "ValidationRule",
    "ParameterAnnotation",
    "ParameterMetadata",
    "ParameterDescriptor",
    # Operations
    "import_parameter",
    "filter_value",
    "TypeCaster",
    "describe_function",
    "metadata_from_parameter",
    "load_annotations",
    "load_annotations_from_file",
    # Rule contexts
    "RuleCallable",
    "RuleContext",
    "RuleRegistry",
    "resolve_rule",
    # Errors
    "ParameterError",
    "TypeCastingError",
    "ValidationError",
]
