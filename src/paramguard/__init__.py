"""paramguard - parameter descriptors for dynamic invocation.

Frameworks that call functions dynamically (RPC dispatchers, CLI binders,
dependency injectors) only know a parameter's type through introspection
and documentation. paramguard reconciles the two into an immutable
descriptor and uses it on every call to coerce and validate the value
before the call happens.

See `paramguard.descriptor` for the API.
"""

from paramguard.descriptor import (
    ParameterDescriptor,
    TypeCastingError,
    ValidationError,
    describe_function,
    filter_value,
    import_parameter,
)
from paramguard.version import PACKAGE_VERSION as __version__

__all__ = [
    "ParameterDescriptor",
    "TypeCastingError",
    "ValidationError",
    "describe_function",
    "filter_value",
    "import_parameter",
    "__version__",
]
