"""Base Pydantic models for paramguard.

This module provides the base model class that all paramguard models inherit from.
It establishes consistent configuration across all models including:

- Strict field validation (no extra fields allowed)
- Immutable instances so descriptors can be shared between threads

Example:
    >>> from paramguard.models import GuardBaseModel
    >>>
    >>> class Point(GuardBaseModel):
    ...     x: int
    ...     y: int = 0
    >>>
    >>> Point(x=1).model_dump()
    {'x': 1, 'y': 0}
"""

from pydantic import BaseModel, ConfigDict


class GuardBaseModel(BaseModel):
    """Base model for all paramguard Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Instances cannot be mutated after construction
    - arbitrary_types_allowed: Defaults may hold any Python object
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)
