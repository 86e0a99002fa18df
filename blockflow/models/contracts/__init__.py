"""
Pydantic and dataclass contracts for block schemas and resolution results.
"""

from blockflow.models.contracts.blocks import (
    BlockSchema,
    FieldSchema,
    RawValue,
    VisibilityCondition,
)
from blockflow.models.contracts.resolution import (
    CoercionError,
    CoercionResult,
    MissingRequiredFieldError,
    ResolutionError,
    ResolvedParameters,
    UnresolvedOperationError,
)

__all__ = [
    "BlockSchema",
    "FieldSchema",
    "RawValue",
    "VisibilityCondition",
    "CoercionError",
    "CoercionResult",
    "MissingRequiredFieldError",
    "ResolutionError",
    "ResolvedParameters",
    "UnresolvedOperationError",
]
