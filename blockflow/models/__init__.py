"""
Blockflow Models

Contracts (schemas and results):
    from blockflow.models import BlockSchema, FieldSchema
    from blockflow.models.contracts.blocks import BlockSchema  # Granular access

Enums:
    from blockflow.models import FieldValueType
    from blockflow.models.enums import FieldValueType
"""

from blockflow.models.contracts import (
    BlockSchema,
    CoercionError,
    CoercionResult,
    FieldSchema,
    MissingRequiredFieldError,
    RawValue,
    ResolutionError,
    ResolvedParameters,
    UnresolvedOperationError,
    VisibilityCondition,
)
from blockflow.models.enums import FieldValueType, NumberKind, ResolutionErrorCode

__all__ = [
    "BlockSchema",
    "CoercionError",
    "CoercionResult",
    "FieldSchema",
    "MissingRequiredFieldError",
    "RawValue",
    "ResolutionError",
    "ResolvedParameters",
    "UnresolvedOperationError",
    "VisibilityCondition",
    "FieldValueType",
    "NumberKind",
    "ResolutionErrorCode",
]
