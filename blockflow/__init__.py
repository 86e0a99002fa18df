"""
Blockflow - resolution engine for declarative workflow block schemas.

Usage:
    from blockflow import BlockRegistry, ResolutionEngine

    registry = BlockRegistry()
    registry.load_directory("blocks/")
    engine = ResolutionEngine(registry)

    result = engine.resolve("slack", {"operation": "send", "channel": "C123", "text": "hi"})
    if isinstance(result, list):
        ...  # every ResolutionError found
    else:
        invoke_tool(result.tool_id, result.parameters)
"""

from blockflow.core.exceptions import BlockNotFoundError, SchemaConfigurationError
from blockflow.models import (
    BlockSchema,
    CoercionError,
    CoercionResult,
    FieldSchema,
    FieldValueType,
    MissingRequiredFieldError,
    NumberKind,
    ResolutionError,
    ResolvedParameters,
    UnresolvedOperationError,
    VisibilityCondition,
)
from blockflow.services.block_registry import BlockRegistry
from blockflow.services.resolution import (
    ResolutionEngine,
    coerce,
    evaluate,
    merge_aliases,
    resolve,
    resolve_active_fields,
    resolve_tool,
)
from blockflow.services.schema_validation import validate_block_schema

__version__ = "0.1.0"

__all__ = [
    "BlockNotFoundError",
    "BlockRegistry",
    "BlockSchema",
    "CoercionError",
    "CoercionResult",
    "FieldSchema",
    "FieldValueType",
    "MissingRequiredFieldError",
    "NumberKind",
    "ResolutionEngine",
    "ResolutionError",
    "ResolvedParameters",
    "SchemaConfigurationError",
    "UnresolvedOperationError",
    "VisibilityCondition",
    "coerce",
    "evaluate",
    "merge_aliases",
    "resolve",
    "resolve_active_fields",
    "resolve_tool",
    "validate_block_schema",
]
