"""
Operation routing: discriminator value -> backend tool id.
"""

from typing import Any

from blockflow.models.contracts.blocks import BlockSchema
from blockflow.models.contracts.resolution import UnresolvedOperationError
from blockflow.services.resolution.values import as_text


def operation_key(discriminator_value: Any) -> str:
    """
    Text key used to look a discriminator value up in operation_to_tool.

    Number and boolean discriminators map through their form text, so 1,
    1.0 and "1" all select the "1" entry and True selects "true".
    """
    if isinstance(discriminator_value, float) and discriminator_value.is_integer():
        discriminator_value = int(discriminator_value)
    return as_text(discriminator_value).strip()


def resolve_tool(schema: BlockSchema, discriminator_value: Any) -> str | UnresolvedOperationError:
    """
    Pick the backend tool for a block invocation.

    Args:
        schema: Block schema
        discriminator_value: Coerced value of schema.operation_field. Ignored
            for blocks without a discriminator.

    Returns:
        Tool id, or UnresolvedOperationError when the value has no mapping
        and the schema declares no fallback tool
    """
    if schema.operation_field is None:
        if schema.tool_id is None:
            return UnresolvedOperationError(
                message=f"Block '{schema.block_type}' declares no tool",
                field_keys=(),
            )
        return schema.tool_id

    lookup = operation_key(discriminator_value)
    if lookup in schema.operation_to_tool:
        return schema.operation_to_tool[lookup]

    if schema.fallback_tool is not None:
        return schema.fallback_tool

    field = schema.operation
    label = field.display_name if field else schema.operation_field
    return UnresolvedOperationError(
        message=f"{label}: unknown operation '{discriminator_value}'",
        field_keys=(schema.operation_field,),
        value=discriminator_value,
    )
