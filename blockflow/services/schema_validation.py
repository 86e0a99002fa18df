"""
Block Schema Validation Service

Static checks run when a block is registered. They catch authoring mistakes
(dangling conditions, unmapped operations, condition cycles) before any user
input reaches the engine.
"""

import logging

from blockflow.models.contracts.blocks import BlockSchema, FieldSchema
from blockflow.services.resolution.coercion import coerce
from blockflow.services.resolution.routing import operation_key

logger = logging.getLogger(__name__)


def _find_condition_cycles(schema: BlockSchema) -> list[str]:
    """
    Find cycles in the visibility dependency graph.

    Each conditional field has exactly one outgoing edge (to the field its
    condition reads), so following edges from every start node finds all cycles.
    """
    edges = {
        field.key: field.visibility.on_field
        for field in schema.fields
        if field.visibility is not None and field.visibility.on_field != field.key
    }

    cycles: list[str] = []
    seen_cycles: set[frozenset[str]] = set()
    for start in edges:
        path: list[str] = []
        node: str | None = start
        while node is not None and node in edges and node not in path:
            path.append(node)
            node = edges[node]
        if node is not None and node in path:
            members = path[path.index(node):]
            key = frozenset(members)
            if key not in seen_cycles:
                seen_cycles.add(key)
                cycles.append(" -> ".join(members + [node]))
    return cycles


def _validate_operation(schema: BlockSchema) -> list[str]:
    problems: list[str] = []

    if schema.operation_field is None:
        if not schema.tool_id:
            problems.append("blocks without an operation_field must declare tool_id")
        if schema.operation_to_tool:
            problems.append("operation_to_tool is set but no operation_field is declared")
        return problems

    field = schema.operation
    if field is None:
        problems.append(f"operation_field '{schema.operation_field}' is not a declared field")
        return problems

    if field.visibility is not None:
        problems.append(f"operation field '{field.key}' must not have a visibility condition")

    if not schema.operation_to_tool and schema.fallback_tool is None:
        problems.append("operation_to_tool is empty and no fallback_tool is declared")

    # A mapped value must survive coercion and come back as the same key
    untyped = field.model_copy(update={"options": None})
    for value in schema.operation_to_tool:
        result = coerce(untyped, value)
        if not result.ok or operation_key(result.value) != value:
            problems.append(
                f"operation '{value}' can never be selected by {field.value_type.value} field '{field.key}'"
            )

    if field.options is not None:
        options = set(field.options)
        for value in schema.operation_to_tool:
            if value not in options:
                problems.append(
                    f"operation '{value}' is mapped to a tool but is not an option of '{field.key}'"
                )
        if schema.fallback_tool is None:
            for option in field.options:
                if option not in schema.operation_to_tool:
                    problems.append(
                        f"option '{option}' of '{field.key}' has no mapped tool and no fallback_tool is declared"
                    )

    return problems


def _validate_field(schema: BlockSchema, field: FieldSchema, field_keys: set[str]) -> list[str]:
    problems: list[str] = []

    condition = field.visibility
    if condition is not None:
        if condition.on_field == field.key:
            problems.append(f"field '{field.key}' has a visibility condition on itself")
        elif condition.on_field not in field_keys:
            problems.append(
                f"field '{field.key}' has a visibility condition on unknown field '{condition.on_field}'"
            )

    if (
        field.options is not None
        and field.default_value is not None
        and not callable(field.default_value)
        and not coerce(field, field.default_value).ok
    ):
        problems.append(
            f"default '{field.default_value}' of field '{field.key}' is not one of its options"
        )

    if field.canonical_key and field.canonical_key in field_keys:
        owner = schema.get_field(field.canonical_key)
        if owner is not None and owner.canonical_key not in (None, field.canonical_key):
            problems.append(
                f"canonical key '{field.canonical_key}' of field '{field.key}' collides with "
                f"field '{owner.key}' which belongs to group '{owner.canonical_key}'"
            )

    return problems


def validate_block_schema(schema: BlockSchema) -> list[str]:
    """
    Check a block schema for internal consistency.

    Args:
        schema: Block schema to check

    Returns:
        Human-readable description of every problem found (empty if valid)
    """
    field_keys = set(schema.field_keys)
    problems = _validate_operation(schema)

    for field in schema.fields:
        problems.extend(_validate_field(schema, field, field_keys))

    for cycle in _find_condition_cycles(schema):
        problems.append(f"visibility conditions form a cycle: {cycle}")

    if problems:
        logger.debug(f"Block '{schema.block_type}' failed validation with {len(problems)} problem(s)")

    return problems
