"""
Visibility resolution.

Decides which fields of a block are active for a given form state. The UI
layer and the parameter builder both call resolve_active_fields, so what a
user sees and what gets enforced come from the same rules.
"""

from typing import Any, Mapping

from blockflow.core.exceptions import SchemaConfigurationError
from blockflow.models.contracts.blocks import BlockSchema, FieldSchema
from blockflow.services.resolution.conditions import evaluate


def resolve_active_fields(schema: BlockSchema, values: Mapping[str, Any]) -> frozenset[str]:
    """
    Compute the set of active field keys.

    Conditions normally reference leaf choice fields (fields with no
    condition of their own), whose values are read as-is. When a condition
    references another conditional field, that field's activity is resolved
    first and an inactive referenced field counts as having no value.

    Args:
        schema: Block schema
        values: Raw (pre-coercion) values keyed by field key

    Returns:
        Frozen set of active field keys

    Raises:
        SchemaConfigurationError: If a condition references an unknown field
            or conditions form a cycle
    """
    fields_by_key = {field.key: field for field in schema.fields}
    active: dict[str, bool] = {}
    visiting: list[str] = []

    def is_active(field: FieldSchema) -> bool:
        if field.key in active:
            return active[field.key]

        condition = field.visibility
        if condition is None:
            active[field.key] = True
            return True

        if field.key in visiting:
            cycle = " -> ".join(visiting[visiting.index(field.key):] + [field.key])
            raise SchemaConfigurationError(
                "Visibility conditions form a cycle",
                block_type=schema.block_type,
                problems=[cycle],
            )

        dependency = fields_by_key.get(condition.on_field)
        if dependency is None:
            raise SchemaConfigurationError(
                "Visibility condition references an unknown field",
                block_type=schema.block_type,
                problems=[f"'{field.key}' depends on missing field '{condition.on_field}'"],
            )

        visiting.append(field.key)
        try:
            dependency_active = is_active(dependency)
        finally:
            visiting.pop()

        result = dependency_active and evaluate(condition, values)
        active[field.key] = result
        return result

    return frozenset(field.key for field in schema.fields if is_active(field))
