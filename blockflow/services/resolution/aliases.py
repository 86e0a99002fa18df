"""
Canonical parameter merging.

UIs often offer a "pick from list" control and a "type the ID" fallback for
the same backend parameter. Both fields declare the same canonical key; the
first one in schema order with a value wins.
"""

from typing import Any, Collection, Mapping

from blockflow.models.contracts.blocks import BlockSchema, FieldSchema
from blockflow.services.resolution.values import is_empty


def group_fields(
    schema: BlockSchema, active_fields: Collection[str]
) -> dict[str, list[FieldSchema]]:
    """
    Group active fields by output parameter name, keeping schema order.

    A field without a canonical key forms its own group under its key, and
    joins an alias group whose canonical key equals that key.
    """
    groups: dict[str, list[FieldSchema]] = {}
    for field in schema.fields:
        if field.key not in active_fields:
            continue
        groups.setdefault(field.group_key, []).append(field)
    return groups


def merge_aliases(
    schema: BlockSchema,
    active_fields: Collection[str],
    values: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Collapse alias fields into one value per output parameter.

    Args:
        schema: Block schema (declaration order sets alias priority)
        active_fields: Keys of currently active fields
        values: Resolved values keyed by field key. Fields missing from this
            mapping (not supplied or failed coercion) are skipped.

    Returns:
        Output parameter name -> winning value. Groups with no usable value
        are omitted.
    """
    merged: dict[str, Any] = {}
    for group_key, members in group_fields(schema, active_fields).items():
        for field in members:
            if field.key not in values:
                continue
            value = values[field.key]
            if is_empty(value):
                continue
            merged[group_key] = value
            break
    return merged
