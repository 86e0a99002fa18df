"""
Parameter Builder

Turns a block schema plus a raw input map into a concrete tool call.

Pipeline:
1. Apply defaults and manual (canonical key) inputs to get per-field raw values
2. Coerce and route the discriminator; failures here stop the pipeline
3. Resolve visibility from raw values
4. Coerce every active field, collecting all failures
5. Merge alias fields into one value per output parameter
6. Check required fields (one error per missing parameter)
7. Return every error together, or the ResolvedParameters
"""

import copy
import logging
from typing import Any, Mapping

from blockflow.models.contracts.blocks import BlockSchema, FieldSchema, RawValue
from blockflow.models.contracts.resolution import (
    MissingRequiredFieldError,
    ResolutionError,
    ResolvedParameters,
)
from blockflow.services.resolution.aliases import group_fields, merge_aliases
from blockflow.services.resolution.coercion import coerce
from blockflow.services.resolution.routing import resolve_tool
from blockflow.services.resolution.values import is_empty
from blockflow.services.resolution.visibility import resolve_active_fields

logger = logging.getLogger(__name__)


def collect_raw_values(schema: BlockSchema, raw_inputs: Mapping[str, RawValue]) -> dict[str, Any]:
    """
    Build the raw value of every field for one resolution.

    A field takes its own input when present, otherwise an input keyed by its
    canonical key (manual entry submitted under the logical parameter name),
    otherwise its default. Inputs matching no field are dropped.
    """
    field_keys = set(schema.field_keys)
    values: dict[str, Any] = {}

    for field in schema.fields:
        raw = raw_inputs.get(field.key)
        if raw is None and field.canonical_key and field.canonical_key not in field_keys:
            raw = raw_inputs.get(field.canonical_key)
        if raw is None and field.default_value is not None:
            raw = field.get_default()
        if raw is not None:
            values[field.key] = copy.deepcopy(raw) if isinstance(raw, (dict, list)) else raw

    canonical_keys = {field.canonical_key for field in schema.fields if field.canonical_key}
    unknown = set(raw_inputs) - field_keys - canonical_keys
    if unknown:
        logger.debug(
            f"Ignoring inputs with no matching field in block '{schema.block_type}': "
            f"{', '.join(sorted(unknown))}"
        )

    return values


def _resolve_discriminator(
    schema: BlockSchema, raw_values: Mapping[str, Any]
) -> tuple[Any, str | None, list[ResolutionError]]:
    """Coerce the operation field and route it. Returns (value, tool_id, errors)."""
    field = schema.operation
    if field is None:
        return None, None, []

    raw = raw_values.get(field.key)
    if is_empty(raw):
        return None, None, [
            MissingRequiredFieldError(
                message=f"{field.display_name}: an operation must be selected",
                field_keys=(field.key,),
            )
        ]

    # Unknown operations are reported by the router, not as option mismatches
    result = coerce(field.model_copy(update={"options": None}), raw)
    if not result.ok:
        return None, None, [result.error]

    # The payload carries the value the router matched, not the padded input
    value = result.value.strip() if isinstance(result.value, str) else result.value
    tool = resolve_tool(schema, value)
    if isinstance(tool, ResolutionError):
        return value, None, [tool]
    return value, tool, []


def _missing_required(
    schema: BlockSchema,
    active: frozenset[str],
    merged: Mapping[str, Any],
    failed_keys: set[str],
) -> list[ResolutionError]:
    errors: list[ResolutionError] = []
    for group_key, members in group_fields(schema, active).items():
        if group_key in merged:
            continue
        if any(field.key in failed_keys for field in members):
            continue
        required = [field for field in members if field.required]
        if not required:
            continue
        names = " or ".join(field.display_name for field in required)
        errors.append(
            MissingRequiredFieldError(
                message=f"{names}: a value is required",
                field_keys=tuple(field.key for field in required),
            )
        )
    return errors


def resolve(
    schema: BlockSchema, raw_inputs: Mapping[str, RawValue]
) -> ResolvedParameters | list[ResolutionError]:
    """
    Resolve a block invocation into a tool id and typed parameters.

    Args:
        schema: Block schema
        raw_inputs: Values from the form, keyed by field key or canonical key

    Returns:
        ResolvedParameters on success, otherwise every ResolutionError found.
        Missing, invalid or unmapped operations are returned alone since no
        other field can be judged without knowing the operation.
    """
    raw_values = collect_raw_values(schema, raw_inputs)

    operation_value, tool_id, errors = _resolve_discriminator(schema, raw_values)
    if errors:
        return errors

    active = resolve_active_fields(schema, raw_values)

    coerced: dict[str, Any] = {}
    if schema.operation_field is not None:
        coerced[schema.operation_field] = operation_value

    for field in schema.fields:
        if field.key not in active or field.key == schema.operation_field:
            continue
        raw = raw_values.get(field.key)
        if is_empty(raw):
            continue
        result = coerce(field, raw)
        if result.ok:
            coerced[field.key] = result.value
        else:
            errors.append(result.error)

    merged = merge_aliases(schema, active, coerced)

    failed_keys = {key for error in errors for key in error.field_keys}
    errors.extend(_missing_required(schema, active, merged, failed_keys))

    if errors:
        logger.debug(f"Block '{schema.block_type}' resolution failed with {len(errors)} error(s)")
        return errors

    if tool_id is None:
        tool = resolve_tool(schema, None)
        if isinstance(tool, ResolutionError):
            return [tool]
        tool_id = tool

    logger.debug(f"Resolved block '{schema.block_type}' to tool '{tool_id}' ({len(merged)} parameters)")
    return ResolvedParameters(tool_id=tool_id, parameters=merged)


def active_field_schemas(schema: BlockSchema, values: Mapping[str, RawValue]) -> list[FieldSchema]:
    """Active fields in declaration order, for callers that render them."""
    active = resolve_active_fields(schema, collect_raw_values(schema, values))
    return [field for field in schema.fields if field.key in active]
