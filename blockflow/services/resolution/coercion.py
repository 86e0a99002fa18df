"""
Value Coercion Module

Converts raw form values (usually text typed into the UI, sometimes values
passed through programmatically) into the types a block field declares.

Every coercer is total over RawValue: it either returns a typed value or a
field-scoped CoercionError, never raises. Coercion is pure, so coercing the
same raw value twice gives the same result.

Usage:
    from blockflow.services.resolution.coercion import coerce

    result = coerce(field, "42")
    if result.ok:
        payload[field.key] = result.value
    else:
        errors.append(result.error)
"""

import json
import math
from typing import Any, Callable

from blockflow.models.contracts.blocks import FieldSchema, RawValue
from blockflow.models.contracts.resolution import CoercionError, CoercionResult
from blockflow.models.enums import FieldValueType, NumberKind
from blockflow.services.resolution.values import as_text

TRUE_TEXT = "true"
FALSE_TEXT = "false"


def _fail(field: FieldSchema, reason: str) -> CoercionResult:
    return CoercionResult.failure(
        CoercionError(message=f"{field.display_name}: {reason}", field_keys=(field.key,))
    )


def _describe(raw: Any) -> str:
    """Short, quoted rendering of a raw value for error messages."""
    text = raw if isinstance(raw, str) else repr(raw)
    if len(text) > 50:
        text = text[:47] + "..."
    return f"'{text}'"


def _coerce_string(field: FieldSchema, raw: RawValue) -> CoercionResult:
    if raw is None:
        return _fail(field, "expected text, got nothing")

    text = as_text(raw)

    if field.options is not None and text.strip() not in field.options:
        allowed = ", ".join(field.options)
        return _fail(field, f"{_describe(text)} is not one of the allowed options ({allowed})")

    return CoercionResult.success(text.strip() if field.trim_on_write else text)


def _coerce_number(field: FieldSchema, raw: RawValue) -> CoercionResult:
    integer = field.number_kind == NumberKind.INTEGER

    # bool is an int subclass but never a valid number here
    if isinstance(raw, bool):
        return _fail(field, f"expected a number, got boolean {_describe(raw)}")

    if isinstance(raw, int):
        return CoercionResult.success(raw if integer else float(raw))

    if isinstance(raw, float):
        if not math.isfinite(raw):
            return _fail(field, f"expected a finite number, got {_describe(raw)}")
        if integer:
            if not raw.is_integer():
                return _fail(field, f"expected a whole number, got {_describe(raw)}")
            return CoercionResult.success(int(raw))
        return CoercionResult.success(raw)

    if not isinstance(raw, str):
        return _fail(field, f"expected a number, got {type(raw).__name__}")

    text = raw.strip()
    if not text:
        return _fail(field, "expected a number, got empty text")

    # Digit separators are not plain base-10 text
    if "_" in text:
        return _fail(field, f"{_describe(raw)} is not a number")

    try:
        value = float(text)
    except ValueError:
        return _fail(field, f"{_describe(raw)} is not a number")

    # Parse plain integers directly so large values keep their precision
    if integer and text.lstrip("+-").isdecimal():
        return CoercionResult.success(int(text, 10))

    # Same rules as a native float from here on (finite, whole for integers)
    return _coerce_number(field, value)


def _coerce_boolean(field: FieldSchema, raw: RawValue) -> CoercionResult:
    if isinstance(raw, bool):
        return CoercionResult.success(raw)

    if isinstance(raw, str):
        text = raw.strip().lower()
        if text == TRUE_TEXT:
            return CoercionResult.success(True)
        if text == FALSE_TEXT:
            return CoercionResult.success(False)

    return _fail(field, f"expected 'true' or 'false', got {_describe(raw)}")


def _coerce_structured(field: FieldSchema, raw: RawValue) -> CoercionResult:
    # Values passed programmatically are already structured
    if not isinstance(raw, str):
        return CoercionResult.success(raw)

    try:
        return CoercionResult.success(json.loads(raw))
    except json.JSONDecodeError as e:
        return _fail(field, f"invalid JSON ({e})")


_COERCERS: dict[FieldValueType, Callable[[FieldSchema, RawValue], CoercionResult]] = {
    FieldValueType.STRING: _coerce_string,
    FieldValueType.NUMBER: _coerce_number,
    FieldValueType.BOOLEAN: _coerce_boolean,
    FieldValueType.STRUCTURED: _coerce_structured,
}


def coerce(field: FieldSchema, raw_value: RawValue) -> CoercionResult:
    """
    Convert a raw value to the field's declared type.

    Args:
        field: Field schema (value_type, number_kind, options, trim_on_write)
        raw_value: Value as received from the UI or a caller

    Returns:
        CoercionResult with ok=True and the typed value, or ok=False and a
        CoercionError naming the field
    """
    return _COERCERS[field.value_type](field, raw_value)
