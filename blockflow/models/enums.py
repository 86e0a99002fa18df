"""
Enumeration types used across the engine.
"""

from enum import Enum


class FieldValueType(str, Enum):
    """Value types a block field can declare"""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRUCTURED = "structured"  # JSON-shaped value transported as text


class NumberKind(str, Enum):
    """Sub-type used when parsing number fields"""
    INTEGER = "integer"
    FLOAT = "float"


class ResolutionErrorCode(str, Enum):
    """Codes carried by returned resolution errors"""
    COERCION = "coercion_error"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    UNRESOLVED_OPERATION = "unresolved_operation"
