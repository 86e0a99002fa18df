"""
Block schema contract models.

A block schema describes one integration: its ordered form fields, how
those fields show and hide, which fields alias the same backend parameter,
and which backend tool each operation maps to. Schemas are frozen once
built and can be shared across concurrent resolutions.
"""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blockflow.models.enums import FieldValueType, NumberKind

# Values a caller may hand the engine for one field
RawValue = str | int | float | bool | dict | list | None


# ==================== FIELD MODELS ====================


class VisibilityCondition(BaseModel):
    """Show a field only while another field holds one of the given values"""
    model_config = ConfigDict(frozen=True)

    on_field: str = Field(..., description="Key of the field the condition reads")
    matches_any_of: list[Any] = Field(
        ..., min_length=1, description="Values that satisfy the condition")
    negate: bool = Field(default=False, description="Invert the membership test")


class FieldSchema(BaseModel):
    """Form field definition"""
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Unique field key within the block")
    label: str | None = Field(default=None, description="Display label")
    value_type: FieldValueType = Field(default=FieldValueType.STRING)
    number_kind: NumberKind = Field(
        default=NumberKind.FLOAT, description="Parse mode for number fields")
    required: bool = Field(default=False, description="Enforced only while the field is active")
    default_value: Any | None = Field(
        default=None, description="Static default or zero-argument callable producing one")
    visibility: VisibilityCondition | None = Field(
        default=None, description="Condition under which the field is active")
    canonical_key: str | None = Field(
        default=None, description="Logical parameter this field is an alias source for")
    options: list[str] | None = Field(
        default=None, description="Allowed values for dropdown/choice fields")
    trim_on_write: bool = Field(
        default=False, description="Strip surrounding whitespace in the outgoing payload")
    placeholder: str | None = None
    help_text: str | None = None

    @property
    def display_name(self) -> str:
        return self.label or self.key

    @property
    def group_key(self) -> str:
        """Output parameter name this field contributes to."""
        return self.canonical_key or self.key

    def get_default(self) -> Any:
        """
        Produce this field's default value.

        Callables are invoked on every call so each resolution gets a fresh
        value (e.g. a timestamp default).
        """
        if callable(self.default_value):
            producer: Callable[[], Any] = self.default_value
            return producer()
        return self.default_value


class BlockSchema(BaseModel):
    """Block definition: ordered fields plus operation -> tool routing"""
    model_config = ConfigDict(frozen=True)

    block_type: str = Field(..., min_length=1, description="Registry key for the block")
    name: str | None = None
    description: str | None = None
    version: str = Field(default="1")
    fields: list[FieldSchema] = Field(default_factory=list)
    operation_field: str | None = Field(
        default=None, description="Key of the discriminator field, if any")
    operation_to_tool: dict[str, str] = Field(
        default_factory=dict, description="Discriminator value -> backend tool id")
    tool_id: str | None = Field(
        default=None, description="Single implicit tool for blocks without a discriminator")
    fallback_tool: str | None = Field(
        default=None, description="Tool used for unmapped discriminator values")

    @field_validator("fields")
    @classmethod
    def validate_unique_keys(cls, v: list[FieldSchema]) -> list[FieldSchema]:
        """Ensure field keys are unique"""
        keys = [field.key for field in v]
        if len(keys) != len(set(keys)):
            duplicates = sorted({k for k in keys if keys.count(k) > 1})
            raise ValueError(f"Field keys must be unique (duplicated: {', '.join(duplicates)})")
        return v

    @property
    def field_keys(self) -> list[str]:
        return [field.key for field in self.fields]

    def get_field(self, key: str) -> FieldSchema | None:
        for field in self.fields:
            if field.key == key:
                return field
        return None

    @property
    def operation(self) -> FieldSchema | None:
        """The discriminator field, if the block declares one."""
        if self.operation_field is None:
            return None
        return self.get_field(self.operation_field)
