"""Unit tests for the visibility resolver."""

import pytest

from blockflow.core.exceptions import SchemaConfigurationError
from blockflow.models.contracts.blocks import BlockSchema, FieldSchema, VisibilityCondition
from blockflow.services.resolution.visibility import resolve_active_fields


def _when(on_field: str, *values, negate=False) -> VisibilityCondition:
    return VisibilityCondition(on_field=on_field, matches_any_of=list(values), negate=negate)


class TestResolveActiveFields:

    def test_unconditional_fields_always_active(self, crud_schema):
        active = resolve_active_fields(crud_schema, {})
        assert "operation" in active
        assert "name" in active

    def test_conditional_field_follows_operation(self, crud_schema):
        assert "id" in resolve_active_fields(crud_schema, {"operation": "update"})
        assert "id" not in resolve_active_fields(crud_schema, {"operation": "create"})

    def test_read_update_condition(self):
        schema = BlockSchema(
            block_type="docs",
            tool_id="docs_tool",
            fields=[
                FieldSchema(key="operation"),
                FieldSchema(key="documentId", visibility=_when("operation", "read", "update")),
            ],
        )
        assert "documentId" in resolve_active_fields(schema, {"operation": "read"})
        assert "documentId" in resolve_active_fields(schema, {"operation": "update"})
        assert "documentId" not in resolve_active_fields(schema, {"operation": "write"})

    def test_returns_frozenset(self, crud_schema):
        assert isinstance(resolve_active_fields(crud_schema, {}), frozenset)

    def test_chained_condition_inactive_when_parent_inactive(self):
        schema = BlockSchema(
            block_type="chained",
            tool_id="t",
            fields=[
                FieldSchema(key="mode"),
                FieldSchema(key="auth", visibility=_when("mode", "advanced")),
                FieldSchema(key="token", visibility=_when("auth", "bearer")),
            ],
        )
        # auth still holds "bearer" from a previous mode, but auth itself is hidden
        active = resolve_active_fields(schema, {"mode": "basic", "auth": "bearer"})
        assert "auth" not in active
        assert "token" not in active

        active = resolve_active_fields(schema, {"mode": "advanced", "auth": "bearer"})
        assert {"auth", "token"} <= active

    def test_chained_resolution_is_order_independent(self):
        fields = [
            FieldSchema(key="token", visibility=_when("auth", "bearer")),
            FieldSchema(key="auth", visibility=_when("mode", "advanced")),
            FieldSchema(key="mode"),
        ]
        schema = BlockSchema(block_type="chained", tool_id="t", fields=fields)
        active = resolve_active_fields(schema, {"mode": "advanced", "auth": "bearer"})
        assert active == {"mode", "auth", "token"}

    def test_cycle_raises_configuration_error(self):
        schema = BlockSchema(
            block_type="cyclic",
            tool_id="t",
            fields=[
                FieldSchema(key="a", visibility=_when("b", "x")),
                FieldSchema(key="b", visibility=_when("a", "y")),
            ],
        )
        with pytest.raises(SchemaConfigurationError, match="cycle"):
            resolve_active_fields(schema, {"a": "y", "b": "x"})

    def test_unknown_dependency_raises_configuration_error(self):
        schema = BlockSchema(
            block_type="dangling",
            tool_id="t",
            fields=[FieldSchema(key="a", visibility=_when("missing", "x"))],
        )
        with pytest.raises(SchemaConfigurationError, match="unknown field"):
            resolve_active_fields(schema, {})
