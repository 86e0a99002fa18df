"""
Pytest fixtures for blockflow tests.

Provides:
1. Small hand-built block schemas (create/update, alias, single-tool)
2. Isolated registries and settings
3. The path to the shipped sample block definitions
"""

from pathlib import Path

import pytest

from blockflow.config import Settings
from blockflow.models.contracts.blocks import BlockSchema, FieldSchema, VisibilityCondition
from blockflow.models.enums import FieldValueType, NumberKind
from blockflow.services.block_registry import BlockRegistry

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def blocks_dir() -> Path:
    """Directory holding the sample *.block.yaml / *.block.json files."""
    return REPO_ROOT / "blocks"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(blocks_dir=str(tmp_path), strict_registration=True)


@pytest.fixture
def registry(test_settings) -> BlockRegistry:
    return BlockRegistry(settings=test_settings)


@pytest.fixture
def crud_schema() -> BlockSchema:
    """operation (create|update), name always required, id required only for update."""
    return BlockSchema(
        block_type="crud",
        operation_field="operation",
        operation_to_tool={"create": "crud_create", "update": "crud_update"},
        fields=[
            FieldSchema(key="operation", label="Operation", options=["create", "update"], required=True),
            FieldSchema(key="name", label="Name", required=True),
            FieldSchema(
                key="id",
                label="Record ID",
                required=True,
                visibility=VisibilityCondition(on_field="operation", matches_any_of=["update"]),
            ),
        ],
    )


@pytest.fixture
def alias_schema() -> BlockSchema:
    """Picker/manual pair feeding one 'channel' parameter, plus a numeric limit."""
    return BlockSchema(
        block_type="chat",
        operation_field="operation",
        operation_to_tool={"send": "tool_a", "read": "tool_b"},
        fields=[
            FieldSchema(key="operation", options=["send", "read"]),
            FieldSchema(key="channel", label="Channel", canonical_key="channel", required=True),
            FieldSchema(key="manualChannel", label="Channel ID", canonical_key="channel", required=True),
            FieldSchema(
                key="text",
                label="Message",
                required=True,
                visibility=VisibilityCondition(on_field="operation", matches_any_of=["send"]),
            ),
            FieldSchema(
                key="limit",
                label="Limit",
                value_type=FieldValueType.NUMBER,
                number_kind=NumberKind.INTEGER,
                visibility=VisibilityCondition(on_field="operation", matches_any_of=["read"]),
            ),
        ],
    )


@pytest.fixture
def single_tool_schema() -> BlockSchema:
    return BlockSchema(
        block_type="webhook",
        tool_id="http_request",
        fields=[
            FieldSchema(key="url", label="URL", required=True, trim_on_write=True),
            FieldSchema(key="body", label="Body", value_type=FieldValueType.STRUCTURED),
            FieldSchema(key="retries", label="Retries", value_type=FieldValueType.NUMBER, default_value=3),
            FieldSchema(key="verify", label="Verify TLS", value_type=FieldValueType.BOOLEAN, default_value=True),
        ],
    )
