"""Unit tests for canonical parameter merging."""

from blockflow.models.contracts.blocks import BlockSchema, FieldSchema
from blockflow.services.resolution.aliases import group_fields, merge_aliases


def _picker_manual_schema() -> BlockSchema:
    return BlockSchema(
        block_type="sheets",
        tool_id="sheets_read",
        fields=[
            FieldSchema(key="spreadsheetId", canonical_key="spreadsheet"),
            FieldSchema(key="manualSpreadsheetId", canonical_key="spreadsheet"),
            FieldSchema(key="range"),
        ],
    )


ALL_ACTIVE = {"spreadsheetId", "manualSpreadsheetId", "range"}


class TestMergeAliases:

    def test_picker_wins_over_manual(self):
        merged = merge_aliases(
            _picker_manual_schema(), ALL_ACTIVE,
            {"spreadsheetId": "X", "manualSpreadsheetId": "Y"},
        )
        assert merged == {"spreadsheet": "X"}

    def test_blank_picker_falls_back_to_manual(self):
        merged = merge_aliases(
            _picker_manual_schema(), ALL_ACTIVE,
            {"spreadsheetId": "", "manualSpreadsheetId": "Y"},
        )
        assert merged == {"spreadsheet": "Y"}

    def test_whitespace_only_counts_as_empty(self):
        merged = merge_aliases(
            _picker_manual_schema(), ALL_ACTIVE,
            {"spreadsheetId": "   ", "manualSpreadsheetId": "Y"},
        )
        assert merged["spreadsheet"] == "Y"

    def test_both_empty_omits_parameter(self):
        merged = merge_aliases(
            _picker_manual_schema(), ALL_ACTIVE,
            {"spreadsheetId": "", "manualSpreadsheetId": None},
        )
        assert "spreadsheet" not in merged

    def test_fields_without_canonical_key_pass_through(self):
        merged = merge_aliases(_picker_manual_schema(), ALL_ACTIVE, {"range": "A1:B2"})
        assert merged == {"range": "A1:B2"}

    def test_inactive_alias_ignored(self):
        merged = merge_aliases(
            _picker_manual_schema(), {"manualSpreadsheetId"},
            {"spreadsheetId": "X", "manualSpreadsheetId": "Y"},
        )
        assert merged == {"spreadsheet": "Y"}

    def test_false_and_zero_are_values(self):
        schema = BlockSchema(
            block_type="flags",
            tool_id="t",
            fields=[
                FieldSchema(key="a", canonical_key="flag"),
                FieldSchema(key="b", canonical_key="flag"),
            ],
        )
        assert merge_aliases(schema, {"a", "b"}, {"a": False, "b": True}) == {"flag": False}
        assert merge_aliases(schema, {"a", "b"}, {"a": 0, "b": 5}) == {"flag": 0}


class TestGroupFields:

    def test_field_keyed_like_canonical_key_joins_group(self):
        schema = BlockSchema(
            block_type="slack",
            tool_id="t",
            fields=[
                FieldSchema(key="channel"),
                FieldSchema(key="manualChannel", canonical_key="channel"),
            ],
        )
        groups = group_fields(schema, {"channel", "manualChannel"})
        assert list(groups) == ["channel"]
        assert [f.key for f in groups["channel"]] == ["channel", "manualChannel"]

    def test_declaration_order_kept(self):
        groups = group_fields(_picker_manual_schema(), ALL_ACTIVE)
        assert [f.key for f in groups["spreadsheet"]] == ["spreadsheetId", "manualSpreadsheetId"]
