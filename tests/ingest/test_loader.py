"""Tests for sheet loading and the ingestion entry points."""

import json

import pytest
import yaml

from casewright.ingest.errors import SchemaError, SheetLoadError
from casewright.ingest.loader import load_groups, load_sheet, parse_rows, parse_sheet


class TestLoadSheet:
    def test_load_xlsx(self, header, rows, write_xlsx):
        path = write_xlsx(header, rows)

        loaded_header, loaded_rows = load_sheet(path)

        assert loaded_header == header
        assert len(loaded_rows) == 3
        assert loaded_rows[0][1] == "TC_001"

    def test_load_csv_with_bom(self, header, rows, write_csv):
        path = write_csv(header, rows)

        loaded_header, loaded_rows = load_sheet(path)

        assert loaded_header[0] == "Test Scenario"
        assert len(loaded_rows) == 3

    def test_trailing_blank_rows_trimmed(self, header, rows, write_csv):
        path = write_csv(header, rows + [[""] * 7, [""] * 7])

        _, loaded_rows = load_sheet(path)

        assert len(loaded_rows) == 3

    def test_empty_file(self, write_csv):
        assert load_sheet(write_csv([], [])) == ([], [])

    def test_file_not_found(self, tmp_path):
        with pytest.raises(SheetLoadError) as exc_info:
            load_sheet(tmp_path / "missing.xlsx")
        assert "not found" in str(exc_info.value)

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "cases.txt"
        path.write_text("Test Scenario")

        with pytest.raises(SheetLoadError) as exc_info:
            load_sheet(path)
        assert ".txt" in str(exc_info.value)

    def test_corrupt_workbook(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_text("not a workbook")

        with pytest.raises(SheetLoadError) as exc_info:
            load_sheet(path)
        assert exc_info.value.path == str(path)


class TestParseSheet:
    def test_parse_xlsx(self, header, rows, write_xlsx):
        result = parse_sheet(write_xlsx(header, rows))

        assert len(result.groups) == 2
        assert result.groups.total_cases == 3
        assert result.diagnostics.is_clean

    def test_parse_csv(self, header, rows, write_csv):
        result = parse_sheet(write_csv(header, rows))

        login = result.groups.get("userLoginValid")
        assert login.tests[0].steps == [
            "Navigate to https://example.com/login",
            "Enter username",
            "Click login",
        ]

    def test_empty_sheet_warns(self, write_csv):
        result = parse_sheet(write_csv([], []))

        assert len(result.groups) == 0
        assert result.diagnostics.codes() == ["EMPTY_SHEET"]

    def test_invalid_priority_fails_whole_sheet(self, header, rows, write_xlsx):
        rows[2][6] = "urgent"

        with pytest.raises(SchemaError):
            parse_sheet(write_xlsx(header, rows))


class TestParseRows:
    def test_merges_validation_and_grouping_diagnostics(self, header, rows):
        rows.insert(0, [None, "TC_000", "", "", "", "", ""])

        result = parse_rows(header, rows)

        assert result.diagnostics.codes() == [
            "MISSING_SCENARIO",
            "EMPTY_CASE_FIELDS",
            "ROW_SKIPPED",
        ]

    def test_empty_header_raises(self, rows):
        with pytest.raises(SchemaError):
            parse_rows([None, ""], rows)


class TestLoadGroups:
    def test_json_round_trip(self, groups, tmp_path):
        path = tmp_path / "groups.json"
        path.write_text(json.dumps(groups.to_list()))

        loaded = load_groups(path)

        assert [g.scenario_title for g in loaded] == [g.scenario_title for g in groups]
        assert loaded.to_list() == groups.to_list()

    def test_yaml(self, groups, tmp_path):
        path = tmp_path / "groups.yaml"
        path.write_text(yaml.safe_dump(groups.to_list()))

        loaded = load_groups(path)

        assert loaded.total_cases == 3

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "groups.json"
        path.write_text('{"scenario": "Login"}')

        with pytest.raises(SheetLoadError):
            load_groups(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "groups.json"
        path.write_text("[{")

        with pytest.raises(SheetLoadError):
            load_groups(path)

    def test_group_without_title(self, tmp_path):
        path = tmp_path / "groups.json"
        path.write_text('[{"tests": []}]')

        with pytest.raises(SchemaError) as exc_info:
            load_groups(path)
        assert exc_info.value.errors

    def test_duplicate_short_names(self, tmp_path):
        path = tmp_path / "groups.json"
        path.write_text(json.dumps([{"scenario": "Login"}, {"scenario": "Login"}]))

        with pytest.raises(SchemaError) as exc_info:
            load_groups(path)
        assert "Duplicate" in str(exc_info.value)
