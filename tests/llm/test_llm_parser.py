"""Tests for JSON extraction from LLM responses."""

import pytest

from casewright.conformance.errors import ProducerContractError
from casewright.llm.errors import ResponseParseError
from casewright.llm.parser import extract_json, parse_analysis, parse_file_set, parse_suggestions


class TestExtractJson:
    def test_plain_object(self):
        assert extract_json('{"a": 1}') == {"a": 1}

    def test_fenced_block(self):
        response = 'Here you go:\n```json\n{"a": [1, 2]}\n```\nEnjoy.'
        assert extract_json(response) == {"a": [1, 2]}

    def test_untagged_fence(self):
        assert extract_json('```\n["x"]\n```') == ["x"]

    def test_embedded_in_prose(self):
        assert extract_json('Result: {"a": {"b": 2}} done') == {"a": {"b": 2}}

    def test_array_in_prose_keeps_array(self):
        assert extract_json('Sure! [{"scenario": "x"}] hope it helps') == [{"scenario": "x"}]

    def test_trailing_commas(self):
        assert extract_json('```json\n{"a": [1, 2,],}\n```') == {"a": [1, 2]}

    def test_invalid(self):
        with pytest.raises(ResponseParseError) as exc_info:
            extract_json("I could not do that.")
        assert exc_info.value.raw_response == "I could not do that."


class TestParseAnalysis:
    def test_object(self):
        analysis = parse_analysis('{"action": "Navigate", "url": "https://example.com"}')
        assert analysis.action == "navigate"
        assert analysis.url == "https://example.com"

    def test_non_object(self):
        with pytest.raises(ResponseParseError):
            parse_analysis("[1, 2]")


class TestParseFileSet:
    def test_mapping(self):
        files = parse_file_set('```json\n{"tests/a.spec.js": "test();"}\n```')
        assert files == {"tests/a.spec.js": "test();"}

    def test_not_json(self):
        with pytest.raises(ProducerContractError):
            parse_file_set("Sorry, no files today.")

    def test_wrong_shape(self):
        with pytest.raises(ProducerContractError):
            parse_file_set('["tests/a.spec.js"]')


class TestParseSuggestions:
    def test_list(self):
        assert parse_suggestions('[{"scenario": "A", "tests": []}]') == [
            {"scenario": "A", "tests": []}
        ]

    def test_single_object_wrapped(self):
        assert parse_suggestions('{"scenario": "A", "tests": []}') == [
            {"scenario": "A", "tests": []}
        ]

    def test_scalar(self):
        with pytest.raises(ResponseParseError):
            parse_suggestions("42")
