"""Tests for test-case suggestions."""

import json

import pytest

from casewright.ingest.suggestions import merge_suggestions
from casewright.llm.errors import ResponseParseError
from casewright.llm.prompts import build_suggestion_prompt
from casewright.llm.suggestions import CaseSuggester

LOGIN_TITLE = "Verify User Login Functionality with Valid Credentials"

SUGGESTED = [
    {
        "scenario": LOGIN_TITLE,
        "tests": [
            {
                "id": "AI_Login_001",
                "title": "Login with wrong password",
                "description": "Login fails with a wrong password",
                "steps": ["Open login page", "Enter wrong password"],
                "data": "password: nope",
                "expected": "Error message is displayed",
                "priority": "P2",
            }
        ],
    }
]


class TestSuggestionPrompt:
    def test_all_scenarios(self, groups):
        prompt = build_suggestion_prompt(groups, "shop")

        assert LOGIN_TITLE in prompt
        assert "Add Product to Shopping Cart" in prompt
        assert "for each existing scenario" in prompt

    def test_single_scenario(self, groups):
        prompt = build_suggestion_prompt(groups, "shop", LOGIN_TITLE, count=3)

        assert f'exactly 3 missing test cases for "{LOGIN_TITLE}"' in prompt
        assert "Add Product to Shopping Cart" not in prompt

    def test_new_scenario(self, groups):
        prompt = build_suggestion_prompt(groups, "shop", "Checkout", count=2)

        assert 'initial test cases for the new scenario "Checkout"' in prompt
        assert "(none)" in prompt


class TestCaseSuggester:
    @pytest.fixture
    def suggester(self):
        return CaseSuggester(api_key="test-key")

    def test_suggest_and_merge(self, reply, suggester, groups):
        mock_client = reply(json.dumps(SUGGESTED))

        suggestions = suggester.suggest(groups, "shop", LOGIN_TITLE, count=1)
        added = merge_suggestions(groups, suggestions)

        assert [case.id for case in added] == ["AI_Login_001"]
        assert len(groups.get("userLoginValid").tests) == 3
        assert mock_client.messages.create.call_args.kwargs["temperature"] == 0.7

    def test_bad_reply(self, reply, suggester, groups):
        reply("No suggestions.")

        with pytest.raises(ResponseParseError):
            suggester.suggest(groups, "shop")
