"""Tests for the scenario data model."""

import pytest
from pydantic import ValidationError

from casewright.ingest.models import (
    Analysis,
    CaseAnalysis,
    ScenarioCollection,
    ScenarioGroup,
    TestCase,
)


class TestTestCase:
    def test_steps_from_text(self):
        case = TestCase(steps="Open page\n\n  Click save  \n")
        assert case.steps == ["Open page", "Click save"]

    def test_steps_from_list(self):
        case = TestCase(steps=["Open", " ", "Save"])
        assert case.steps == ["Open", "Save"]

    def test_priority_normalized(self):
        assert TestCase(priority=" p1 ").priority == "P1"

    def test_invalid_priority_rejected(self):
        with pytest.raises(ValidationError):
            TestCase(priority="P9")

    def test_text_fields_coerced(self):
        case = TestCase(id=101, data=None)
        assert case.id == "101"
        assert case.data == ""


class TestScenarioGroup:
    def test_names_derived_from_title(self):
        group = ScenarioGroup(scenario="  Add Product to Shopping Cart ")

        assert group.scenario_title == "Add Product to Shopping Cart"
        assert group.identifier_name == "addProductToShoppingCart"
        assert group.short_feature_name == "addProductShoppingCart"

    def test_explicit_names_kept(self):
        group = ScenarioGroup.model_validate(
            {"scenario": "Login", "page": "loginPage", "shortFeatureName": "signIn"}
        )
        assert group.identifier_name == "loginPage"
        assert group.short_feature_name == "signIn"

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            ScenarioGroup(scenario="   ")

    def test_dump_uses_external_names(self):
        data = ScenarioGroup(scenario="Login").model_dump(by_alias=True)
        assert set(data) == {"index", "page", "scenario", "shortFeatureName", "tests"}

    def test_has_case(self):
        group = ScenarioGroup(scenario="Login", tests=[TestCase(id="TC_1", title="Valid login")])

        assert group.has_case(TestCase(id="TC_1", title="Other"))
        assert group.has_case(TestCase(title="Valid login"))
        assert not group.has_case(TestCase(id="TC_2", title="Other"))


class TestAnalysis:
    def test_keywords_lowercased(self):
        analysis = Analysis.model_validate({"action": "Verify", "validationType": "TEXT"})
        assert analysis.action == "verify"
        assert analysis.validation_type == "text"

    def test_unknown_keys_kept(self):
        analysis = Analysis.model_validate({"action": "click", "selector": "#save"})
        assert analysis.model_dump()["selector"] == "#save"

    def test_odd_values_coerced(self):
        analysis = Analysis.model_validate(
            {"expectedValue": 3, "target": {"x": 1}, "entities": "none"}
        )
        assert analysis.expected_value == "3"
        assert analysis.target is None
        assert analysis.entities == []

    def test_case_analysis_empty(self):
        assert CaseAnalysis().is_empty
        assert not CaseAnalysis(expected=Analysis(action="verify")).is_empty


class TestScenarioCollection:
    def test_create_group_assigns_index(self):
        collection = ScenarioCollection()
        first = collection.create_group("Login")
        second = collection.create_group("Logout")

        assert (first.index, second.index) == (0, 1)
        assert collection.groups == [first, second]

    def test_lookup(self):
        collection = ScenarioCollection()
        group = collection.create_group("Add Product to Shopping Cart")

        assert collection.get("addProductShoppingCart") is group
        assert collection.find_by_title("Add Product to Shopping Cart") is group
        assert "addProductShoppingCart" in collection
        assert collection.get("missing") is None

    def test_duplicate_short_name_rejected(self):
        collection = ScenarioCollection()
        collection.create_group("Login")

        with pytest.raises(ValueError):
            collection.add(ScenarioGroup(scenario="Login"))

    def test_views_share_groups(self):
        collection = ScenarioCollection()
        group = collection.create_group("Login")

        assert collection.as_mapping()["login"] is collection.groups[0] is group

    def test_list_round_trip(self, groups):
        restored = ScenarioCollection.from_list(groups.to_list())

        assert restored.to_list() == groups.to_list()
        assert restored.total_cases == groups.total_cases

    def test_from_list_uses_position_for_missing_index(self):
        collection = ScenarioCollection.from_list([{"scenario": "Login"}, {"scenario": "Logout"}])
        assert [g.index for g in collection] == [0, 1]
