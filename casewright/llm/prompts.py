"""Prompt templates for enrichment, code generation and suggestions."""

import json
from collections.abc import Iterable

import yaml

from ..conformance.fixture import FIXTURE_PATH
from ..conformance.titles import expected_case_title
from ..ingest.models import ScenarioGroup
from ..ingest.normalizer import to_pascal_case

ENRICHMENT_SYSTEM_PROMPT = """You analyze single lines of manual test cases for UI automation.
Identify the user action, its target element or value and, for checks, what is verified.

Respond ONLY with a JSON object of this form:
{
  "action": "click | fill | navigate | verify | select | ...",
  "target": "element description or value",
  "entities": [{"type": "field", "name": "username", "value": "value"}],
  "validationType": "text | visibility | status | url (checks only)",
  "expectedValue": "value being checked (checks only)",
  "url": "absolute URL (navigation only)",
  "originalText": "the analysed text",
  "confidence": "high | medium | low"
}
Omit keys that do not apply. Do not add any other text."""


def build_enrichment_prompt(text: str) -> str:
    """Build the prompt asking for an analysis of one text field."""
    return f"""Analyze this test case text:

{json.dumps(text, ensure_ascii=False)}

Examples:
- "Verify successful login" -> {{"action": "verify", "target": "login status", "validationType": "status", "expectedValue": "successful login"}}
- "Navigate to https://shop.example.com" -> {{"action": "navigate", "target": "URL", "url": "https://shop.example.com"}}"""


GENERATION_SYSTEM_PROMPT = f"""You are an expert QA automation engineer generating Playwright (JavaScript) test projects.

Critical rules:
* Respond with a single JSON object only. Keys are relative file paths, values are file contents.
* File contents must be plain code: no markdown fences inside the strings.
* Copy describe and test titles EXACTLY as given, including any tag prefix.
* Use single quotes for string literals unless interpolation is needed.
* Only generate locators for the application under test.

For each scenario generate exactly these files, using the given names:
  "page-objects/{{PageObject}}Locators.js"
  "pages/{{PageObject}}Page.js"
  "tests/{{shortFeatureName}}.spec.js"
and, once for the project, "{FIXTURE_PATH}".

Each spec file starts with: import test from '../testFixtures/baseFixture.js';
It contains one test.describe('<scenario title>', () => {{ ... }}); block and, inside it,
one test('<title>', async ({{ page }}) => {{ ... }}); per test case, in the order given."""


def _group_outline(group: ScenarioGroup) -> dict:
    tests = []
    for case in group.tests:
        entry = {
            "id": case.id or "N/A",
            "title": expected_case_title(case),
            "steps": case.steps,
            "data": case.data or "N/A",
            "expected": case.expected or "N/A",
            "priority": case.priority or "N/A",
        }
        if case.analysis is not None and not case.analysis.is_empty:
            entry["analysis"] = case.analysis.model_dump(by_alias=True, exclude_none=True)
        tests.append(entry)

    return {
        "scenario": group.scenario_title,
        "shortFeatureName": group.short_feature_name,
        "pageObject": to_pascal_case(group.scenario_title),
        "tests": tests,
    }


def build_generation_prompt(
    groups: Iterable[ScenarioGroup],
    project_name: str,
    base_url: str,
    page_objects: list[str],
    actions: Iterable[str] = (),
) -> str:
    """Build the code generation prompt for a whole project."""
    outline = [_group_outline(group) for group in groups]
    scenarios_yaml = yaml.dump(
        outline, default_flow_style=False, sort_keys=False, allow_unicode=True
    )

    return f"""Generate the dynamic files for project "{project_name}".

- Base URL: {base_url}
- Page objects for the fixture file: {json.dumps(page_objects)}
- Actions the page objects must support: {json.dumps(sorted(set(actions)))}

Scenarios (titles must be used exactly as written; use the analysis to pick locators,
actions and assertions):

```yaml
{scenarios_yaml}```"""


SUGGESTION_SYSTEM_PROMPT = """You are an expert QA engineer reviewing test coverage.
Suggest missing test cases: negative paths, boundary values, edge cases, error messages,
security and accessibility checks where they apply. Never repeat an existing case.

Respond ONLY with a JSON array of objects:
[
  {
    "scenario": "exact existing scenario title",
    "tests": [
      {
        "id": "AI_<Feature>_001",
        "title": "short title",
        "description": "what the case checks",
        "steps": ["step 1", "step 2"],
        "data": "key: value",
        "expected": "expected result",
        "priority": "P1 | P2 | P3"
      }
    ]
  }
]"""


def build_suggestion_prompt(
    groups: Iterable[ScenarioGroup],
    project_name: str,
    scenario_title: str | None = None,
    count: int = 4,
) -> str:
    """Build the prompt asking for missing test cases.

    Args:
        groups: Existing scenario groups.
        project_name: Name of the project, for context.
        scenario_title: Limit suggestions to this scenario (may be new).
        count: Number of cases to ask for when a scenario is given.
    """
    groups = list(groups)

    if scenario_title is not None:
        selected = [g for g in groups if g.scenario_title == scenario_title]
        if selected:
            instruction = f'Suggest exactly {count} missing test cases for "{scenario_title}".'
        else:
            instruction = (
                f'Suggest exactly {count} initial test cases for the new scenario '
                f'"{scenario_title}".'
            )
    else:
        selected = groups
        instruction = "Suggest 2-4 missing test cases for each existing scenario."

    existing = [
        {
            "scenario": group.scenario_title,
            "tests": [{"title": c.title, "description": c.description} for c in group.tests],
        }
        for group in selected
    ]
    existing_yaml = (
        yaml.dump(existing, default_flow_style=False, sort_keys=False, allow_unicode=True)
        if existing
        else "(none)\n"
    )

    return f"""Project: "{project_name}"

Existing scenarios and test cases:

```yaml
{existing_yaml}```

{instruction}"""
