"""Deterministic regeneration of the fixture-wiring file."""

from collections.abc import Iterable

from ..ingest.models import ScenarioGroup
from ..ingest.normalizer import to_camel_case, to_pascal_case

FIXTURE_PATH = "testFixtures/baseFixture.js"

BASE_IMPORT = "import { test as baseTest } from '@playwright/test';"
PAGE_SUFFIX = "Page"


def page_object_identifiers(groups: Iterable[ScenarioGroup]) -> list[str]:
    """PascalCase page-object names for each group, deduplicated in order."""
    return unique_identifiers(to_pascal_case(group.scenario_title) for group in groups)


def unique_identifiers(identifiers: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for name in identifiers:
        if name and name not in seen:
            seen[name] = None
    return list(seen)


def build_fixture(identifiers: Iterable[str]) -> str:
    """Build the fixture file registering one page-object factory per name.

    The output depends only on the identifiers and their order, so running
    this again with the same list yields identical text.

    Args:
        identifiers: PascalCase page-object names (duplicates are dropped).

    Returns:
        The full JavaScript source of the fixture file.
    """
    names = unique_identifiers(identifiers)

    lines = [BASE_IMPORT]
    for name in names:
        lines.append(
            f"import {{ {name}{PAGE_SUFFIX} }} from '../pages/{name}{PAGE_SUFFIX}.js';"
        )
    lines.append("")

    if names:
        lines.append("const test = baseTest.extend({")
        for name in names:
            fixture_name = f"{to_camel_case(name)}{PAGE_SUFFIX}"
            page_class = f"{name}{PAGE_SUFFIX}"
            lines.append(
                f"    {fixture_name}: async ({{ page }}, use) => "
                f"{{ await use(new {page_class}(page)); }},"
            )
        lines.append("});")
    else:
        lines.append("const test = baseTest.extend({});")

    lines.append("")
    lines.append("export default test;")
    return "\n".join(lines) + "\n"
