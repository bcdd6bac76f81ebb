"""Synthesizing a single assertion line for a test case's expected result."""

import re
from collections.abc import Sequence

from ..ingest.models import Analysis, TestCase
from .titles import escape_literal

# Lines after a test declaration searched for an assertion the producer already wrote.
ASSERTION_LOOKAHEAD = 9

EXISTING_ASSERTION_PATTERN = re.compile(
    r"expect\(|page\.waitForURL\(|await\s+(?:page|browser)\.(?:toBe|toHave|isVisible|title)\("
)

URL_PATTERN = re.compile(
    r"https?://(?:www\.)?"
    r"(?:[a-zA-Z0-9.-]+\.[a-zA-Z]{2,6}|localhost|\d{1,3}(?:\.\d{1,3}){3})"
    r"(?::\d+)?(?:/[^\s,\"']*)?"
)

VISIBILITY_KEYWORDS = ("visible", "displayed")
TEXT_KEYWORDS = ("text", "message", "value")


def has_existing_assertion(lines: Sequence[str], declaration_index: int) -> bool:
    """Check the lines following a declaration for an assertion or wait call."""
    window = lines[declaration_index + 1 : declaration_index + 1 + ASSERTION_LOOKAHEAD]
    return any(EXISTING_ASSERTION_PATTERN.search(line) for line in window)


def _quoted(value: str) -> str:
    return "'" + escape_literal(value, "'") + "'"


def _one_line(text: str) -> str:
    return " ".join(text.splitlines())


def wait_for_url(url: str) -> str:
    return f"await page.waitForURL({_quoted(url)});"


def expect_text(value: str) -> str:
    locator = _quoted(f"text={value}")
    return f"await expect(page.locator({locator})).toContainText({_quoted(value)});"


def expect_visible(target: str) -> str:
    locator = _quoted(f"text={target}")
    return f"await expect(page.locator({locator})).toBeVisible();"


def find_url(text: str) -> str | None:
    """Get the first http(s) URL in ``text``, without trailing punctuation."""
    match = URL_PATTERN.search(text)
    if match is None:
        return None
    return match.group(0).rstrip(".;:)")


def _from_analysis(analysis: Analysis, expected: str) -> str:
    if analysis.action == "navigate" and analysis.url:
        return wait_for_url(analysis.url)
    if analysis.action == "verify":
        if analysis.validation_type == "text" and analysis.expected_value:
            return expect_text(analysis.expected_value)
        if analysis.validation_type == "visibility" and analysis.target:
            return expect_visible(analysis.target)
        if analysis.target and analysis.expected_value:
            return _one_line(
                f"// TODO: verify {analysis.target} is {analysis.expected_value}"
            )
    return f"// Verify: {_one_line(expected)}"


def _from_keywords(expected: str) -> str:
    lowered = expected.lower()

    url = find_url(expected)
    if url is not None:
        return wait_for_url(url)
    if any(keyword in lowered for keyword in VISIBILITY_KEYWORDS):
        return f"// Verify element is visible: {_one_line(expected)}"
    if any(keyword in lowered for keyword in TEXT_KEYWORDS):
        return f"// Verify text content: {_one_line(expected)}"
    return f"// Verify: {_one_line(expected)}"


def synthesize_assertion(case: TestCase) -> str | None:
    """Build the one line that checks a case's expected result.

    Structured analysis of the expected result wins; without it the raw
    text is scanned for a URL or for visibility/text keywords. When nothing
    is recognized the expected text is echoed as a comment.

    Args:
        case: The test case.

    Returns:
        A single line of code or comment, or None if ``expected`` is empty.
    """
    expected = case.expected.strip()
    if not expected:
        return None

    analysis = case.analysis.expected if case.analysis is not None else None
    if analysis is not None:
        return _from_analysis(analysis, expected)
    return _from_keywords(expected)
