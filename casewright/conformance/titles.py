"""Matching and correcting describe/test titles in generated specs."""

import re

from ..ingest.models import TestCase

PRIORITY_TAGS = {
    "P1": "@smoke @reg ",
    "P2": "@sanity @reg ",
    "P3": "@reg ",
}

# Fragments that show the producer invented a title instead of copying it.
BANNED_TITLE_FRAGMENTS = ("Test for", "Case", "Funcitonality", "Scenario")

# A quoted literal whose body may contain escaped characters, including the quote.
_LITERAL = r"(?P<quote>['\"`])(?P<title>(?:\\.|(?!(?P=quote)).)*)(?P=quote)"

DESCRIBE_PATTERN = re.compile(
    r"test\.describe\(\s*" + _LITERAL + r"\s*,\s*\(\s*\)\s*=>\s*\{"
)

CASE_PATTERN = re.compile(
    r"(?<![\w.$])test\(\s*" + _LITERAL + r"\s*,\s*async\s*\(\s*\{.*?\}\s*\)\s*=>\s*\{"
)


def tag_prefix(priority: str) -> str:
    """Get the tag prefix for a priority ("" when unrecognized)."""
    return PRIORITY_TAGS.get(priority.strip().upper(), "")


def expected_case_title(case: TestCase) -> str:
    """The exact title a generated test declaration must carry."""
    return f"{tag_prefix(case.priority)}{case.description}"


def escape_literal(text: str, quote: str) -> str:
    """Escape text for use inside a JavaScript string delimited by ``quote``."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace(quote, "\\" + quote)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    if quote == "`":
        escaped = escaped.replace("${", "\\${")
    return escaped


def has_banned_fragment(title: str) -> bool:
    return any(fragment in title for fragment in BANNED_TITLE_FRAGMENTS)


def replace_title(line: str, match: re.Match, title: str) -> str:
    """Replace only the captured title of ``match`` within ``line``."""
    start, end = match.span("title")
    return line[:start] + escape_literal(title, match.group("quote")) + line[end:]


def correct_describe_title(line: str, scenario_title: str) -> tuple[str, bool]:
    """Rewrite a ``test.describe`` title to the exact scenario title.

    Returns:
        The (possibly unchanged) line and whether it was rewritten.
    """
    match = DESCRIBE_PATTERN.search(line)
    if match is None:
        return line, False

    literal = escape_literal(scenario_title, match.group("quote"))
    if match.group("title") == literal:
        return line, False
    return replace_title(line, match, scenario_title), True


def correct_case_title(line: str, match: re.Match, case: TestCase) -> tuple[str, bool]:
    """Rewrite a matched ``test(...)`` title to the tagged case description.

    Returns:
        The (possibly unchanged) line and whether it was rewritten.
    """
    expected = expected_case_title(case)
    literal = escape_literal(expected, match.group("quote"))

    if match.group("title") == literal:
        return line, False
    return replace_title(line, match, expected), True
