"""Line-oriented conformance pass over a generated file set."""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..diagnostics import Diagnostics
from ..ingest.models import ScenarioGroup, TestCase
from .assertions import EXISTING_ASSERTION_PATTERN, has_existing_assertion, synthesize_assertion
from .errors import ProducerContractError
from .fixture import FIXTURE_PATH, build_fixture, page_object_identifiers
from .insertion import InsertionLocator, depth_after, locate_insertion_point
from .titles import CASE_PATTERN, correct_case_title, correct_describe_title, has_banned_fragment

logger = logging.getLogger(__name__)

TESTS_PREFIX = "tests/"

IMPORT_SHIM_PATTERN = re.compile(
    r"import\s+\{\s*test\s*\}\s+from\s+['\"]\.\./testFixtures/baseFixture\.js['\"];?"
)
DEFAULT_FIXTURE_IMPORT = "import test from '../testFixtures/baseFixture.js';"

INDENT_UNIT = "    "


@dataclass
class ConformanceResult:
    """The corrected file set (same object as the input) and its diagnostics."""

    files: dict[str, str]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    changed: list[str] = field(default_factory=list)


def ensure_file_set(generated: Any) -> dict[str, str]:
    """Check that producer output is a non-empty path -> content mapping.

    Raises:
        ProducerContractError: If the output is not a dict, is empty, or has
            non-string keys or values.
    """
    if not isinstance(generated, dict):
        raise ProducerContractError(
            f"Generated output must be a mapping of file paths to contents, "
            f"got {type(generated).__name__}"
        )
    if not generated:
        raise ProducerContractError("Generated output contains no files")

    for path, content in generated.items():
        if not isinstance(path, str):
            raise ProducerContractError(f"File path {path!r} is not a string")
        if not isinstance(content, str):
            raise ProducerContractError(
                f"Content of {path} is {type(content).__name__}, not text", path
            )
    return generated


def _normalized_path(path: str) -> str:
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path


def is_test_path(path: str) -> bool:
    return _normalized_path(path).startswith(TESTS_PREFIX)


def feature_name_for(path: str) -> str:
    """The file's base name without any extension ("tests/login.spec.js" -> "login")."""
    return _normalized_path(path).rsplit("/", 1)[-1].split(".", 1)[0]


def _indent_of(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def _body_indent(lines: list[str], start: int, end: int) -> str:
    for line in lines[start + 1 : end]:
        if line.strip():
            return _indent_of(line)
    return _indent_of(lines[start]) + INDENT_UNIT


def _inject_assertion(
    lines: list[str],
    index: int,
    case: TestCase,
    path: str,
    diagnostics: Diagnostics,
    locate: InsertionLocator,
) -> None:
    declaration = lines[index]
    match = CASE_PATTERN.search(declaration)
    if match is not None and depth_after(declaration[match.end() :]) == 0:
        if synthesize_assertion(case) is not None and not EXISTING_ASSERTION_PATTERN.search(
            declaration
        ):
            diagnostics.add_warning(
                code="SINGLE_LINE_CASE_BLOCK",
                message="Test block opens and closes on its declaration line; assertion not injected",
                row=index + 1,
                path=path,
            )
            logger.warning("%s:%d: one-line test block, assertion skipped", path, index + 1)
        return

    if has_existing_assertion(lines, index):
        return

    assertion = synthesize_assertion(case)
    if assertion is None:
        return

    target = locate(lines, index)
    if target is None:
        diagnostics.add_warning(
            code="UNCLOSED_CASE_BLOCK",
            message="Could not find the closing brace of the test block; assertion not injected",
            row=index + 1,
            path=path,
        )
        logger.warning("%s:%d: test block never closes, assertion skipped", path, index + 1)
        return

    if any(line.strip() == assertion for line in lines[index + 1 : target]):
        return

    eol = "\r" if lines[target].endswith("\r") else ""
    lines.insert(target, _body_indent(lines, index, target) + assertion + eol)
    logger.debug("%s:%d: injected %r", path, target + 1, assertion)


def conform_test_file(
    path: str,
    content: str,
    group: ScenarioGroup | None,
    diagnostics: Diagnostics,
    locate: InsertionLocator = locate_insertion_point,
) -> str:
    """Correct one generated test file against its scenario group.

    Args:
        path: The file's relative path (used in diagnostics).
        content: The generated source.
        group: The owning scenario group, or None if none was found.
        diagnostics: Receives any warnings.
        locate: Finds the line closing a test block.

    Returns:
        The corrected source.
    """
    lines = content.split("\n")

    if lines and IMPORT_SHIM_PATTERN.search(lines[0]):
        lines[0] = IMPORT_SHIM_PATTERN.sub(DEFAULT_FIXTURE_IMPORT, lines[0], count=1)
        logger.debug("%s: fixture import switched to the default export", path)

    if group is None:
        diagnostics.add_warning(
            code="NO_OWNING_GROUP",
            message=(
                f"No scenario group has feature name '{feature_name_for(path)}'; "
                "titles and assertions left as generated"
            ),
            path=path,
        )
        logger.warning("%s: no matching scenario group", path)
        return "\n".join(lines)

    case_count = 0
    index = 0
    while index < len(lines):
        line, changed = correct_describe_title(lines[index], group.scenario_title)
        if changed:
            logger.debug("%s:%d: describe title corrected", path, index + 1)

        match = CASE_PATTERN.search(line)
        if match is not None:
            if case_count < len(group.tests):
                case = group.tests[case_count]
                generated_title = match.group("title")
                line, changed = correct_case_title(line, match, case)
                if changed:
                    reason = "placeholder" if has_banned_fragment(generated_title) else "mismatch"
                    logger.debug(
                        "%s:%d: test title corrected (%s): %r",
                        path,
                        index + 1,
                        reason,
                        generated_title,
                    )
                lines[index] = line
                _inject_assertion(lines, index, case, path, diagnostics, locate)
            else:
                diagnostics.add_info(
                    code="EXTRA_CASE_DECLARATION",
                    message="More test declarations than cases in the scenario; left as generated",
                    row=index + 1,
                    path=path,
                )
            case_count += 1

        lines[index] = line
        index += 1

    if case_count < len(group.tests):
        diagnostics.add_info(
            code="MISSING_CASE_DECLARATIONS",
            message=(
                f"Found {case_count} test declaration(s) for "
                f"{len(group.tests)} case(s) in '{group.scenario_title}'"
            ),
            path=path,
        )

    return "\n".join(lines)


def conform_files(
    groups: Iterable[ScenarioGroup],
    files: Any,
    page_objects: list[str] | None = None,
    *,
    locate: InsertionLocator = locate_insertion_point,
) -> ConformanceResult:
    """Repair a generated file set in place.

    Every ``tests/`` file is matched to the group whose short feature name
    equals its base name and has its titles, tags and assertions corrected.
    The fixture file, when present, is rebuilt from the page-object names.
    No key is added or removed.

    Args:
        groups: Scenario groups in export order.
        files: The producer's path -> content mapping, mutated in place.
        page_objects: Page-object names for the fixture; derived from the
            groups when omitted.
        locate: Finds the line closing a test block.

    Returns:
        The same mapping with corrections, plus diagnostics.

    Raises:
        ProducerContractError: If ``files`` is not a non-empty text mapping.
    """
    files = ensure_file_set(files)
    groups = list(groups)

    by_feature: dict[str, ScenarioGroup] = {}
    for group in groups:
        by_feature.setdefault(group.short_feature_name, group)

    result = ConformanceResult(files=files)

    for path in list(files):
        if not is_test_path(path):
            continue
        group = by_feature.get(feature_name_for(path))
        original = files[path]
        corrected = conform_test_file(path, original, group, result.diagnostics, locate)
        if corrected != original:
            files[path] = corrected
            result.changed.append(path)

    identifiers = page_objects if page_objects is not None else page_object_identifiers(groups)
    for path in list(files):
        if _normalized_path(path) != FIXTURE_PATH:
            continue
        fixture = build_fixture(identifiers)
        if files[path] != fixture:
            files[path] = fixture
            result.changed.append(path)
        logger.debug("Rebuilt %s with %d page object(s)", path, len(identifiers))

    return result
