"""Conformance post-processing for generated Playwright test files."""

from .assertions import ASSERTION_LOOKAHEAD, synthesize_assertion
from .errors import ProducerContractError
from .fixture import FIXTURE_PATH, build_fixture, page_object_identifiers
from .insertion import InsertionLocator, locate_insertion_point
from .processor import (
    TESTS_PREFIX,
    ConformanceResult,
    conform_files,
    conform_test_file,
    ensure_file_set,
    feature_name_for,
)
from .titles import PRIORITY_TAGS, expected_case_title, tag_prefix

__all__ = [
    "ASSERTION_LOOKAHEAD",
    "synthesize_assertion",
    "ProducerContractError",
    "FIXTURE_PATH",
    "build_fixture",
    "page_object_identifiers",
    "InsertionLocator",
    "locate_insertion_point",
    "TESTS_PREFIX",
    "ConformanceResult",
    "conform_files",
    "conform_test_file",
    "ensure_file_set",
    "feature_name_for",
    "PRIORITY_TAGS",
    "expected_case_title",
    "tag_prefix",
]
