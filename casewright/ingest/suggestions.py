"""Append-only merge of suggested test cases into existing groups."""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from .models import ScenarioCollection, ScenarioGroup, TestCase
from .normalizer import to_short_feature_name

logger = logging.getLogger(__name__)


def _target_group(collection: ScenarioCollection, scenario_title: str) -> ScenarioGroup:
    group = collection.find_by_title(scenario_title)
    if group is None:
        group = collection.get(to_short_feature_name(scenario_title))
    if group is None:
        group = collection.create_group(scenario_title)
        logger.debug("Created scenario group for suggested scenario %r", scenario_title)
    return group


def merge_suggestions(
    collection: ScenarioCollection, suggestions: Iterable[Any]
) -> list[TestCase]:
    """Merge suggested cases into a collection without touching existing ones.

    Each suggestion is a ``{"scenario": str, "tests": [...]}`` mapping. Cases
    are routed to the group with the same title (or, failing that, the same
    short feature name); a new group is created otherwise. A case whose id or
    title already exists in the target group is skipped.

    Args:
        collection: The groups to extend in place.
        suggestions: Suggested scenario entries.

    Returns:
        The cases that were actually appended, in order.
    """
    added: list[TestCase] = []

    for entry in suggestions:
        if not isinstance(entry, dict):
            logger.warning("Ignoring suggestion that is not a mapping: %r", entry)
            continue

        scenario_title = str(entry.get("scenario") or "").strip()
        tests = entry.get("tests")
        if not scenario_title or not isinstance(tests, list):
            logger.warning("Ignoring suggestion without scenario title or test list")
            continue

        group = _target_group(collection, scenario_title)
        for raw_case in tests:
            try:
                case = TestCase.model_validate(raw_case)
            except ValidationError as e:
                logger.warning(
                    "Ignoring invalid suggested case for %r: %s", scenario_title, e
                )
                continue

            if not case.title:
                logger.warning("Ignoring suggested case without a title for %r", scenario_title)
                continue
            if not case.description:
                case.description = case.title

            if group.has_case(case):
                logger.debug("Skipping duplicate suggestion %r", case.id or case.title)
                continue

            group.tests.append(case)
            added.append(case)

    return added
