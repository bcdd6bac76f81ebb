"""Fail-soft enrichment of test cases with structured analysis."""

import logging
from collections.abc import Callable, Iterable

from ..ingest.models import Analysis, CaseAnalysis, ScenarioGroup, TestCase
from .client import ClaudeService
from .errors import LLMError
from .parser import parse_analysis
from .prompts import ENRICHMENT_SYSTEM_PROMPT, build_enrichment_prompt

logger = logging.getLogger(__name__)

# Any callable with this shape can stand in for the analyzer.
Analyze = Callable[[str], Analysis | None]


class CaseAnalyzer(ClaudeService):
    """Analyzes single test-case fields with Claude."""

    max_tokens = 1024
    temperature = 0.2

    def analyze(self, text: str) -> Analysis | None:
        """Analyze one text field.

        Never raises for API or parsing problems: those are logged and the
        field is simply left without analysis.

        Args:
            text: A step, description or expected result.

        Returns:
            The analysis, or None if the text is empty or analysis failed.
        """
        if not text or not text.strip():
            return None

        try:
            response = self.complete(ENRICHMENT_SYSTEM_PROMPT, build_enrichment_prompt(text))
            analysis = parse_analysis(response)
        except LLMError as e:
            logger.warning("Analysis unavailable for %r: %s", text[:50], e)
            return None

        if not analysis.original_text:
            analysis.original_text = text
        return analysis


def _safe_analyze(analyze: Analyze, text: str) -> Analysis | None:
    if not text.strip():
        return None
    try:
        return analyze(text)
    except LLMError as e:
        logger.warning("Analysis unavailable for %r: %s", text[:50], e)
        return None


def analyze_case(case: TestCase, analyze: Analyze) -> CaseAnalysis:
    """Analyze each step, the description and the expected result of a case."""
    steps = []
    for step in case.steps:
        result = _safe_analyze(analyze, step)
        if result is not None:
            steps.append(result)

    return CaseAnalysis(
        steps=steps,
        description=_safe_analyze(analyze, case.description),
        expected=_safe_analyze(analyze, case.expected),
    )


def enrich_groups(groups: Iterable[ScenarioGroup], analyze: Analyze) -> list[str]:
    """Attach analysis to every case, one sequential call per text field.

    Args:
        groups: Scenario groups; their cases are updated in place.
        analyze: The analysis capability.

    Returns:
        The distinct lower-case actions seen, in first-seen order.
    """
    actions: dict[str, None] = {}

    for group in groups:
        for case in group.tests:
            case_analysis = analyze_case(case, analyze)
            case.analysis = None if case_analysis.is_empty else case_analysis

            found = [*case_analysis.steps, case_analysis.description, case_analysis.expected]
            for analysis in found:
                if analysis is not None and analysis.action:
                    actions.setdefault(analysis.action, None)

    logger.debug("Enrichment found %d distinct action(s)", len(actions))
    return list(actions)
