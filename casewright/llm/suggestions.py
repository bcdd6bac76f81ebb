"""Suggesting missing test cases with Claude."""

import logging
from collections.abc import Iterable
from typing import Any

from ..ingest.models import ScenarioGroup
from .client import ClaudeService
from .parser import parse_suggestions
from .prompts import SUGGESTION_SYSTEM_PROMPT, build_suggestion_prompt

logger = logging.getLogger(__name__)


class CaseSuggester(ClaudeService):
    """Asks Claude for test cases the sheet is missing."""

    temperature = 0.7

    def suggest(
        self,
        groups: Iterable[ScenarioGroup],
        project_name: str,
        scenario_title: str | None = None,
        count: int = 4,
    ) -> list[Any]:
        """Get suggested scenario entries, ready for ``merge_suggestions``.

        Raises:
            APIError: If the API call fails.
            ResponseParseError: If the reply is not a JSON list of scenarios.
        """
        prompt = build_suggestion_prompt(groups, project_name, scenario_title, count)
        suggestions = parse_suggestions(self.complete(SUGGESTION_SYSTEM_PROMPT, prompt))
        logger.debug("Received %d suggested scenario entr(ies)", len(suggestions))
        return suggestions
