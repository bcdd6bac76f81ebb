"""Code generation through Claude, returning a checked file set."""

import logging
import re
from collections.abc import Iterable

from ..conformance.assertions import URL_PATTERN
from ..conformance.fixture import page_object_identifiers
from ..ingest.models import ScenarioGroup
from .client import ClaudeService
from .parser import parse_file_set
from .prompts import GENERATION_SYSTEM_PROMPT, build_generation_prompt

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"

STEP_URL_PATTERN = re.compile(f"({URL_PATTERN.pattern})")
DATA_URL_PATTERN = re.compile(rf"url:\s*({URL_PATTERN.pattern})", re.IGNORECASE)

NAVIGATION_PHRASES = ("navigate to", "go to")


def discover_base_url(groups: Iterable[ScenarioGroup]) -> str:
    """Find the application URL from navigation steps or ``url:`` test data."""
    for group in groups:
        for case in group.tests:
            for step in case.steps:
                lowered = step.lower()
                if "http" in lowered and any(p in lowered for p in NAVIGATION_PHRASES):
                    match = STEP_URL_PATTERN.search(step)
                    if match:
                        return match.group(1)
            match = DATA_URL_PATTERN.search(case.data)
            if match:
                return match.group(1)
    return DEFAULT_BASE_URL


class CodeProducer(ClaudeService):
    """Asks Claude for the page objects, specs and fixture of a project."""

    max_tokens = 8192
    temperature = 0.1

    def generate(
        self,
        groups: Iterable[ScenarioGroup],
        project_name: str,
        base_url: str | None = None,
        page_objects: list[str] | None = None,
        actions: Iterable[str] = (),
    ) -> dict[str, str]:
        """Generate the dynamic project files in one blocking call.

        Args:
            groups: Scenario groups, ideally already enriched.
            project_name: Name used in the prompt.
            base_url: Application URL; discovered from the cases when omitted.
            page_objects: Page-object names; derived from the groups when omitted.
            actions: Action verbs found during enrichment.

        Returns:
            The generated path -> content mapping.

        Raises:
            APIError: If the API call fails.
            ProducerContractError: If the reply is not a usable file mapping.
        """
        groups = list(groups)
        base_url = base_url or discover_base_url(groups)
        if page_objects is None:
            page_objects = page_object_identifiers(groups)

        prompt = build_generation_prompt(groups, project_name, base_url, page_objects, actions)
        logger.debug(
            "Requesting generation for %r: %d scenario(s), base URL %s",
            project_name,
            len(groups),
            base_url,
        )
        files = parse_file_set(self.complete(GENERATION_SYSTEM_PROMPT, prompt))
        logger.debug("Producer returned %d file(s)", len(files))
        return files
