"""Extracting JSON payloads from LLM responses."""

import json
import re
from typing import Any

from pydantic import ValidationError

from ..conformance.errors import ProducerContractError
from ..conformance.processor import ensure_file_set
from ..ingest.models import Analysis
from .errors import ResponseParseError

# Pattern to match a fenced code block, optionally tagged as json
FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*\n(.*?)\n\s*```", re.DOTALL)

TRAILING_COMMA_PATTERN = re.compile(r",\s*([\]}])")


def _candidates(text: str) -> list[str]:
    stripped = text.strip()
    candidates = [stripped]

    match = FENCED_BLOCK_PATTERN.search(stripped)
    if match:
        candidates.append(match.group(1).strip())

    spans = []
    for opener, closer in (("{", "}"), ("[", "]")):
        start = stripped.find(opener)
        end = stripped.rfind(closer)
        if start != -1 and end > start:
            spans.append((start, end))

    # The outermost structure is the one that opens first
    for start, end in sorted(spans):
        candidates.append(stripped[start : end + 1])

    return candidates


def extract_json(text: str) -> Any:
    """Parse the JSON payload of a response.

    Tries, in order: the whole text, a fenced code block, and the span from
    the first opening to the last closing bracket. Trailing commas are
    removed before giving up on a candidate.

    Raises:
        ResponseParseError: If no candidate parses.
    """
    for candidate in _candidates(text):
        for attempt in (candidate, TRAILING_COMMA_PATTERN.sub(r"\1", candidate)):
            try:
                return json.loads(attempt)
            except json.JSONDecodeError:
                continue

    preview = text.strip()[:200]
    raise ResponseParseError(f"Response does not contain valid JSON: {preview!r}", text)


def parse_analysis(text: str) -> Analysis:
    """Parse an enrichment response into an Analysis.

    Raises:
        ResponseParseError: If the response is not a JSON object.
    """
    data = extract_json(text)
    if not isinstance(data, dict):
        raise ResponseParseError(
            f"Expected a JSON object, got {type(data).__name__}", text
        )
    try:
        return Analysis.model_validate(data)
    except ValidationError as e:
        raise ResponseParseError(f"Invalid analysis: {e}", text) from e


def parse_file_set(text: str) -> dict[str, str]:
    """Parse a code generation response into a path -> content mapping.

    Raises:
        ProducerContractError: If the response is not a non-empty mapping of
            paths to text.
    """
    try:
        data = extract_json(text)
    except ResponseParseError as e:
        raise ProducerContractError(f"Generated output is not JSON: {e}") from e
    return ensure_file_set(data)


def parse_suggestions(text: str) -> list[Any]:
    """Parse a suggestion response into a list of scenario entries.

    A single scenario object is accepted and wrapped in a list.

    Raises:
        ResponseParseError: If the response is neither a list nor an object.
    """
    data = extract_json(text)
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise ResponseParseError(
            f"Expected a JSON array of scenarios, got {type(data).__name__}", text
        )
    return data
