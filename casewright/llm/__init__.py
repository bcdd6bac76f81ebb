"""LLM-backed services: enrichment, code generation and suggestions."""

from .client import DEFAULT_MODEL, DEFAULT_TIMEOUT, ClaudeService
from .enrichment import Analyze, CaseAnalyzer, analyze_case, enrich_groups
from .errors import APIError, APIKeyMissingError, LLMError, ResponseParseError
from .parser import extract_json, parse_analysis, parse_file_set, parse_suggestions
from .producer import CodeProducer, discover_base_url
from .suggestions import CaseSuggester

__all__ = [
    # Client
    "ClaudeService",
    "DEFAULT_MODEL",
    "DEFAULT_TIMEOUT",
    # Services
    "CaseAnalyzer",
    "CodeProducer",
    "CaseSuggester",
    "Analyze",
    "analyze_case",
    "enrich_groups",
    "discover_base_url",
    # Errors
    "LLMError",
    "APIKeyMissingError",
    "APIError",
    "ResponseParseError",
    # Parser
    "extract_json",
    "parse_analysis",
    "parse_file_set",
    "parse_suggestions",
]
