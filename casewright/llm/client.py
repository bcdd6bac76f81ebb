"""Shared Anthropic client handling for the LLM-backed services."""

import logging
import os
from typing import TYPE_CHECKING

from .errors import APIError, APIKeyMissingError

if TYPE_CHECKING:
    from anthropic import Anthropic

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_TIMEOUT = 600.0


class ClaudeService:
    """Base class for services that send one prompt and read back text."""

    max_tokens = 4096
    temperature = 0.2

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the service.

        Args:
            api_key: Anthropic API key. If not provided, uses ANTHROPIC_API_KEY env var.
            model: Claude model to use.
            timeout: Seconds to wait for a single response before failing.

        Raises:
            APIKeyMissingError: If no API key is configured.
        """
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise APIKeyMissingError()
        self.model = model
        self.timeout = timeout
        self._client: "Anthropic | None" = None

    @property
    def client(self) -> "Anthropic":
        """Lazy-load the Anthropic client."""
        if self._client is None:
            try:
                from anthropic import Anthropic
            except ImportError:
                raise APIKeyMissingError(
                    "The anthropic package is not installed. "
                    "Install it with: pip install casewright[llm]"
                )
            self._client = Anthropic(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def complete(self, system: str, prompt: str) -> str:
        """Send one prompt and return the concatenated text of the reply.

        Raises:
            APIError: If the API call fails.
            APIKeyMissingError: If the API key is rejected.
        """
        logger.debug("Calling %s (%d prompt chars)", self.model, len(prompt))
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        except APIKeyMissingError:
            raise
        except Exception as e:
            # Check for specific anthropic errors
            error_type = type(e).__name__
            if "AuthenticationError" in error_type:
                raise APIKeyMissingError("Claude rejected the configured API key") from e
            if "APIError" in error_type or "APIStatusError" in error_type:
                status_code = getattr(e, "status_code", None)
                raise APIError(str(e), status_code=status_code) from e
            raise APIError(f"Unexpected error calling {self.model}: {e}") from e

        response_text = ""
        for block in response.content:
            if hasattr(block, "text"):
                response_text += block.text
        return response_text
