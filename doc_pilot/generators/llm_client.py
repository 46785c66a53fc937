"""Gemini API client for documentation lookups.

Wraps the google-generativeai SDK behind a small interface that sends
one prompt and returns the generated text with token usage. Failures
from the SDK are re-raised as LLMError so callers handle a single type.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import google.generativeai as genai

from doc_pilot.utils.config import APIConfig

logger = logging.getLogger(__name__)

# Substrings Gemini puts in the error message when the key is rejected.
INVALID_API_KEY_MARKERS = ("API_KEY_INVALID", "API key")


class LLMError(Exception):
    """Raised when a generation request to the model fails."""


def is_invalid_api_key_error(error: BaseException) -> bool:
    """Check whether an error means the API key was rejected.

    Args:
        error: The exception raised by a generation call.

    Returns:
        True if the error message names an invalid API key.
    """
    message = str(error)
    return any(marker in message for marker in INVALID_API_KEY_MARKERS)


@dataclass
class TokenUsage:
    """Token usage statistics for a single API call.

    Attributes:
        input_tokens: Number of tokens in the prompt.
        output_tokens: Number of tokens in the response.
    """

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        """Total tokens consumed."""
        return self.input_tokens + self.output_tokens


@dataclass
class GenerationResult:
    """Result of an LLM generation call.

    Attributes:
        content: The generated text content.
        usage: Token usage statistics.
        model: Model that produced the result.
    """

    content: str
    usage: TokenUsage
    model: str


class LLMClient:
    """Client for the Google Gemini API.

    The underlying GenerativeModel is built on first use, so creating
    a client never touches the network.
    """

    def __init__(self, api_key: str, config: Optional[APIConfig] = None) -> None:
        """Initialize the LLM client.

        Args:
            api_key: Gemini API key.
            config: API configuration. Uses defaults if not provided.
        """
        self.config = config or APIConfig()
        self._api_key = api_key
        self._model: Optional[Any] = None

    @property
    def model(self) -> Any:
        """Lazily configure the SDK and build the GenerativeModel.

        Raises:
            ValueError: If no API key was given.
        """
        if self._model is None:
            if not self._api_key:
                raise ValueError("A Gemini API key is required before making API calls.")
            genai.configure(api_key=self._api_key)
            self._model = genai.GenerativeModel(
                model_name=self.config.model,
                generation_config={
                    "temperature": self.config.temperature,
                    "max_output_tokens": self.config.max_output_tokens,
                },
            )
            logger.debug("Initialized Gemini model %s", self.config.model)
        return self._model

    def generate(self, prompt: str) -> GenerationResult:
        """Send a prompt to Gemini and return the generated text.

        Args:
            prompt: The full prompt text.

        Returns:
            A GenerationResult with the response text and usage.

        Raises:
            ValueError: If no API key was given.
            LLMError: If the request fails or the response has no text.
        """
        model = self.model
        logger.debug("Generating response (prompt length: %d chars)", len(prompt))

        try:
            response = model.generate_content(prompt)
            content = response.text
        except Exception as e:
            raise LLMError(str(e)) from e

        usage = _usage_from_response(response)
        logger.info(
            "Generated %d tokens (input: %d, output: %d)",
            usage.total_tokens,
            usage.input_tokens,
            usage.output_tokens,
        )
        return GenerationResult(content=content, usage=usage, model=self.config.model)


def _usage_from_response(response: Any) -> TokenUsage:
    """Read token counts from a response's usage metadata, if present."""
    metadata = getattr(response, "usage_metadata", None)
    if metadata is None:
        return TokenUsage()
    return TokenUsage(
        input_tokens=getattr(metadata, "prompt_token_count", 0) or 0,
        output_tokens=getattr(metadata, "candidates_token_count", 0) or 0,
    )
