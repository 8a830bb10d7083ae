"""Base provider implementing the Template Method pattern.

Every AI backend exposes the same two operations to the rest of gelf:
    complete(prompt)                     → _call_with_retry() → _call_api()
    complete_streaming(prompt, on_chunk) → _stream_api()

Subclasses implement two things only:
  - __init__: validate and store the SDK/HTTP client
  - _call_api: make one raw API call and return the text response
and may override _stream_api when the backend supports incremental output.

Prompts are single-turn: no conversation state is kept between calls.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_MAX_TOKENS = 4096
_TIMEOUT = 120.0


class ProviderError(Exception):
    """The AI call failed after all retries, or returned no usable text."""


class BaseProvider(ABC):
    MAX_RETRIES: int = _MAX_RETRIES
    MAX_TOKENS: int = _MAX_TOKENS
    TIMEOUT: float = _TIMEOUT
    TEMPERATURE: float = 0.3

    # Model identifiers used when the config does not name one.
    FAST_MODEL: str = ""
    STRONG_MODEL: str = ""

    def __init__(self, model: str | None = None):
        self.model = model or self.STRONG_MODEL

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def complete(self, prompt: str, temperature: float | None = None) -> str:
        """Send one prompt and return the full text response.

        Raises ProviderError when every attempt fails or the text is empty.
        """
        temp = self.TEMPERATURE if temperature is None else temperature
        text = self._call_with_retry(prompt, temp)
        if not text or not text.strip():
            raise ProviderError(f"{self.__class__.__name__}: empty text in response")
        return text

    def complete_streaming(
        self,
        prompt: str,
        on_chunk: Callable[[str], None],
        temperature: float | None = None,
    ) -> None:
        """Deliver the response to ``on_chunk`` piece by piece.

        Returns once the response is complete. Errors are raised as
        ProviderError; chunks already delivered stay delivered.
        """
        temp = self.TEMPERATURE if temperature is None else temperature
        try:
            for chunk in self._stream_api(prompt, temp):
                if chunk:
                    on_chunk(chunk)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"{self.__class__.__name__} streaming failed: {e}") from e

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, prompt: str, temperature: float) -> str:
        """Make a single API call and return the raw text response.

        It should raise on failure — _call_with_retry handles retries and logging.
        """

    def _stream_api(self, prompt: str, temperature: float) -> Iterator[str]:
        """Yield response text incrementally.

        The default makes one blocking call and yields it whole, so every
        provider can be used in streaming mode.
        """
        yield self._call_with_retry(prompt, temperature)

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _call_with_retry(self, prompt: str, temperature: float) -> str:
        """Retry _call_api up to MAX_RETRIES times with exponential backoff."""
        for attempt in range(self.MAX_RETRIES):
            try:
                return self._call_api(prompt, temperature)
            except Exception as e:
                if attempt == self.MAX_RETRIES - 1:
                    logger.error(
                        "%s API failed after %d attempts: %s",
                        self.__class__.__name__,
                        self.MAX_RETRIES,
                        e,
                    )
                    raise ProviderError(f"{self.__class__.__name__} API failed: {e}") from e
                delay = 2**attempt
                logger.warning(
                    "%s API error (attempt %d/%d): %s. Retrying in %ds...",
                    self.__class__.__name__,
                    attempt + 1,
                    self.MAX_RETRIES,
                    e,
                    delay,
                )
                time.sleep(delay)
        raise ProviderError(f"{self.__class__.__name__}: no attempts made")
