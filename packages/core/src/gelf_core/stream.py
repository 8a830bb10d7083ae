"""Streamed free-form review.

A producer thread feeds response chunks from the provider into a queue; the
consumer iterates the ReviewStream and re-renders on every chunk. The queue
carries three kinds of item: text chunks, one terminal ``_DONE`` marker on
success, or one ``_Failure`` carrying the error.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterator
from dataclasses import dataclass

from gelf_core.prompts import build_stream_review_prompt
from gelf_core.providers.base import BaseProvider, ProviderError

logger = logging.getLogger(__name__)

_DONE = object()


@dataclass
class _Failure:
    error: Exception


class ReviewStream:
    """Iterate over review text as it arrives.

    Iteration ends when the producer finishes, or raises ProviderError if it
    fails. The producer runs in a daemon thread, so abandoning the iteration
    (for example on Ctrl-C) does not keep the process alive.
    """

    def __init__(self, provider: BaseProvider, diff: str, language: str = "english"):
        self._provider = provider
        self._prompt = build_stream_review_prompt(diff, language)
        self._queue: queue.Queue = queue.Queue()
        self._thread: threading.Thread | None = None

    def start(self) -> ReviewStream:
        if self._thread is None:
            self._thread = threading.Thread(target=self._produce, name="gelf-stream", daemon=True)
            self._thread.start()
        return self

    def _produce(self) -> None:
        try:
            self._provider.complete_streaming(self._prompt, self._queue.put)
        except Exception as e:
            logger.debug("Review stream failed: %s", e)
            self._queue.put(_Failure(e))
        else:
            self._queue.put(_DONE)

    def __iter__(self) -> Iterator[str]:
        self.start()
        while True:
            item = self._queue.get()
            if item is _DONE:
                return
            if isinstance(item, _Failure):
                if isinstance(item.error, ProviderError):
                    raise item.error
                raise ProviderError(str(item.error)) from item.error
            yield item
