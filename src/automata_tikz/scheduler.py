"""Latest-request-wins runner for interactive callers.

Each ``submit`` supersedes every earlier request. Requests run one at a time
on a single worker; a request waits ``debounce`` seconds first and is dropped
with ``SupersededError`` if a newer one arrived meanwhile. While running, the
wrapped function receives a ``cancelled`` callable that turns true as soon as
the request is superseded, so a long grid search can stop early.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from automata_tikz.config import DEFAULT_DEBOUNCE
from automata_tikz.errors import SupersededError

logger = logging.getLogger(__name__)


class LatestRequestRunner:
    """Run ``fn`` for the most recent request only.

    ``fn`` must accept a ``cancelled`` keyword argument.
    """

    def __init__(self, fn: Callable[..., Any], debounce: float = DEFAULT_DEBOUNCE) -> None:
        self._fn = fn
        self._debounce = debounce
        self._lock = threading.Lock()
        self._generation = 0
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="automata-tikz")

    def submit(self, *args: Any, **kwargs: Any) -> Future:
        """Queue a request; the returned future fails with ``SupersededError`` if it loses."""
        with self._lock:
            self._generation += 1
            token = self._generation
        return self._executor.submit(self._run, token, args, kwargs)

    def is_stale(self, token: int) -> bool:
        with self._lock:
            return token != self._generation

    def _run(self, token: int, args: tuple, kwargs: dict) -> Any:
        if self.is_stale(token):
            raise SupersededError(f"request {token} superseded before start")
        if self._debounce > 0:
            time.sleep(self._debounce)
        if self.is_stale(token):
            raise SupersededError(f"request {token} superseded during debounce")

        logger.debug("running request %d", token)
        result = self._fn(*args, cancelled=lambda: self.is_stale(token), **kwargs)

        if self.is_stale(token):
            raise SupersededError(f"request {token} superseded while running")
        return result

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> LatestRequestRunner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
