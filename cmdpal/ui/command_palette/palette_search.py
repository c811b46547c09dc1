"""
Debounced remote search for the command palette.

Each query change restarts a debounce timer. When it fires, the sequence
counter is bumped and captured by the outgoing call; a response is applied
only if no newer call has started since. That fencing token stands in for
request cancellation, which the provider's transport may not support.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from cmdpal.config.constants import (
    REMOTE_SEARCH_DEBOUNCE_SECONDS,
    REMOTE_SEARCH_LIMIT,
    REMOTE_SEARCH_MIN_QUERY_LENGTH,
    REMOTE_SEARCH_TIMEOUT_SECONDS,
)
from cmdpal.exceptions import RemoteSearchError

from .palette_commands import CommandNode

logger = logging.getLogger(__name__)

SearchProvider = Callable[[str], Awaitable[Sequence[Any]]]


@dataclass
class RemoteSearchState:
    """Owned by the coordinator; read-only to everyone else."""

    last_issued_query: str = ""
    sequence: int = 0
    results: list[CommandNode] = field(default_factory=list)
    pending_timer: asyncio.TimerHandle | None = None


class RemoteSearchCoordinator:
    """Debounce, fence and merge calls to a remote search provider."""

    def __init__(
        self,
        search: SearchProvider,
        to_node: Callable[[Any], CommandNode],
        on_results: Callable[[], None] | None = None,
        debounce_seconds: float = REMOTE_SEARCH_DEBOUNCE_SECONDS,
        min_query_length: int = REMOTE_SEARCH_MIN_QUERY_LENGTH,
        limit: int = REMOTE_SEARCH_LIMIT,
        timeout_seconds: float | None = REMOTE_SEARCH_TIMEOUT_SECONDS,
    ):
        self._search = search
        self._to_node = to_node
        self.on_results = on_results
        self.debounce_seconds = debounce_seconds
        self.min_query_length = min_query_length
        self.limit = limit
        self.timeout_seconds = timeout_seconds
        self._state = RemoteSearchState()
        self._tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> RemoteSearchState:
        return self._state

    @property
    def results(self) -> list[CommandNode]:
        return list(self._state.results)

    def _cancel_timer(self) -> None:
        if self._state.pending_timer is not None:
            self._state.pending_timer.cancel()
            self._state.pending_timer = None

    def _set_results(self, results: list[CommandNode]) -> None:
        if results == self._state.results:
            return
        self._state.results = results
        if self.on_results:
            try:
                self.on_results()
            except Exception:
                logger.exception("Remote results listener failed")

    def on_query_change(self, query: str) -> None:
        """Schedule a remote lookup for `query`, or clear results if it's too short."""
        self._cancel_timer()

        if len(query) < self.min_query_length:
            # Fence off any call still in flight for the longer query
            self._state.sequence += 1
            self._set_results([])
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, skipping remote search")
            return
        self._state.pending_timer = loop.call_later(self.debounce_seconds, self._fire, query)

    def _fire(self, query: str) -> None:
        self._state.pending_timer = None
        self._state.sequence += 1
        self._state.last_issued_query = query
        task = asyncio.ensure_future(self._run(query, self._state.sequence))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _call_provider(self, query: str) -> Sequence[Any]:
        try:
            if self.timeout_seconds is None:
                return await self._search(query)
            return await asyncio.wait_for(self._search(query), timeout=self.timeout_seconds)
        except asyncio.CancelledError:
            raise
        except asyncio.TimeoutError as e:
            raise RemoteSearchError(
                "Remote search timed out", query=query, timeout_seconds=self.timeout_seconds
            ) from e
        except Exception as e:
            raise RemoteSearchError(f"Remote search failed: {e}", query=query) from e

    async def _run(self, query: str, my_sequence: int) -> None:
        try:
            candidates = await self._call_provider(query)
        except RemoteSearchError as e:
            logger.warning(f"Player search error: {e}")
            return

        if my_sequence != self._state.sequence:
            logger.debug(f"Discarding stale remote results for {query!r}")
            return

        try:
            nodes = [self._to_node(c) for c in list(candidates or ())[: self.limit]]
        except Exception as e:
            logger.warning(f"Could not map remote results for {query!r}: {e}")
            return
        self._set_results(nodes)

    async def wait_idle(self) -> None:
        """Wait for in-flight provider calls to settle."""
        pending = [t for t in self._tasks if not t.done()]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def reset(self) -> None:
        """Drop the pending timer and remote results, fencing off in-flight calls."""
        self._cancel_timer()
        self._state.sequence += 1
        self._state.last_issued_query = ""
        self._set_results([])

    def teardown(self) -> None:
        """Cancel everything; the coordinator must not fire after this."""
        self.reset()
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
