# scoreboard/refresh.py
"""
Polling loop that keeps a BoardState fresh.

- start() runs one cycle immediately and then one every `interval` seconds on a daemon thread.
- reconfigure() swaps the source and fetches right away instead of waiting for the next tick.
- stop() cancels the loop; a fetch still in flight is allowed to finish but its result is dropped.

A failed cycle keeps the last good entries on screen and only sets `error`.
Every cycle takes a ticket when it starts and its result is applied only if no newer
cycle has already been applied, so a slow response can never replace fresher data.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional

from config import REFRESH_SECONDS, SourceConfig
from scoreboard.errors import ScoreboardError
from scoreboard.models import BoardState, RawRecord
from scoreboard.ranking import rank_records
from scoreboard.sources import fetch_records

logger = logging.getLogger(__name__)

Fetcher = Callable[[SourceConfig], List[RawRecord]]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RefreshOrchestrator:
    def __init__(
        self,
        source: SourceConfig,
        fetch: Fetcher = fetch_records,
        interval: float = REFRESH_SECONDS,
        clock: Callable[[], datetime] = _now,
    ):
        self._source = source
        self._fetch = fetch
        self.interval = interval
        self._clock = clock

        self._lock = threading.Lock()
        self._state = BoardState()
        self._tickets = itertools.count(1)
        self._applied_ticket = 0
        self._generation = 0

        self._stopped = threading.Event()
        self._wake = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # ----------------------------
    # State
    # ----------------------------

    @property
    def source(self) -> SourceConfig:
        return self._source

    def snapshot(self) -> BoardState:
        with self._lock:
            return self._state

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ----------------------------
    # Cycle
    # ----------------------------

    def run_cycle(self) -> BoardState:
        """Fetch, rank and publish once. Never raises; failures land in state.error."""
        return self._cycle(self._stopped)

    def _cycle(self, stopped: threading.Event) -> BoardState:
        with self._lock:
            ticket = next(self._tickets)
            generation = self._generation
            source = self._source

        entries, error = None, None
        try:
            entries = tuple(rank_records(self._fetch(source)))
        except Exception as e:
            logger.warning("Refresh cycle %d failed: %s", ticket, e, exc_info=not isinstance(e, ScoreboardError))
            error = str(e) or "Failed to load data"

        self._apply(ticket, generation, entries, error, stopped)
        return self.snapshot()

    def _apply(self, ticket: int, generation: int, entries, error: Optional[str], stopped: threading.Event) -> None:
        with self._lock:
            if stopped.is_set():
                logger.debug("Dropping cycle %d: refresher stopped", ticket)
                return
            if generation != self._generation or ticket <= self._applied_ticket:
                logger.info("Dropping stale cycle %d (latest applied %d)", ticket, self._applied_ticket)
                return

            self._applied_ticket = ticket
            if error is None:
                self._state = BoardState(
                    entries=entries,
                    loading=False,
                    error=None,
                    last_updated=self._clock(),
                )
            else:
                self._state = replace(self._state, loading=False, error=error)

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start(self) -> None:
        if self.running and not self._stopped.is_set():
            return
        # Fresh events per loop: a previous loop still stuck in a fetch keeps its own, already set
        self._stopped = threading.Event()
        self._wake = threading.Event()
        self._thread = threading.Thread(
            target=self._loop,
            args=(self._stopped, self._wake),
            name="scoreboard-refresh",
            daemon=True,
        )
        self._thread.start()

    def _loop(self, stopped: threading.Event, wake: threading.Event) -> None:
        while not stopped.is_set():
            wake.clear()
            self._cycle(stopped)
            # Returns early on reconfigure() or stop()
            wake.wait(self.interval)

    def reconfigure(self, source: SourceConfig) -> None:
        """Switch data source; results from the old source are discarded."""
        with self._lock:
            if source == self._source:
                return
            self._source = source
            self._generation += 1
        logger.info("Source changed; refreshing now")
        self._wake.set()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stopped.set()
        self._wake.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
