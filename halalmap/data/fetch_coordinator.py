"""
Debounced, last-request-wins restaurant fetching.

The coordinator never performs I/O itself: schedule() records the latest
query, poll() turns it into a FetchTicket once the quiet period has passed,
and apply()/fail() accept a result only when it belongs to the most recently
issued ticket. BackgroundFetcher runs tickets on daemon threads and hands the
results back through a queue, to be drained on the UI thread.
"""
from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from halalmap.data.entity_source import FETCH_FAILED_MESSAGE, EntityQuery, EntitySourceError
from halalmap.geo.markers import Entity
from halalmap.map_settings import FETCH_DEBOUNCE_S

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchTicket:
    seq: int
    query: EntityQuery


class FetchCoordinator:
    def __init__(self, debounce_s: float = FETCH_DEBOUNCE_S, clock: Callable[[], float] = time.monotonic):
        self.debounce_s = debounce_s
        self._clock = clock
        self._pending: Optional[EntityQuery] = None
        self._due = 0.0
        self._last_query: Optional[EntityQuery] = None
        self._seq = 0
        self.entities: List[Entity] = []
        self.error: Optional[str] = None
        self.loading = False

    @property
    def latest_seq(self) -> int:
        return self._seq

    def schedule(self, query: EntityQuery, delay: Optional[float] = None):
        """Request a fetch for ``query`` after the quiet period; replaces any pending query."""
        self._pending = query
        self._due = self._clock() + (self.debounce_s if delay is None else delay)

    def poll(self) -> Optional[FetchTicket]:
        """Issue the pending request if its quiet period has elapsed."""
        if self._pending is None or self._clock() < self._due:
            return None
        self._seq += 1
        ticket = FetchTicket(self._seq, self._pending)
        self._last_query = self._pending
        self._pending = None
        self.loading = True
        return ticket

    def apply(self, seq: int, entities: List[Entity]) -> bool:
        """Accept a successful result. Returns False (and drops it) when superseded."""
        if seq != self._seq:
            log.debug("Discarding stale restaurant list (seq %d, latest %d)", seq, self._seq)
            return False
        self.entities = list(entities)
        self.error = None
        self.loading = False
        return True

    def fail(self, seq: int, message: str) -> bool:
        """Record a failed fetch: empty marker set plus a retryable error."""
        if seq != self._seq:
            log.debug("Discarding stale fetch error (seq %d, latest %d)", seq, self._seq)
            return False
        self.entities = []
        self.error = message
        self.loading = False
        return True

    def retry(self):
        """Re-issue the last query without waiting for the quiet period."""
        query = self._pending or self._last_query or EntityQuery()
        self.schedule(query, delay=0.0)


class BackgroundFetcher:
    """Runs fetches on daemon threads; results are posted to a queue for the UI thread."""

    def __init__(self, fetch_fn: Callable[[EntityQuery], List[Entity]]):
        self._fetch_fn = fetch_fn
        self.results: "queue.Queue[tuple]" = queue.Queue()

    def submit(self, ticket: FetchTicket) -> threading.Thread:
        def work():
            try:
                entities = self._fetch_fn(ticket.query)
            except EntitySourceError as exc:
                self.results.put((ticket.seq, None, str(exc)))
                return
            except Exception:
                log.exception("Restaurant fetch %d crashed", ticket.seq)
                self.results.put((ticket.seq, None, FETCH_FAILED_MESSAGE))
                return
            self.results.put((ticket.seq, entities, None))

        t = threading.Thread(target=work, daemon=True)
        t.start()
        return t

    def drain(self, coordinator: FetchCoordinator) -> int:
        """Apply every finished result; returns how many were accepted."""
        applied = 0
        while True:
            try:
                seq, entities, error = self.results.get_nowait()
            except queue.Empty:
                return applied
            if error is not None:
                ok = coordinator.fail(seq, error)
            else:
                ok = coordinator.apply(seq, entities)
            applied += int(ok)
