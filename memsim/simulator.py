"""Cycle-by-cycle memory system simulation fed from a request trace."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from .bus import BusDirectionStrategy
from .controller import MemoryController
from .requests import Request

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 250_000


class MemorySimulator:
    """Feeds requests from a trace into a memory controller, one per cycle."""

    def __init__(
        self,
        trace_reader: Iterable[Request],
        scheduler,
        queue,
        bus_direction_strategy: BusDirectionStrategy,
        dram,
        num_channels: int,
    ) -> None:
        self.cycle = 0
        self.num_channels = num_channels
        self.memory_controller = MemoryController(scheduler, queue, bus_direction_strategy, dram)
        self.reader = iter(trace_reader)
        self.pending_request: Request | None = None
        self._t = time.perf_counter()
        self._t0 = self._t

    def tick(self) -> bool:
        """Advance one cycle; return False once the trace is exhausted."""
        self.cycle += 1
        self.memory_controller.tick()
        if self.cycle % PROGRESS_INTERVAL == 0:
            now = time.perf_counter()
            logger.info(
                "Cycle: %s. ... %.6fs\t\t%.6fs", self.cycle, now - self._t, now - self._t0
            )
            self._t = now
        pending, self.pending_request = self.pending_request, None
        if pending is None:
            return self.fetch_send()
        return self.retry_pending_send(pending)

    def retry_pending_send(self, req: Request) -> bool:
        """Try again to queue a request that was rejected earlier."""
        self.pending_request = self.send_request(req)
        return True

    def fetch_send(self) -> bool:
        """Read the next request and queue it; return False at the end of the trace."""
        req = self.fetch_request()
        if req is None:
            logger.info("fetch_send. EOF")
            return False
        self.pending_request = self.send_request(req)
        return True

    def send_request(self, req: Request) -> Request | None:
        return self.memory_controller.enqueue(req)

    def fetch_request(self) -> Request | None:
        return next(self.reader, None)

    def run(self) -> int:
        """Tick until the trace is exhausted; return the number of cycles simulated."""
        while self.tick():
            pass
        return self.cycle