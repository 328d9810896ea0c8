"""Request queues: one pair of read/write queues per rank, or per bank."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from .requests import BusDirection, MemoryAddress, Request, RequestType

logger = logging.getLogger(__name__)


def _swap_remove(items: list[Request], pos: int) -> Request:
    """Remove ``items[pos]`` by moving the last element into its place."""
    last = items.pop()
    if pos == len(items):
        return last
    removed = items[pos]
    items[pos] = last
    return removed


def _take_by_block(items: list[Request], block_address: int) -> Request | None:
    pos = next(
        (i for i, item in enumerate(items) if item.memory_address.block_address == block_address),
        None,
    )
    if pos is None:
        return None
    return _swap_remove(items, pos)


class PerRankQueue:
    """A single read queue and a single write queue, each with a capacity."""

    def __init__(
        self, read_queue_size: int, write_queue_size: int, rng: random.Random | None = None
    ) -> None:
        self.read_queue: list[Request] = []
        self.write_queue: list[Request] = []
        self.read_queue_capacity = read_queue_size
        self.write_queue_capacity = write_queue_size
        self._rng = rng if rng is not None else random.Random()

    @property
    def num_reads(self) -> int:
        return len(self.read_queue)

    @property
    def num_writes(self) -> int:
        return len(self.write_queue)

    def enqueue(self, req: Request) -> Request | None:
        """Queue ``req``; return it back if its queue is full, else None."""
        if req.request_type is RequestType.READ:
            queue, capacity = self.read_queue, self.read_queue_capacity
        else:
            queue, capacity = self.write_queue, self.write_queue_capacity
        if len(queue) >= capacity:
            return req
        queue.append(req)
        return None

    def dequeue(self, addr: MemoryAddress, request_type: RequestType) -> int | None:
        """Remove the request for ``addr``; return the cycle it was queued at."""
        queue = self.read_queue if request_type is RequestType.READ else self.write_queue
        removed = _take_by_block(queue, addr.block_address)
        return None if removed is None else removed.stat.queued

    def all_requests(self, bus_direction: BusDirection) -> Sequence[Request]:
        return self.read_queue if bus_direction is BusDirection.READ else self.write_queue

    def queue_length(self) -> tuple[int, int]:
        return self.num_reads, self.num_writes

    def remove_random_request(self) -> Request | None:
        """Drop a random queued request, choosing reads or writes at random."""
        candidates = [q for q in (self.read_queue, self.write_queue) if q]
        if not candidates:
            return None
        queue = candidates[0] if len(candidates) == 1 else self._rng.choice(candidates)
        removed = _swap_remove(queue, self._rng.randrange(len(queue)))
        logger.info("removing %s", removed.memory_address.block_address)
        return removed


class PerBankQueue:
    """Read and write queues per (bank group, bank), with capacities shared by all banks."""

    def __init__(
        self, read_queue_size: int, write_queue_size: int, num_bank_groups: int, num_banks: int
    ) -> None:
        self.read_queue: list[list[list[Request]]] = [
            [[] for _ in range(num_banks)] for _ in range(num_bank_groups)
        ]
        self.write_queue: list[list[list[Request]]] = [
            [[] for _ in range(num_banks)] for _ in range(num_bank_groups)
        ]
        self.read_queue_capacity = read_queue_size
        self.write_queue_capacity = write_queue_size
        self.num_reads = 0
        self.num_writes = 0

    def enqueue(self, req: Request) -> Request | None:
        """Queue ``req`` in its bank; return it back if the total is at capacity."""
        addr = req.memory_address
        if req.request_type is RequestType.READ:
            if self.num_reads >= self.read_queue_capacity:
                return req
            self.read_queue[addr.bank_group][addr.bank].append(req)
            self.num_reads += 1
        else:
            if self.num_writes >= self.write_queue_capacity:
                return req
            self.write_queue[addr.bank_group][addr.bank].append(req)
            self.num_writes += 1
        return None

    def dequeue(self, addr: MemoryAddress, request_type: RequestType) -> int | None:
        """Remove the request for ``addr`` from its bank; return its queued cycle."""
        if request_type is RequestType.READ:
            removed = _take_by_block(self.read_queue[addr.bank_group][addr.bank], addr.block_address)
            if removed is not None:
                self.num_reads -= 1
        else:
            removed = _take_by_block(
                self.write_queue[addr.bank_group][addr.bank], addr.block_address
            )
            if removed is not None:
                self.num_writes -= 1
        return None if removed is None else removed.stat.queued

    def requests(self, bus_direction: BusDirection, bank_group: int, bank: int) -> Sequence[Request]:
        queues = self.read_queue if bus_direction is BusDirection.READ else self.write_queue
        return queues[bank_group][bank]

    def queue_length(self) -> tuple[int, int]:
        return self.num_reads, self.num_writes