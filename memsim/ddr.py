"""A DDR device: ranks of bank groups, command dispatch and read completions."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from .rank import DDRTimingConstraints, Rank
from .requests import BankState, MemoryAddress, MemoryCommand, Request, RequestType


def _trailing_zeros(value: int) -> int:
    """Trailing zero bits of a 32-bit unsigned value (32 for zero)."""
    if value == 0:
        return 32
    return (value & -value).bit_length() - 1


@dataclass
class LatencyAverage:
    """Running sum and count of latency samples."""

    count: int = 0
    total: int = 0

    def accumulate(self, value: int) -> None:
        self.count += 1
        self.total += value

    @property
    def average(self) -> float:
        return self.total / self.count if self.count else 0.0


@dataclass
class DDRStats:
    """Counters and latencies gathered while commands are issued."""

    read: int = 0
    write: int = 0
    read_queue_latency: LatencyAverage = field(default_factory=LatencyAverage)
    read_latency: LatencyAverage = field(default_factory=LatencyAverage)
    write_latency: LatencyAverage = field(default_factory=LatencyAverage)


@dataclass(frozen=True)
class ReadCallback:
    """A read in flight: whose data it is and when it arrives."""

    block_address: int
    completion_time: int
    data: int = 50


class DDR:
    """A DDR device made of ranks, tracking reads until their data returns."""

    def __init__(
        self,
        num_ranks: int,
        num_bank_groups: int,
        num_banks: int,
        timing_constraints: DDRTimingConstraints,
    ) -> None:
        self.cycle = 0
        self.ranks = [
            Rank(num_bank_groups, num_banks, timing_constraints) for _ in range(num_ranks)
        ]
        self.callback_queue: deque[ReadCallback] = deque()
        self.stat = DDRStats()
        self.read_delay = timing_constraints.read_delay
        self.write_delay = timing_constraints.write_delay
        self.is_busy = False
        self.num_ranks = num_ranks
        self.num_bank_groups = num_bank_groups
        self.num_banks = num_banks
        self.busy_state = 0

    def flat_index(self, addr: MemoryAddress) -> int:
        """A single index for the (rank, bank group, bank) of an address."""
        bank_group_shift = _trailing_zeros(self.num_banks)
        rank_shift = _trailing_zeros(self.num_bank_groups)
        return (
            (addr.rank << (rank_shift + bank_group_shift))
            + (addr.bank_group << bank_group_shift)
            + addr.bank
        )

    def _queue_latency(self, queued: int) -> int:
        if queued > self.cycle:
            raise ValueError(
                f"request queued at cycle {queued} is later than current cycle {self.cycle}"
            )
        return self.cycle - queued

    def precharge_b(self, addr: MemoryAddress) -> None:
        self.ranks[addr.rank].precharge_b(addr)

    def precharge_ab(self, rank: int) -> None:
        self.ranks[rank].precharge_ab()

    def activate(self, addr: MemoryAddress) -> None:
        self.ranks[addr.rank].activate(addr)

    def _record_read(self, queue_latency: int) -> int:
        read_latency = queue_latency + self.read_delay
        self.stat.read += 1
        self.stat.read_queue_latency.accumulate(queue_latency)
        self.stat.read_latency.accumulate(read_latency)
        return read_latency

    def _record_write(self, queue_latency: int) -> None:
        write_latency = queue_latency + self.read_delay
        self.stat.write += 1
        self.stat.write_latency.accumulate(queue_latency)
        self.stat.read_latency.accumulate(write_latency)

    def read(self, addr: MemoryAddress, queued: int) -> None:
        """Issue a read; its data is due ``read_delay`` cycles from now."""
        self._record_read(self._queue_latency(queued))
        self.callback_queue.append(
            ReadCallback(addr.block_address, self.cycle + self.read_delay)
        )
        for rank_id, rank in enumerate(self.ranks):
            if rank_id == addr.rank:
                rank.read(addr)
            else:
                rank.on_sibling_read()

    def read_ap(self, addr: MemoryAddress, queued: int) -> None:
        """Issue a read with auto-precharge."""
        read_latency = self._record_read(self._queue_latency(queued))
        self.callback_queue.append(ReadCallback(addr.block_address, self.cycle + read_latency))
        for rank_id, rank in enumerate(self.ranks):
            if rank_id == addr.rank:
                rank.read_ap(addr)
            else:
                rank.on_sibling_read_ap()

    def write(self, addr: MemoryAddress, queued: int) -> None:
        self._record_write(self._queue_latency(queued))
        for rank_id, rank in enumerate(self.ranks):
            if rank_id == addr.rank:
                rank.write(addr)
            else:
                rank.on_sibling_write()

    def write_ap(self, addr: MemoryAddress, queued: int) -> None:
        """Issue a write with auto-precharge."""
        self._record_write(self._queue_latency(queued))
        for rank_id, rank in enumerate(self.ranks):
            if rank_id == addr.rank:
                rank.write_ap(addr)
            else:
                rank.on_sibling_write_ap()

    def refresh_ab(self, addr: MemoryAddress) -> None:
        self.ranks[addr.rank].refresh_ab()

    def get_valid_command(self, req: Request) -> MemoryCommand | None:
        """The command that can be issued now to progress ``req``, if any."""
        addr = req.memory_address
        rank = self.ranks[addr.rank]
        bank = rank.bank_groups[addr.bank_group].banks[addr.bank]

        if bank.state is BankState.IDLE:
            return MemoryCommand.ACTIVATE if rank.can_activate(addr) else None
        if bank.state is BankState.ACTIVE:
            if bank.active_row == addr.row:
                if req.request_type is RequestType.READ:
                    return MemoryCommand.READ if rank.can_read(addr) else None
                return MemoryCommand.WRITE if rank.can_write(addr) else None
            return MemoryCommand.PRE_B if rank.can_pre(addr) else None
        return None

    def is_bank_busy(self, bank_group: int, bank: int) -> bool:
        """Whether the given bank of the first rank is busy."""
        return self.ranks[0].bank_groups[bank_group].banks[bank].is_busy

    def can_ref_ab(self, rank: int) -> bool:
        return self.ranks[rank].can_ref_ab()

    def tick(self) -> int | None:
        """Advance one cycle; return the block address of a read that completed."""
        self.cycle += 1
        for rank in self.ranks:
            rank.tick()
        if self.callback_queue and self.cycle >= self.callback_queue[0].completion_time:
            return self.callback_queue.popleft().block_address
        return None