"""Schedulers that pick the next request and command to issue."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from itertools import chain
from typing import Protocol

from .requests import BusDirection, MemoryCommand, Request

Selection = tuple[Request, MemoryCommand]


class DRAMState(Protocol):
    def get_valid_command(self, req: Request) -> MemoryCommand | None:
        ...

    def is_bank_busy(self, bank_group: int, bank: int) -> bool:
        ...


def _prefer(req: Request, cmd: MemoryCommand, best: Selection) -> bool:
    """Column commands beat row commands; otherwise the earlier queued request wins."""
    best_req, best_cmd = best
    if cmd.is_cas != best_cmd.is_cas:
        return cmd.is_cas
    return req.stat.queued < best_req.stat.queued


def _first_ready_earliest(requests: Iterable[Request], dram: DRAMState) -> Selection | None:
    best: Selection | None = None
    for req in requests:
        cmd = dram.get_valid_command(req)
        if cmd is None:
            continue
        if best is None or _prefer(req, cmd, best):
            best = (req, cmd)
    return best


class FCFS:
    """First-come first-served placeholder policy: it never selects a request."""

    def select(self, queue: object, dram: DRAMState, bus_direction: BusDirection) -> Selection | None:
        return None


class FRFCFS:
    """First-ready, first-come first-served over all queued requests of a direction."""

    def select(self, queue, dram: DRAMState, bus_direction: BusDirection) -> Selection | None:
        requests: Sequence[Request] = queue.all_requests(bus_direction)
        ready = (
            req
            for req in requests
            if not dram.is_bank_busy(req.memory_address.bank_group, req.memory_address.bank)
        )
        return _first_ready_earliest(ready, dram)


class PerBankFRFCFS:
    """First-ready, first-come first-served over per-bank queues, skipping busy banks."""

    def __init__(self, bank_groups: int, banks: int) -> None:
        self.bank_groups = bank_groups
        self.banks = banks

    def select(self, queue, dram: DRAMState, bus_direction: BusDirection) -> Selection | None:
        per_bank = (
            queue.requests(bus_direction, bank_group, bank)
            for bank_group in range(self.bank_groups)
            for bank in range(self.banks)
            if not dram.is_bank_busy(bank_group, bank)
        )
        return _first_ready_earliest(chain.from_iterable(per_bank), dram)