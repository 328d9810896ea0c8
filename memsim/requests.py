"""Memory requests, commands and helpers for choosing among requests."""

from __future__ import annotations

import enum
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from functools import reduce


class RequestType(enum.Enum):
    READ = "read"
    WRITE = "write"


class MemoryCommand(enum.Enum):
    PRE_B = "pre_b"
    PRE_AB = "pre_ab"
    ACTIVATE = "activate"
    READ = "read"
    WRITE = "write"
    REFRESH = "refresh"
    READ_AP = "read_ap"
    WRITE_AP = "write_ap"

    @property
    def is_cas(self) -> bool:
        """True for plain column commands (read or write)."""
        return self in (MemoryCommand.READ, MemoryCommand.WRITE)


class BusDirection(enum.Enum):
    READ = "read"
    WRITE = "write"


class BankState(enum.Enum):
    IDLE = "idle"
    ACTIVATING = "activating"
    ACTIVE = "active"
    PRECHARGING = "precharging"
    READING = "reading"
    WRITING = "writing"


@dataclass(frozen=True)
class MemoryAddress:
    """A decoded DRAM address."""

    block_address: int = 0
    channel: int = 0
    rank: int = 0
    bank_group: int = 0
    bank: int = 0
    row: int = 0
    column: int = 0


@dataclass
class RequestStat:
    """Timestamps collected for a request, in cycles."""

    arrival: int = 0
    queued: int = 0


@dataclass
class Request:
    """A read or write request to one memory address."""

    request_type: RequestType
    memory_address: MemoryAddress
    stat: RequestStat = field(default_factory=RequestStat)


def is_active_row_match(request: Request, active_rows: Collection[int]) -> bool:
    """Whether the request's row is one of the active rows."""
    return request.memory_address.row in active_rows


def get_first_cmd(req: Request) -> MemoryCommand:
    """The column command that serves the request."""
    if req.request_type is RequestType.WRITE:
        return MemoryCommand.WRITE
    return MemoryCommand.READ


def hot_or_earliest(requests: Sequence[Request], active_row: int) -> Request | None:
    """Pick a request hitting the active row, else the earliest queued one.

    Among equally hot requests the earliest queued wins; ties keep the first.
    """
    if not requests:
        return None

    def better(best: Request, candidate: Request) -> Request:
        best_hit = best.memory_address.row == active_row
        cand_hit = candidate.memory_address.row == active_row
        if best_hit != cand_hit:
            return best if best_hit else candidate
        return best if best.stat.queued <= candidate.stat.queued else candidate

    return reduce(better, requests)