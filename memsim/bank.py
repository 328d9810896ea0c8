"""A single DRAM bank and its command timing."""

from __future__ import annotations

from dataclasses import dataclass

from .requests import BankState, MemoryAddress


@dataclass(frozen=True)
class BankConstraints:
    """Timing constraints between commands to the same bank, in cycles."""

    act_act: int = 0
    act_cas: int = 0
    act_pre: int = 0
    pre_act: int = 0
    rd_pre: int = 0
    wr_pre: int = 0
    rda_act: int = 0
    wra_act: int = 0
    min_read_time: int = 0
    min_write_time: int = 0


class Bank:
    """One bank: its open row, its state and when each command may next be issued."""

    def __init__(self, bit_index: int, timing_constraints: BankConstraints, bank_id: int) -> None:
        self.id = bank_id
        self.bit_index = bit_index
        self.timing = timing_constraints
        self.cycle = 0

        self.next_act = 0
        self.next_pre = 0
        self.next_read = 0
        self.next_write = 0
        self.next_read_ap = 0
        self.next_write_ap = 0

        self.state = BankState.IDLE
        self.next_state = BankState.IDLE
        self.active_row: int | None = None
        self.is_busy = False
        self.count_down = 0

    def tick(self) -> int:
        """Advance one cycle and return the cycles the bank stays busy."""
        self.cycle += 1
        if self.count_down > 0:
            self.count_down -= 1
            return self.count_down
        self.state = self.next_state
        self.is_busy = False
        self.count_down = 0
        return self.count_down

    def _start(self, state: BankState, next_state: BankState, duration: int) -> None:
        self.state = state
        self.next_state = next_state
        self.count_down = duration
        self.is_busy = True

    def precharge(self) -> None:
        t = self.timing
        self.active_row = None
        self.next_act = max(self.next_act, self.cycle + t.pre_act)
        self._start(BankState.PRECHARGING, BankState.IDLE, t.pre_act)

    def activate(self, addr: MemoryAddress) -> None:
        t = self.timing
        cas_ready = self.cycle + t.act_cas
        self.next_read = max(self.next_read, cas_ready)
        self.next_write = max(self.next_write, cas_ready)
        self.next_read_ap = max(self.next_read_ap, cas_ready)
        self.next_write_ap = max(self.next_write_ap, cas_ready)
        self.next_act = max(self.next_act, self.cycle + t.act_act)
        self.next_pre = max(self.next_pre, self.cycle + t.act_pre)
        self.active_row = addr.row
        self._start(BankState.ACTIVATING, BankState.ACTIVE, t.act_cas)

    def read(self, addr: MemoryAddress) -> None:
        t = self.timing
        self.next_pre = max(self.next_pre, self.cycle + t.rd_pre)
        self._start(BankState.READING, BankState.ACTIVE, t.min_read_time)

    def write(self, addr: MemoryAddress) -> None:
        t = self.timing
        self.next_pre = max(self.next_pre, self.cycle + t.wr_pre)
        self._start(BankState.WRITING, BankState.ACTIVE, t.min_write_time)

    def read_ap(self, addr: MemoryAddress) -> None:
        """Read with auto-precharge: the bank returns to idle afterwards."""
        t = self.timing
        self.next_act = max(self.next_act, self.cycle + t.rda_act)
        self._start(BankState.READING, BankState.IDLE, t.rda_act)

    def write_ap(self, addr: MemoryAddress) -> None:
        """Write with auto-precharge: the bank returns to idle afterwards."""
        t = self.timing
        self.next_act = max(self.next_act, self.cycle + t.wra_act)
        self._start(BankState.WRITING, BankState.IDLE, t.wra_act)

    def can_pre(self) -> bool:
        return self.next_pre <= self.cycle

    def can_activate(self) -> bool:
        return self.next_act <= self.cycle

    def can_read(self, addr: MemoryAddress) -> bool:
        return self.next_read <= self.cycle and self.active_row == addr.row

    def can_write(self, addr: MemoryAddress) -> bool:
        return self.next_write <= self.cycle and self.active_row == addr.row