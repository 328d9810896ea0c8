"""A DRAM bank group: banks sharing group-level timing constraints."""

from __future__ import annotations

from dataclasses import dataclass

from .bank import Bank, BankConstraints
from .requests import MemoryAddress


@dataclass(frozen=True)
class BankGroupConstraints:
    """Timing constraints between commands within one bank group, in cycles."""

    act_act: int = 0
    rd_rd: int = 0
    wr_wr: int = 0
    wr_rd: int = 0


class BankGroup:
    """A set of banks plus the timing rules they share."""

    def __init__(
        self,
        timing_constraints: BankGroupConstraints,
        num_banks: int,
        bank_constraints: BankConstraints,
        group_id: int,
    ) -> None:
        self.id = group_id
        self.timing = timing_constraints
        self.cycle = 0
        self.banks = [
            Bank(group_id * num_banks + i, bank_constraints, i) for i in range(num_banks)
        ]
        self.next_act = 0
        self.next_pre = 0
        self.next_read = 0
        self.next_write = 0
        self.next_read_ap = 0
        self.next_write_ap = 0
        self.is_busy = False

    def tick(self) -> int:
        """Advance the group and all of its banks by one cycle."""
        self.cycle += 1
        for bank in self.banks:
            bank.tick()
        return 0

    def precharge_b(self, addr: MemoryAddress) -> None:
        self.banks[addr.bank].precharge()

    def precharge_ab(self) -> None:
        for bank in self.banks:
            bank.precharge()

    def activate(self, addr: MemoryAddress) -> None:
        self.banks[addr.bank].activate(addr)
        self.next_act = max(self.next_act, self.cycle + self.timing.act_act)

    def read(self, addr: MemoryAddress) -> None:
        self.banks[addr.bank].read(addr)
        self.next_read = max(self.next_read, self.cycle + self.timing.rd_rd)

    def write(self, addr: MemoryAddress) -> None:
        self.banks[addr.bank].write(addr)
        self.next_write = max(self.next_write, self.cycle + self.timing.wr_wr)

    def read_ap(self, addr: MemoryAddress) -> None:
        self.banks[addr.bank].read_ap(addr)
        self.next_read = max(self.next_read, self.cycle + self.timing.rd_rd)

    def write_ap(self, addr: MemoryAddress) -> None:
        self.banks[addr.bank].write_ap(addr)
        self.next_write = max(self.next_write, self.cycle + self.timing.wr_wr)
        self.next_read = max(self.next_read, self.cycle + self.timing.wr_rd)

    def can_pre_all(self) -> bool:
        return all(bank.can_pre() for bank in self.banks)

    def can_pre(self, addr: MemoryAddress) -> bool:
        return self.next_pre <= self.cycle and self.banks[addr.bank].can_pre()

    def can_activate(self, addr: MemoryAddress) -> bool:
        return self.next_act <= self.cycle and self.banks[addr.bank].can_activate()

    def can_read(self, addr: MemoryAddress) -> bool:
        return self.next_read <= self.cycle and self.banks[addr.bank].can_read(addr)

    def can_write(self, addr: MemoryAddress) -> bool:
        return self.next_write <= self.cycle and self.banks[addr.bank].can_write(addr)