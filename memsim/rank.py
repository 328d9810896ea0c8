"""A DRAM rank: bank groups sharing rank-level timing constraints."""

from __future__ import annotations

from dataclasses import dataclass, field

from .bank import BankConstraints
from .bank_group import BankGroup, BankGroupConstraints
from .requests import MemoryAddress


@dataclass(frozen=True)
class RankConstraints:
    """Timing constraints between commands within one rank, in cycles."""

    rd_rd: int = 0
    wr_wr: int = 0
    rd_wr: int = 0
    wr_rd: int = 0
    rd_prea: int = 0
    wr_prea: int = 0
    act_act: int = 0
    faw_window: int = 0
    act_prea: int = 0
    prea_act: int = 0
    act_refab: int = 0
    pre_refab: int = 0
    prea_refab: int = 0
    rda_refab: int = 0
    wra_refab: int = 0
    refab_act: int = 0
    refab_prea: int = 0


@dataclass(frozen=True)
class RankSiblingConstraints:
    """Timing constraints a command on one rank imposes on the other ranks."""

    rd_rd: int = 0
    rd_wr: int = 0
    wr_rd: int = 0


@dataclass(frozen=True)
class DDRTimingConstraints:
    """All timing constraints of a DDR device."""

    bank: BankConstraints = field(default_factory=BankConstraints)
    bank_group: BankGroupConstraints = field(default_factory=BankGroupConstraints)
    rank: RankConstraints = field(default_factory=RankConstraints)
    rank_sibling: RankSiblingConstraints = field(default_factory=RankSiblingConstraints)
    read_delay: int = 0
    write_delay: int = 0


class Rank:
    """A set of bank groups plus the timing rules they share."""

    def __init__(
        self, num_bank_groups: int, num_banks: int, timing_constraints: DDRTimingConstraints
    ) -> None:
        self.cycle = 0
        self.bank_groups = [
            BankGroup(timing_constraints.bank_group, num_banks, timing_constraints.bank, i)
            for i in range(num_bank_groups)
        ]
        self.timing = timing_constraints.rank
        self.sibling = timing_constraints.rank_sibling

        self.next_act = 0
        self.next_pre = 0
        self.next_pre_all = 0
        self.next_read = 0
        self.next_write = 0
        self.next_ref_ab = 0
        self.next_sre = 0
        self.next_srx = 0
        self.next_faw = 0

        self.first_of_last_four_acts = 0
        self.second_of_last_four_acts = 0
        self.last_act = 0
        self.is_busy = False

    def tick(self) -> int:
        """Advance the rank and everything in it by one cycle."""
        self.cycle += 1
        for group in self.bank_groups:
            group.tick()
        return 0

    def precharge_ab(self) -> None:
        for group in self.bank_groups:
            group.precharge_ab()

    def precharge_b(self, addr: MemoryAddress) -> None:
        self.bank_groups[addr.bank_group].precharge_b(addr)

    def activate(self, addr: MemoryAddress) -> None:
        t = self.timing
        self.first_of_last_four_acts = self.second_of_last_four_acts
        self.second_of_last_four_acts = self.last_act
        self.last_act = self.cycle
        self.next_faw = max(self.next_faw, self.first_of_last_four_acts + t.faw_window)

        self.bank_groups[addr.bank_group].activate(addr)

        self.next_act = max(self.next_act, self.cycle + t.act_act)
        self.next_ref_ab = max(self.next_ref_ab, self.cycle + t.act_refab)
        self.next_pre_all = max(self.next_pre_all, self.cycle + t.act_prea)

    def read(self, addr: MemoryAddress) -> None:
        t = self.timing
        self.bank_groups[addr.bank_group].read(addr)
        self.next_read = max(self.next_read, self.cycle + t.rd_rd)
        self.next_write = max(self.next_write, self.cycle + t.rd_wr)
        self.next_pre_all = max(self.next_pre_all, self.cycle + t.rd_prea)

    def read_ap(self, addr: MemoryAddress) -> None:
        t = self.timing
        self.bank_groups[addr.bank_group].read_ap(addr)
        self.next_read = max(self.next_read, self.cycle + t.rd_rd)
        self.next_write = max(self.next_write, self.cycle + t.rd_wr)
        self.next_ref_ab = max(self.next_ref_ab, self.cycle + t.rda_refab)

    def write(self, addr: MemoryAddress) -> None:
        t = self.timing
        self.bank_groups[addr.bank_group].write(addr)
        self.next_write = max(self.next_write, self.cycle + t.wr_wr)
        self.next_read = max(self.next_read, self.cycle + t.wr_rd)
        self.next_pre_all = max(self.next_pre_all, self.cycle + t.wr_prea)

    def write_ap(self, addr: MemoryAddress) -> None:
        t = self.timing
        self.bank_groups[addr.bank_group].write_ap(addr)
        self.next_write = max(self.next_write, self.cycle + t.wr_wr)
        self.next_read = max(self.next_read, self.cycle + t.wr_rd)
        self.next_ref_ab = max(self.next_ref_ab, self.cycle + t.wra_refab)

    def refresh_ab(self) -> None:
        """All-bank refresh; refresh timing is not modelled, so no state changes."""

    def on_sibling_read(self) -> None:
        self.next_read = max(self.next_read, self.cycle + self.sibling.rd_rd)
        self.next_write = max(self.next_write, self.cycle + self.sibling.rd_wr)

    def on_sibling_read_ap(self) -> None:
        self.next_read = max(self.next_read, self.cycle + self.sibling.rd_rd)
        self.next_write = max(self.next_write, self.cycle + self.sibling.rd_wr)

    def on_sibling_write(self) -> None:
        self.next_read = max(self.next_read, self.cycle + self.sibling.wr_rd)

    def on_sibling_write_ap(self) -> None:
        self.next_read = max(self.next_read, self.cycle + self.sibling.rd_wr)

    def can_pre(self, addr: MemoryAddress) -> bool:
        return self.next_pre <= self.cycle and self.bank_groups[addr.bank_group].can_pre(addr)

    def can_activate(self, addr: MemoryAddress) -> bool:
        return (
            self.next_act <= self.cycle
            and self.next_faw <= self.cycle
            and self.bank_groups[addr.bank_group].can_activate(addr)
        )

    def can_read(self, addr: MemoryAddress) -> bool:
        return self.next_read <= self.cycle and self.bank_groups[addr.bank_group].can_read(addr)

    def can_write(self, addr: MemoryAddress) -> bool:
        return self.next_write <= self.cycle and self.bank_groups[addr.bank_group].can_write(addr)

    def can_pre_all(self) -> bool:
        return all(group.can_pre_all() for group in self.bank_groups)

    def can_ref_ab(self) -> bool:
        return self.cycle >= self.next_ref_ab