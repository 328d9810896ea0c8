import pytest

from memsim.bus import ThresholdStrategy
from memsim.controller import MemoryController
from memsim.ddr import DDR
from memsim.queue import PerBankQueue
from memsim.rank import DDRTimingConstraints
from memsim.requests import BankState, MemoryAddress, MemoryCommand, Request, RequestType
from memsim.scheduler import PerBankFRFCFS


def make_controller(read_cap=4, write_cap=4):
    dram = DDR(1, 1, 2, DDRTimingConstraints())
    return MemoryController(
        PerBankFRFCFS(1, 2),
        PerBankQueue(read_cap, write_cap, 1, 2),
        ThresholdStrategy(1, 1),
        dram,
    )


def bank0(controller):
    return controller.dram.ranks[0].bank_groups[0].banks[0]


def test_enqueue_stamps_cycle_and_counts():
    ctl = make_controller()
    ctl.tick()
    ctl.tick()
    req = Request(RequestType.READ, MemoryAddress(block_address=7))
    assert ctl.enqueue(req) is None
    assert req.stat.queued == ctl.cycle
    assert ctl.records == 1
    assert ctl.queue_manager.queue_length() == (1, 0)


def test_enqueue_full_returns_request():
    ctl = make_controller(read_cap=1)
    ctl.enqueue(Request(RequestType.READ, MemoryAddress(block_address=1)))
    second = Request(RequestType.READ, MemoryAddress(block_address=2))
    assert ctl.enqueue(second) is second
    assert ctl.records == 1


def test_dequeue_missing_returns_zero():
    ctl = make_controller()
    assert ctl.dequeue(MemoryAddress(block_address=99), RequestType.READ) == 0


def test_dequeue_returns_queued_cycle():
    ctl = make_controller()
    ctl.tick()
    addr = MemoryAddress(block_address=5)
    ctl.enqueue(Request(RequestType.WRITE, addr))
    assert ctl.dequeue(addr, RequestType.WRITE) == ctl.cycle
    assert ctl.queue_manager.queue_length() == (0, 0)


def test_read_request_is_served():
    ctl = make_controller()
    addr = MemoryAddress(block_address=11, bank=0, row=4)
    ctl.enqueue(Request(RequestType.READ, addr))
    ctl.tick()
    assert bank0(ctl).active_row == 4
    assert ctl.queue_manager.queue_length() == (1, 0)
    ctl.tick()
    assert ctl.queue_manager.queue_length() == (0, 0)
    assert ctl.dram.stat.read == 1
    assert not ctl.dram.callback_queue


def test_write_request_is_served():
    ctl = make_controller()
    addr = MemoryAddress(block_address=12, bank=1, row=2)
    ctl.enqueue(Request(RequestType.WRITE, addr))
    ctl.tick()
    ctl.tick()
    assert ctl.queue_manager.queue_length() == (0, 0)
    assert ctl.dram.stat.write == 1


def test_row_miss_precharges_then_serves():
    ctl = make_controller()
    ctl.issue(MemoryAddress(bank=0, row=1), MemoryCommand.ACTIVATE)
    ctl.dram.tick()
    ctl.enqueue(Request(RequestType.READ, MemoryAddress(block_address=3, bank=0, row=9)))
    ctl.tick()
    assert bank0(ctl).active_row is None
    for _ in range(3):
        ctl.tick()
    assert ctl.dram.stat.read == 1
    assert bank0(ctl).active_row == 9


def test_issue_precharge_all():
    ctl = make_controller()
    assert ctl.issue(MemoryAddress(bank=0, row=1), MemoryCommand.ACTIVATE) is True
    ctl.dram.tick()
    ctl.issue(MemoryAddress(rank=0), MemoryCommand.PRE_AB)
    assert bank0(ctl).state is BankState.PRECHARGING
    assert bank0(ctl).active_row is None


def test_issue_refresh_leaves_state():
    ctl = make_controller()
    assert ctl.issue(MemoryAddress(), MemoryCommand.REFRESH) is True
    assert bank0(ctl).state is BankState.IDLE


def test_issue_read_ap_records_read():
    ctl = make_controller()
    addr = MemoryAddress(block_address=4, bank=0, row=2)
    ctl.issue(addr, MemoryCommand.ACTIVATE)
    ctl.dram.tick()
    ctl.enqueue(Request(RequestType.READ, addr))
    ctl.issue(addr, MemoryCommand.READ_AP)
    assert ctl.dram.stat.read == 1
    assert ctl.queue_manager.queue_length() == (0, 0)
    assert bank0(ctl).next_state is BankState.IDLE


def test_issue_read_queued_later_than_dram_cycle_raises():
    ctl = make_controller()
    addr = MemoryAddress(block_address=4, bank=0, row=2)
    ctl.cycle = 50
    ctl.enqueue(Request(RequestType.READ, addr))
    with pytest.raises(ValueError):
        ctl.issue(addr, MemoryCommand.READ)