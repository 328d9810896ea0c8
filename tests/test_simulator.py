from memsim.bus import ThresholdStrategy
from memsim.ddr import DDR
from memsim.queue import PerBankQueue
from memsim.rank import DDRTimingConstraints
from memsim.requests import MemoryAddress, Request, RequestType
from memsim.scheduler import PerBankFRFCFS
from memsim.simulator import MemorySimulator


def make_sim(requests, read_cap=8, write_cap=8):
    return MemorySimulator(
        requests,
        PerBankFRFCFS(1, 2),
        PerBankQueue(read_cap, write_cap, 1, 2),
        ThresholdStrategy(1, 1),
        DDR(1, 1, 2, DDRTimingConstraints()),
        1,
    )


def reads(count):
    return [
        Request(RequestType.READ, MemoryAddress(block_address=i, bank=i % 2, row=i))
        for i in range(count)
    ]


def test_empty_trace_stops_immediately():
    sim = make_sim([])
    assert sim.tick() is False
    assert sim.cycle == 1


def test_fetch_request_returns_trace_items_in_order():
    items = reads(2)
    sim = make_sim(items)
    assert sim.fetch_request() is items[0]
    assert sim.fetch_request() is items[1]
    assert sim.fetch_request() is None


def test_fetch_send_enqueues():
    sim = make_sim(reads(1))
    assert sim.fetch_send() is True
    assert sim.memory_controller.records == 1
    assert sim.fetch_send() is False


def test_run_enqueues_every_request():
    items = reads(5)
    sim = make_sim(items)
    cycles = sim.run()
    assert cycles == sim.cycle
    assert cycles > len(items)
    assert sim.memory_controller.records == len(items)
    assert sim.pending_request is None


def test_full_queue_keeps_request_pending_then_retries():
    writes = [
        Request(RequestType.WRITE, MemoryAddress(block_address=i, bank=0, row=1))
        for i in range(2)
    ]
    sim = make_sim(writes, write_cap=1)
    assert sim.tick() is True
    assert sim.pending_request is None
    assert sim.tick() is True
    assert sim.pending_request is writes[1]
    assert sim.tick() is True
    assert sim.pending_request is None
    assert sim.memory_controller.records == 2
    assert sim.memory_controller.dram.stat.write == 1


def test_retry_pending_send_when_still_full():
    sim = make_sim([], read_cap=1)
    first = Request(RequestType.READ, MemoryAddress(block_address=1))
    second = Request(RequestType.READ, MemoryAddress(block_address=2))
    assert sim.send_request(first) is None
    assert sim.retry_pending_send(second) is True
    assert sim.pending_request is second


def test_run_serves_requests_in_dram():
    sim = make_sim(reads(4))
    sim.run()
    served = sim.memory_controller.dram.stat.read
    remaining, _ = sim.memory_controller.queue_manager.queue_length()
    assert served + remaining == 4