# memsim

`memsim` is a cycle-level simulator of a DRAM memory system. It models a
memory controller in front of a DDR device made of ranks, bank groups and
banks, each of which tracks its own timing constraints cycle by cycle.
Requests wait in read and write queues and are picked by a scheduling
policy that asks the device which command (activate, precharge, read,
write) can legally be issued for each request right now.

The package has no dependencies outside the standard library.

## Modules

- `memsim.config` — `Config`, the simulator settings, read from a JSON
  file by `load_config(config_path)`. Every field must be present with the
  right type (strings, and a boolean `use_trace_plugin`); otherwise
  `ConfigError` (a `ValueError`) is raised, as it is for invalid JSON.
  `Config.from_dict(data)` builds one from already decoded JSON.
  `parse_trace_type(value)` turns `"memory"`/`"mem"` or `"cpu"`/`"processor"`
  (in any case) into a `TraceType`; any other name means `TraceType.MEMORY`.
  `Config.trace_kind` gives the parsed trace type.
- `memsim.requests` — the request model: `Request`, `RequestStat`
  (`arrival` and `queued` cycles), the frozen `MemoryAddress`, and the enums
  `RequestType`, `MemoryCommand`, `BusDirection` and `BankState`. Helpers:
  `is_active_row_match(request, active_rows)`, `get_first_cmd(req)` (the
  column command for a request) and `hot_or_earliest(requests, active_row)`,
  which prefers a request hitting the active row and otherwise the earliest
  queued one.
- `memsim.bus` — the one-word data `Bus` (`write`, `read` which empties it,
  `get_direction`) and the bus-direction strategies:
  - `ThresholdStrategy(read_queue_threshold, write_queue_threshold)`: reads
    when the read queue reaches its threshold, else writes when the write
    queue reaches its threshold, else reads.
  - `RoundRobinStrategy`: alternates read and write on every call.
  - `CreditBasedStrategy(read_credits, write_credits, credit_increment)`:
    spends credits on the direction with more left; raises `OverflowError`
    when credits would go below zero.
- `memsim.bank`, `memsim.bank_group`, `memsim.rank` — the DRAM hierarchy
  (`Bank`, `BankGroup`, `Rank`) with their timing sets `BankConstraints`,
  `BankGroupConstraints`, `RankConstraints`, `RankSiblingConstraints` and the
  combined `DDRTimingConstraints` (which also holds `read_delay` and
  `write_delay`). All timing values default to zero.
- `memsim.ddr` — `DDR`, the whole device. It issues commands to its ranks
  (a read or write on one rank applies sibling constraints to the others),
  answers `get_valid_command(req)`, reports `is_bank_busy(bank_group, bank)`
  for the first rank, and keeps statistics in `DDRStats` with
  `LatencyAverage` counters (`accumulate`, `average`). Reads in flight are
  held as `ReadCallback` entries; `tick()` returns the block address of a
  read whose data has arrived. Issuing a read or write whose queued cycle
  lies after the device's current cycle raises `ValueError`.
- `memsim.queue` — request queues with fixed capacities; a full queue hands
  the request back instead of taking it:
  - `PerRankQueue(read_queue_size, write_queue_size, rng=None)`: one read
    and one write queue; `all_requests(bus_direction)`, `queue_length()`,
    and `remove_random_request()` which drops a random queued request.
  - `PerBankQueue(read_queue_size, write_queue_size, num_bank_groups,
    num_banks)`: a queue per bank group and bank, with capacities counted
    over all banks; `requests(bus_direction, bank_group, bank)`.
  Both `dequeue(addr, request_type)` by block address and return the cycle
  the request was queued at, or `None`.
- `memsim.scheduler` — `FRFCFS` (over `PerRankQueue.all_requests`) and
  `PerBankFRFCFS(bank_groups, banks)` (over `PerBankQueue.requests`). Both
  skip busy banks, prefer column commands (row hits) over row commands, and
  among equals the request queued first. `FCFS` never selects a request.
- `memsim.controller` — `MemoryController(scheduler, queue_manager,
  bus_direction_strategy, dram)`. Each `tick()` picks a bus direction from
  the queue lengths, issues at most one command chosen by the scheduler and
  advances the DRAM one cycle. `enqueue(req)` stamps the request's queued
  cycle.
- `memsim.simulator` — `MemorySimulator`, which takes any iterable of
  `Request` as its trace, sends one request into the controller per cycle,
  retries a request rejected by a full queue, and stops when the trace is
  exhausted. `run()` ticks it to the end and returns the number of cycles.
  Progress is logged through `logging` every 250,000 cycles.

## Example

```python
from memsim.bank import BankConstraints
from memsim.bus import ThresholdStrategy
from memsim.ddr import DDR
from memsim.queue import PerBankQueue
from memsim.rank import DDRTimingConstraints
from memsim.requests import MemoryAddress, Request, RequestType
from memsim.scheduler import PerBankFRFCFS
from memsim.simulator import MemorySimulator

timing = DDRTimingConstraints(
    bank=BankConstraints(act_cas=14, pre_act=14, rd_pre=6, wr_pre=16),
    read_delay=20,
)
dram = DDR(1, 4, 4, timing)

trace = [
    Request(RequestType.READ, MemoryAddress(block_address=0x40, bank_group=1, bank=2, row=7)),
    Request(RequestType.WRITE, MemoryAddress(block_address=0x80, bank_group=0, bank=1, row=3)),
]

sim = MemorySimulator(
    trace,
    PerBankFRFCFS(4, 4),
    PerBankQueue(64, 64, 4, 4),
    ThresholdStrategy(8, 48),
    dram,
    num_channels=1,
)
cycles = sim.run()
print(cycles, dram.stat.read, dram.stat.write)
```

`MemorySimulator.tick()` advances the whole system by exactly one cycle, so
the simulation can also be stepped by hand to inspect queue lengths, bank
states and statistics along the way.

## What the package does not do

- There is no command-line program; simulations are built and run from
  Python code.
- It reads no trace files, memory specification files or address mapping
  strings. `Config` holds paths and names for them, but nothing in the
  package opens those files: traces are supplied as iterables of `Request`
  with addresses already decoded, and timing values as
  `DDRTimingConstraints`.
- `run()` stops as soon as the trace is exhausted; requests still queued at
  that point are not drained.
- Refresh is not modelled: `Rank.refresh_ab()` changes no state.