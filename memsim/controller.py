"""Memory controller: queues requests, schedules them and drives the DRAM."""

from __future__ import annotations

import logging

from .bus import Bus, BusDirectionStrategy
from .requests import MemoryAddress, MemoryCommand, Request, RequestType

logger = logging.getLogger(__name__)


class MemoryController:
    """Ties a queue, a scheduler, a bus direction strategy and a DRAM together."""

    def __init__(
        self,
        scheduler,
        queue_manager,
        bus_direction_strategy: BusDirectionStrategy,
        dram,
    ) -> None:
        self.cycle = 0
        self.records = 0
        self.scheduler = scheduler
        self.queue_manager = queue_manager
        self.dram = dram
        self.bus = Bus(bus_direction_strategy)

    def tick(self) -> None:
        """Advance one cycle: pick a direction, issue at most one command, tick the DRAM."""
        self.cycle += 1
        num_reads, num_writes = self.queue_manager.queue_length()
        direction = self.bus.get_direction(num_reads, num_writes)
        selection = self.scheduler.select(self.queue_manager, self.dram, direction)
        if selection is not None:
            req, cmd = selection
            self.issue(req.memory_address, cmd)
        completed = self.dram.tick()
        if completed is not None:
            logger.debug("read completed for %s at cycle %s", completed, self.cycle)

    def enqueue(self, req: Request) -> Request | None:
        """Stamp and queue ``req``; return it back if the queue is full."""
        req.stat.queued = self.cycle
        rejected = self.queue_manager.enqueue(req)
        if rejected is None:
            self.records += 1
        return rejected

    def dequeue(self, addr: MemoryAddress, request_type: RequestType) -> int:
        """Remove the request for ``addr``; return its queued cycle, or 0 if absent."""
        queued = self.queue_manager.dequeue(addr, request_type)
        return 0 if queued is None else queued

    def issue(self, memory_address: MemoryAddress, cmd: MemoryCommand) -> bool:
        """Send ``cmd`` for ``memory_address`` to the DRAM."""
        dram = self.dram
        if cmd is MemoryCommand.PRE_B:
            dram.precharge_b(memory_address)
        elif cmd is MemoryCommand.PRE_AB:
            dram.precharge_ab(memory_address.rank)
        elif cmd is MemoryCommand.ACTIVATE:
            dram.activate(memory_address)
        elif cmd is MemoryCommand.READ:
            dram.read(memory_address, self.dequeue(memory_address, RequestType.READ))
        elif cmd is MemoryCommand.WRITE:
            dram.write(memory_address, self.dequeue(memory_address, RequestType.WRITE))
        elif cmd is MemoryCommand.REFRESH:
            dram.refresh_ab(memory_address)
        elif cmd is MemoryCommand.READ_AP:
            dram.read_ap(memory_address, self.dequeue(memory_address, RequestType.READ))
        elif cmd is MemoryCommand.WRITE_AP:
            dram.write_ap(memory_address, self.dequeue(memory_address, RequestType.WRITE))
        return True