"""Data bus and the strategies that choose its direction."""

from __future__ import annotations

from typing import Protocol

from .requests import BusDirection


class BusDirectionStrategy(Protocol):
    def select_direction(self, read_queue_size: int, write_queue_size: int) -> BusDirection:
        ...


class ThresholdStrategy:
    """Serve reads once enough are queued, writes once enough are queued, else reads."""

    def __init__(self, read_queue_threshold: int, write_queue_threshold: int) -> None:
        self.read_queue_threshold = read_queue_threshold
        self.write_queue_threshold = write_queue_threshold
        self.current_mode = BusDirection.READ

    def select_direction(self, read_queue_size: int, write_queue_size: int) -> BusDirection:
        if read_queue_size >= self.read_queue_threshold:
            return BusDirection.READ
        if write_queue_size >= self.write_queue_threshold:
            return BusDirection.WRITE
        return BusDirection.READ


class RoundRobinStrategy:
    """Alternate between reading and writing on every call."""

    def __init__(self, current_direction: BusDirection = BusDirection.READ) -> None:
        self.current_direction = current_direction

    def select_direction(self, read_queue_size: int, write_queue_size: int) -> BusDirection:
        direction = self.current_direction
        self.current_direction = (
            BusDirection.WRITE if direction is BusDirection.READ else BusDirection.READ
        )
        return direction


class CreditBasedStrategy:
    """Spend credits on the direction that has more of them left."""

    def __init__(self, read_credits: int, write_credits: int, credit_increment: int) -> None:
        self.read_credits = read_credits
        self.write_credits = write_credits
        self.credit_increment = credit_increment

    def select_direction(self, read_queue_size: int, write_queue_size: int) -> BusDirection:
        if self.read_credits > self.write_credits:
            self.read_credits = self._spend(self.read_credits)
            return BusDirection.READ
        self.write_credits = self._spend(self.write_credits)
        return BusDirection.WRITE

    def _spend(self, credits: int) -> int:
        remaining = credits - self.credit_increment
        if remaining < 0:
            raise OverflowError("bus credits exhausted")
        return remaining


class Bus:
    """A one-word data bus whose direction is chosen by a strategy."""

    def __init__(self, direction_strategy: BusDirectionStrategy) -> None:
        self.data: int | None = None
        self.direction_strategy = direction_strategy

    def write(self, data: int) -> None:
        self.data = data

    def read(self) -> int | None:
        """Take the word on the bus, leaving it empty."""
        data, self.data = self.data, None
        return data

    def get_direction(self, num_read_requests: int, num_write_requests: int) -> BusDirection:
        return self.direction_strategy.select_direction(num_read_requests, num_write_requests)