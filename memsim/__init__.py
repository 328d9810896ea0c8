"""Cycle-level DRAM memory system simulator: DDR timing model, request queues, schedulers and controller."""

__version__ = "0.1.0"