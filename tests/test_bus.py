import pytest

from memsim.bus import Bus, CreditBasedStrategy, RoundRobinStrategy, ThresholdStrategy
from memsim.requests import BusDirection


@pytest.mark.parametrize(
    "reads, writes, expected",
    [
        (8, 0, BusDirection.READ),
        (8, 60, BusDirection.READ),
        (7, 48, BusDirection.WRITE),
        (0, 47, BusDirection.READ),
        (0, 0, BusDirection.READ),
    ],
)
def test_threshold_strategy(reads, writes, expected):
    assert ThresholdStrategy(8, 48).select_direction(reads, writes) is expected


def test_round_robin_alternates():
    strategy = RoundRobinStrategy()
    got = [strategy.select_direction(0, 0) for _ in range(4)]
    assert got == [BusDirection.READ, BusDirection.WRITE, BusDirection.READ, BusDirection.WRITE]


def test_round_robin_starting_write():
    strategy = RoundRobinStrategy(BusDirection.WRITE)
    assert strategy.select_direction(0, 0) is BusDirection.WRITE
    assert strategy.select_direction(0, 0) is BusDirection.READ


def test_credit_based_prefers_richer_side():
    strategy = CreditBasedStrategy(read_credits=5, write_credits=3, credit_increment=1)
    assert strategy.select_direction(0, 0) is BusDirection.READ
    assert strategy.read_credits == 4
    assert strategy.write_credits == 3


def test_credit_based_tie_goes_to_write():
    strategy = CreditBasedStrategy(read_credits=3, write_credits=3, credit_increment=1)
    assert strategy.select_direction(0, 0) is BusDirection.WRITE
    assert strategy.write_credits == 2


def test_credit_based_exhaustion_raises():
    strategy = CreditBasedStrategy(read_credits=0, write_credits=0, credit_increment=1)
    with pytest.raises(OverflowError):
        strategy.select_direction(0, 0)


def test_bus_read_takes_data():
    bus = Bus(ThresholdStrategy(8, 48))
    assert bus.read() is None
    bus.write(50)
    assert bus.read() == 50
    assert bus.read() is None


def test_bus_delegates_direction():
    bus = Bus(ThresholdStrategy(8, 48))
    assert bus.get_direction(0, 48) is BusDirection.WRITE
    assert bus.get_direction(8, 48) is BusDirection.READ