import pytest

from memsim.requests import (
    MemoryAddress,
    MemoryCommand,
    Request,
    RequestStat,
    RequestType,
    get_first_cmd,
    hot_or_earliest,
    is_active_row_match,
)


def _req(row, queued, kind=RequestType.READ, block=0):
    return Request(kind, MemoryAddress(block_address=block, row=row), RequestStat(queued=queued))


def test_is_active_row_match():
    req = _req(row=7, queued=0)
    assert is_active_row_match(req, [1, 7, 9])
    assert not is_active_row_match(req, [1, 9])
    assert not is_active_row_match(req, [])


@pytest.mark.parametrize(
    "kind, cmd",
    [(RequestType.READ, MemoryCommand.READ), (RequestType.WRITE, MemoryCommand.WRITE)],
)
def test_get_first_cmd(kind, cmd):
    assert get_first_cmd(_req(0, 0, kind)) is cmd


def test_hot_or_earliest_empty():
    assert hot_or_earliest([], 3) is None


def test_hot_request_beats_earlier_cold():
    cold = _req(row=1, queued=2, block=10)
    hot = _req(row=5, queued=9, block=20)
    assert hot_or_earliest([cold, hot], 5) is hot


def test_earliest_among_cold():
    a = _req(row=1, queued=8, block=1)
    b = _req(row=2, queued=3, block=2)
    c = _req(row=4, queued=6, block=3)
    assert hot_or_earliest([a, b, c], 99) is b


def test_earliest_among_hot():
    a = _req(row=5, queued=8, block=1)
    b = _req(row=5, queued=4, block=2)
    c = _req(row=1, queued=0, block=3)
    assert hot_or_earliest([a, b, c], 5) is b


def test_tie_keeps_first():
    a = _req(row=5, queued=4, block=1)
    b = _req(row=5, queued=4, block=2)
    assert hot_or_earliest([a, b], 5) is a


def test_stat_is_per_request_and_mutable():
    a = Request(RequestType.READ, MemoryAddress())
    b = Request(RequestType.READ, MemoryAddress())
    a.stat.queued = 12
    assert b.stat.queued == 0
    assert a.stat.queued == 12


@pytest.mark.parametrize("kind", [RequestType.READ, RequestType.WRITE])
def test_first_cmd_is_cas(kind):
    assert get_first_cmd(_req(0, 0, kind)).is_cas


def test_only_first_commands_are_cas():
    cas_commands = {cmd for cmd in MemoryCommand if cmd.is_cas}
    first_commands = {
        get_first_cmd(_req(0, 0, RequestType.READ)),
        get_first_cmd(_req(0, 0, RequestType.WRITE)),
    }
    assert cas_commands == first_commands
    assert MemoryCommand.ACTIVATE not in cas_commands
    assert MemoryCommand.READ_AP not in cas_commands