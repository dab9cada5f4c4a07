import dataclasses

import pytest

from ramos.system import (
    MemInfo,
    PipeInfo,
    ProcessInfo,
    ProcessStatus,
    SyscallError,
)


def _process(**overrides):
    fields = dict(
        pid=1,
        name="shell",
        status=ProcessStatus.RUNNING,
        priority=1,
        parent_pid=0,
        read_fd=0,
        write_fd=1,
        stack_base=4096,
        stack_pointer=2048,
    )
    fields.update(overrides)
    return ProcessInfo(**fields)


def _pipe(**overrides):
    fields = dict(id=0, name="", read_fd=8, write_fd=9, readers=1, writers=1, buffered=0)
    fields.update(overrides)
    return PipeInfo(**fields)


def test_process_status_values_follow_kernel():
    assert ProcessStatus(1) is ProcessStatus.RUNNING
    assert ProcessStatus(2) is ProcessStatus.BLOCKED
    assert [ProcessStatus(n).value for n in range(4)] == [0, 1, 2, 3]
    assert len(ProcessStatus) == 4
    with pytest.raises(ValueError):
        ProcessStatus(4)


def test_process_status_coerced_from_int():
    info = _process(status=2)
    assert info.status is ProcessStatus.BLOCKED


def test_process_invalid_status():
    with pytest.raises(ValueError):
        _process(status=9)


def test_process_name_limit():
    assert _process(name="n" * 31).name == "n" * 31
    with pytest.raises(ValueError):
        _process(name="n" * 32)


@pytest.mark.parametrize("priority", [-1, 3])
def test_process_priority_range(priority):
    with pytest.raises(ValueError):
        _process(priority=priority)


def test_process_info_is_frozen():
    info = _process()
    with pytest.raises(dataclasses.FrozenInstanceError):
        info.pid = 5
    assert info.pid == 1


def test_mem_info_fields_round_trip():
    info = MemInfo(total_memory=100, used_memory=40, free_memory=60, allocated_blocks=2)
    assert dataclasses.astuple(info) == (100, 40, 60, 2)


def test_mem_info_rejects_negative():
    with pytest.raises(ValueError):
        MemInfo(total_memory=100, used_memory=-1, free_memory=60, allocated_blocks=0)


def test_pipe_buffered_limits():
    assert _pipe(buffered=1024).buffered == 1024
    with pytest.raises(ValueError):
        _pipe(buffered=1025)
    with pytest.raises(ValueError):
        _pipe(buffered=-1)


def test_pipe_name_limit():
    with pytest.raises(ValueError):
        _pipe(name="p" * 32)


def test_syscall_error_carries_code():
    error = SyscallError(-3, "process not found")
    assert error.code == -3
    assert "process not found" in str(error)


def test_syscall_error_default_message_mentions_code():
    error = SyscallError(-4)
    assert "-4" in str(error)