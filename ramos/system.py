"""Records exchanged with the kernel: processes, pipes and memory status."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

MAX_NAME_LENGTH = 32
MAX_PROCESSES = 64
MAX_PIPES = 32
MAX_PIPE_NAME_LENGTH = 32
PIPE_BUFFER_SIZE = 1024
MAX_PRIORITY = 0
MIN_PRIORITY = 2
HEAP_SIZE = 0x2000000


class SyscallError(Exception):
    """A kernel service reported failure."""

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(message or f"system call failed with code {code}")
        self.code = code


class ProcessStatus(IntEnum):
    READY = 0
    RUNNING = 1
    BLOCKED = 2
    TERMINATED = 3


def _check_name(name: str, limit: int) -> None:
    if len(name) >= limit:
        raise ValueError(f"name longer than {limit - 1} characters: {name!r}")


@dataclass(frozen=True)
class MemInfo:
    """Memory usage figures in bytes, plus the count of allocated blocks."""

    total_memory: int
    used_memory: int
    free_memory: int
    allocated_blocks: int

    def __post_init__(self) -> None:
        for field_name in ("total_memory", "used_memory", "free_memory", "allocated_blocks"):
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must not be negative")


@dataclass(frozen=True)
class ProcessInfo:
    """What the scheduler exposes about one process."""

    pid: int
    name: str
    status: ProcessStatus
    priority: int
    parent_pid: int
    read_fd: int
    write_fd: int
    stack_base: int
    stack_pointer: int

    def __post_init__(self) -> None:
        _check_name(self.name, MAX_NAME_LENGTH)
        object.__setattr__(self, "status", ProcessStatus(self.status))
        if not MAX_PRIORITY <= self.priority <= MIN_PRIORITY:
            raise ValueError(f"priority out of range: {self.priority}")


@dataclass(frozen=True)
class PipeInfo:
    """What the kernel exposes about one open pipe; an empty name means anonymous."""

    id: int
    name: str
    read_fd: int
    write_fd: int
    readers: int
    writers: int
    buffered: int

    def __post_init__(self) -> None:
        _check_name(self.name, MAX_PIPE_NAME_LENGTH)
        if not 0 <= self.buffered <= PIPE_BUFFER_SIZE:
            raise ValueError(f"buffered byte count out of range: {self.buffered}")