"""Programs that report memory usage and open pipes."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from .console import Console
from .system import MAX_PIPES, PIPE_BUFFER_SIZE, MemInfo, PipeInfo, SyscallError

OK = 0
ERROR = -1

_UNITS = ("B", "KB", "MB", "GB")
_UINT32_MASK = 0xFFFFFFFF
_BYTES_WIDTH = 8
_PIPE_NAME_COLUMN = 30

_PIPES_HEADER = "ID   NAME                          FD_R  FD_W  READERS  WRITERS  BUFFERED\n"
_PIPES_RULE = "----------------------------------------------------------------------------\n"


def _scaled(value: int) -> tuple[int, str]:
    converted = float(value)
    unit = 0
    while converted >= 1024.0 and unit < len(_UNITS) - 1:
        converted /= 1024.0
        unit += 1
    return int(converted + 0.5), _UNITS[unit]


def mem_main(console: Console, args: Sequence[str], info: Callable[[], MemInfo]) -> int:
    """Print total, used and free memory and the number of allocated blocks."""
    if args:
        console.printf("mem: Invalid number of arguments.\n")
        return ERROR

    status = info()
    rows = (
        ("Total", status.total_memory),
        ("Used", status.used_memory),
        ("Free", status.free_memory),
    )
    for label, value in rows:
        rounded, unit = _scaled(value)
        console.printf("%s: ", label)
        console.print(str(value & _UINT32_MASK).rjust(_BYTES_WIDTH))
        console.printf(" (%u %s)\n", rounded & _UINT32_MASK, unit)

    console.printf("Allocated blocks: %u\n", status.allocated_blocks & _UINT32_MASK)
    return OK


def pipes_main(console: Console, args: Sequence[str], pipes: Callable[[], Iterable[PipeInfo]]) -> int:
    """Print a table of the open pipes."""
    try:
        listed = list(pipes())[:MAX_PIPES]
    except SyscallError:
        console.print_err("Failed to get pipes info\n")
        return ERROR

    if not listed:
        console.print("No active pipes\n")
        return OK

    console.print(_PIPES_HEADER)
    console.print(_PIPES_RULE)
    for pipe in listed:
        console.printf("%d    ", pipe.id)
        console.print((pipe.name or "[anonymous]").ljust(_PIPE_NAME_COLUMN))
        console.printf("%d     %d     ", pipe.read_fd, pipe.write_fd)
        console.printf("%d        %d        ", pipe.readers, pipe.writers)
        console.printf("%d/%d\n", pipe.buffered, PIPE_BUFFER_SIZE)

    console.putchar("\n")
    console.printf("Total: %d pipe", len(listed))
    if len(listed) != 1:
        console.putchar("s")
    console.putchar("\n")
    return OK