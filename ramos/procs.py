"""Programs that list and control processes."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from .console import Console
from .strings import satoi
from .system import MAX_PRIORITY, MAX_PROCESSES, MIN_PRIORITY, ProcessInfo, ProcessStatus, SyscallError

OK = 0
ERROR = -1

_PS_HEADER = (
    "PID  NAME                 STATUS       PRIO  PPID  FD_R  FD_W  STACK_BASE    "
    "STACK_PTR\n"
)
_PS_RULE = (
    "------------------------------------------------------------------------------------"
    "--\n"
)
_NAME_COLUMN = 21

_STATUS_LABELS = {
    ProcessStatus.READY: "READY        ",
    ProcessStatus.RUNNING: "RUNNING      ",
    ProcessStatus.BLOCKED: "BLOCKED      ",
    ProcessStatus.TERMINATED: "TERMINATED   ",
}
_UNKNOWN_STATUS = "UNKNOWN      "

_KILL_ERRORS = {
    -1: "Error: Scheduler not initialized\n",
    -2: "Error: Invalid PID {pid}\n",
    -3: "Error: Process {pid} not found\n",
    -4: "Error: Cannot kill PID {pid} (protected process)\n",
}


def ps_main(
    console: Console, args: Sequence[str], processes: Callable[[], Iterable[ProcessInfo]]
) -> int:
    """Print a table of the processes that ``processes`` reports."""
    try:
        listed = list(processes())[:MAX_PROCESSES]
    except SyscallError:
        console.print_err("Failed to get processes info\n")
        return 1

    console.print(_PS_HEADER)
    console.print(_PS_RULE)
    for proc in listed:
        console.printf("%d    ", proc.pid)
        console.print(proc.name.ljust(_NAME_COLUMN))
        console.print(_STATUS_LABELS.get(proc.status, _UNKNOWN_STATUS))
        console.printf("%d     ", proc.priority)
        if proc.parent_pid < 0:
            console.print("-     ")
        else:
            console.printf("%d     ", proc.parent_pid)
        console.printf("%d     %d     ", proc.read_fd, proc.write_fd)
        console.printf("0x%x      0x%x\n", proc.stack_base, proc.stack_pointer)
    return OK


def _for_each_pid(
    console: Console,
    args: Sequence[str],
    action: Callable[[int], object],
    success: str,
    failure: Callable[[int, int], str],
) -> int:
    errors = 0
    for arg in args:
        pid = satoi(arg)
        if pid < 0:
            console.printf("Invalid PID: %s\n", arg)
            errors += 1
            continue
        try:
            action(pid)
        except SyscallError as exc:
            console.print(failure(pid, exc.code))
            errors += 1
        else:
            console.printf(success, pid)
    return OK if errors == 0 else ERROR


def _kill_failure(pid: int, code: int) -> str:
    template = _KILL_ERRORS.get(code, "Error: Failed to kill process {pid}\n")
    return template.format(pid=pid)


def kill_main(console: Console, args: Sequence[str], kill: Callable[[int], object]) -> int:
    """Kill every process whose PID is given."""
    if not args:
        console.print_err("Usage: kill <pid1> [pid2] [pid3] ...\n")
        return ERROR
    return _for_each_pid(console, args, kill, "Process %d killed successfully\n", _kill_failure)


def block_main(console: Console, args: Sequence[str], block: Callable[[int], object]) -> int:
    """Block every process whose PID is given."""
    if not args:
        console.print("Usage: block <pid1> [pid2] [pid3] ...\n")
        return ERROR
    return _for_each_pid(
        console,
        args,
        block,
        "Process %d blocked successfully\n",
        lambda pid, _code: f"Error: Failed to block process {pid}\n",
    )


def unblock_main(console: Console, args: Sequence[str], unblock: Callable[[int], object]) -> int:
    """Unblock every process whose PID is given."""
    if not args:
        console.printf("Usage: unblock <pid1> [pid2] [pid3] ...\n")
        return ERROR
    return _for_each_pid(
        console,
        args,
        unblock,
        "Process %d unblocked successfully\n",
        lambda pid, _code: f"Error: Failed to unblock process {pid}\n",
    )


def nice_main(console: Console, args: Sequence[str], nice: Callable[[int, int], object]) -> int:
    """Change the priority of one process: ``nice <pid> <new_priority>``."""
    if len(args) != 2:
        console.print_err("Usage: nice <pid> <new_priority>\n")
        return ERROR
    pid = satoi(args[0])
    new_priority = satoi(args[1])
    try:
        nice(pid, new_priority)
    except SyscallError:
        console.printf(
            "Failed to change priority. Check PID and priority range (%d-%d).\n",
            MIN_PRIORITY,
            MAX_PRIORITY,
        )
        return ERROR
    console.printf("Changed priority of process %d to %d\n", pid, new_priority)
    return OK