import pytest

from ramos.console import Console, Fd
from ramos.procs import block_main, kill_main, nice_main, ps_main, unblock_main
from ramos.system import ProcessInfo, ProcessStatus, SyscallError


def _proc(pid, name, status=ProcessStatus.READY, parent=0, base=0x1000, sp=0xFF8):
    return ProcessInfo(
        pid=pid,
        name=name,
        status=status,
        priority=1,
        parent_pid=parent,
        read_fd=0,
        write_fd=1,
        stack_base=base,
        stack_pointer=sp,
    )


def _failing(code):
    def action(*_args):
        raise SyscallError(code)

    return action


def test_ps_prints_header_and_one_row_per_process():
    procs = [
        _proc(0, "init", ProcessStatus.BLOCKED, parent=-1),
        _proc(1, "shell_with_long_name", ProcessStatus.RUNNING),
    ]
    console = Console()
    assert ps_main(console, [], lambda: procs) == 0
    lines = console.output(Fd.STDOUT).splitlines(keepends=True)
    assert lines[0].startswith("PID  NAME")
    assert set(lines[1].strip()) == {"-"}
    assert len(lines) == 2 + len(procs)
    assert lines[2].startswith("0    init")
    assert "BLOCKED      " in lines[2]
    assert "RUNNING      " in lines[3]


def test_ps_status_column_is_aligned():
    procs = [_proc(2, "a", ProcessStatus.READY), _proc(3, "longer_name", ProcessStatus.READY)]
    console = Console()
    ps_main(console, [], lambda: procs)
    rows = console.output(Fd.STDOUT).splitlines()[2:]
    assert rows[0].index("READY") == rows[1].index("READY")


def test_ps_marks_missing_parent_and_prints_hex_stacks():
    console = Console()
    ps_main(console, [], lambda: [_proc(0, "init", parent=-1, base=0x1000, sp=0xFF8)])
    row = console.output(Fd.STDOUT).splitlines(keepends=True)[2]
    assert "-     " in row
    assert row.endswith("0x1000      0xFF8\n")


def test_ps_limits_to_max_processes():
    procs = [_proc(i % 10, f"p{i}") for i in range(70)]
    console = Console()
    ps_main(console, [], lambda: procs)
    assert len(console.output(Fd.STDOUT).splitlines()) == 2 + 64


def test_ps_reports_failure():
    console = Console()
    assert ps_main(console, [], _failing(-1)) == 1
    assert console.output(Fd.STDERR) == "Failed to get processes info\n"
    assert console.output(Fd.STDOUT) == ""


def test_kill_success_for_each_pid():
    killed = []
    console = Console()
    assert kill_main(console, ["5", "7"], killed.append) == 0
    assert killed == [5, 7]
    assert console.output(Fd.STDOUT) == (
        "Process 5 killed successfully\nProcess 7 killed successfully\n"
    )


@pytest.mark.parametrize(
    "code, message",
    [
        (-1, "Error: Scheduler not initialized\n"),
        (-2, "Error: Invalid PID 5\n"),
        (-3, "Error: Process 5 not found\n"),
        (-4, "Error: Cannot kill PID 5 (protected process)\n"),
        (-9, "Error: Failed to kill process 5\n"),
    ],
)
def test_kill_error_messages(code, message):
    console = Console()
    assert kill_main(console, ["5"], _failing(code)) == -1
    assert console.output(Fd.STDOUT) == message


def test_kill_rejects_negative_pid_without_calling():
    killed = []
    console = Console()
    assert kill_main(console, ["-3"], killed.append) == -1
    assert killed == []
    assert console.output(Fd.STDOUT) == "Invalid PID: -3\n"


def test_kill_without_arguments():
    console = Console()
    assert kill_main(console, [], lambda pid: None) == -1
    assert console.output(Fd.STDERR).startswith("Usage: kill")


def test_block_and_unblock_success():
    calls = []
    console = Console()
    assert block_main(console, ["4"], calls.append) == 0
    assert unblock_main(console, ["4"], calls.append) == 0
    assert calls == [4, 4]
    assert console.output(Fd.STDOUT) == (
        "Process 4 blocked successfully\nProcess 4 unblocked successfully\n"
    )


def test_block_partial_failure_returns_error():
    def block(pid):
        if pid == 9:
            raise SyscallError(-1)

    console = Console()
    assert block_main(console, ["2", "9"], block) == -1
    out = console.output(Fd.STDOUT)
    assert "Process 2 blocked successfully\n" in out
    assert "Error: Failed to block process 9\n" in out


def test_unblock_failure_message():
    console = Console()
    assert unblock_main(console, ["6"], _failing(-1)) == -1
    assert console.output(Fd.STDOUT) == "Error: Failed to unblock process 6\n"


@pytest.mark.parametrize("program", [block_main, unblock_main])
def test_block_unblock_usage_goes_to_stdout(program):
    console = Console()
    assert program(console, [], lambda pid: None) == -1
    assert console.output(Fd.STDOUT).startswith("Usage:")
    assert console.output(Fd.STDERR) == ""


def test_nice_success():
    calls = []
    console = Console()
    assert nice_main(console, ["3", "0"], lambda pid, prio: calls.append((pid, prio))) == 0
    assert calls == [(3, 0)]
    assert console.output(Fd.STDOUT) == "Changed priority of process 3 to 0\n"


def test_nice_failure():
    console = Console()
    assert nice_main(console, ["3", "9"], _failing(-1)) == -1
    assert console.output(Fd.STDOUT) == (
        "Failed to change priority. Check PID and priority range (2-0).\n"
    )


@pytest.mark.parametrize("args", [[], ["1"], ["1", "2", "3"]])
def test_nice_argument_count(args):
    console = Console()
    assert nice_main(console, args, lambda pid, prio: None) == -1
    assert console.output(Fd.STDERR) == "Usage: nice <pid> <new_priority>\n"