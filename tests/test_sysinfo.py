from ramos.console import Console, Fd
from ramos.system import HEAP_SIZE, MemInfo, PipeInfo, SyscallError
from ramos.sysinfo import mem_main, pipes_main


def _pipe(pid, name, buffered=12):
    return PipeInfo(id=pid, name=name, read_fd=8, write_fd=9, readers=1, writers=1, buffered=buffered)


def _mem_lines(info):
    console = Console()
    assert mem_main(console, [], lambda: info) == 0
    return console.output(Fd.STDOUT).splitlines(keepends=True)


def test_mem_reports_heap_in_megabytes():
    lines = _mem_lines(MemInfo(HEAP_SIZE, 0, HEAP_SIZE, 0))
    assert lines[0] == "Total: 33554432 (32 MB)\n"
    assert len(lines) == 4


def test_mem_rounds_half_up():
    lines = _mem_lines(MemInfo(HEAP_SIZE, 1536, HEAP_SIZE - 1536, 1))
    assert lines[1].endswith("(2 KB)\n")


def test_mem_byte_columns_are_aligned():
    lines = _mem_lines(MemInfo(HEAP_SIZE, 0, HEAP_SIZE, 0))
    ends = {line.index(" (") - line.index(": ") for line in lines[:3]}
    assert len(ends) == 1


def test_mem_small_values_stay_in_bytes():
    lines = _mem_lines(MemInfo(1000, 0, 1000, 0))
    assert lines[0].endswith("(1000 B)\n")
    assert lines[1].endswith("(0 B)\n")


def test_mem_prints_block_count():
    lines = _mem_lines(MemInfo(HEAP_SIZE, 100, HEAP_SIZE - 100, 7))
    assert lines[3] == "Allocated blocks: 7\n"


def test_mem_rejects_arguments():
    console = Console()
    assert mem_main(console, ["x"], lambda: MemInfo(0, 0, 0, 0)) == -1
    assert console.output(Fd.STDOUT) == "mem: Invalid number of arguments.\n"


def test_pipes_none_active():
    console = Console()
    assert pipes_main(console, [], lambda: []) == 0
    assert console.output(Fd.STDOUT) == "No active pipes\n"


def test_pipes_table_single_pipe():
    console = Console()
    assert pipes_main(console, [], lambda: [_pipe(0, "data")]) == 0
    out = console.output(Fd.STDOUT)
    lines = out.splitlines(keepends=True)
    assert lines[0].startswith("ID   NAME")
    assert set(lines[1].strip()) == {"-"}
    assert lines[2].startswith("0    data")
    assert lines[2].endswith("12/1024\n")
    assert out.endswith("\nTotal: 1 pipe\n")


def test_pipes_anonymous_rows_align_with_named():
    console = Console()
    pipes_main(console, [], lambda: [_pipe(0, "data"), _pipe(1, "")])
    rows = console.output(Fd.STDOUT).splitlines()[2:4]
    assert "[anonymous]" in rows[1]
    assert rows[0].index("8     9") == rows[1].index("8     9")
    assert console.output(Fd.STDOUT).endswith("Total: 2 pipes\n")


def test_pipes_limited_to_max():
    console = Console()
    pipes_main(console, [], lambda: [_pipe(i % 10, f"p{i}") for i in range(40)])
    out = console.output(Fd.STDOUT)
    assert out.endswith("Total: 32 pipes\n")
    assert out.count("/1024\n") == 32


def test_pipes_failure():
    def failing():
        raise SyscallError(-1)

    console = Console()
    assert pipes_main(console, [], failing) == -1
    assert console.output(Fd.STDERR) == "Failed to get pipes info\n"
    assert console.output(Fd.STDOUT) == ""