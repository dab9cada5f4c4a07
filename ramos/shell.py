"""Interactive command shell: built-in commands, programs, pipes and background jobs."""

from __future__ import annotations

import argparse
import sys
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from .clock import date_main, time_main
from .console import Console, Fd
from .mvar import mvar_main
from .procs import block_main, kill_main, nice_main, ps_main, unblock_main
from .sysinfo import mem_main, pipes_main
from .system import (
    HEAP_SIZE,
    MAX_PRIORITY,
    MAX_PROCESSES,
    MIN_PRIORITY,
    MemInfo,
    PipeInfo,
    ProcessInfo,
    ProcessStatus,
    SyscallError,
)
from .textutils import (
    cat_main,
    echo_main,
    filter_main,
    print_main,
    rainbow_main,
    red_main,
    wc_main,
)

INPUT_MAX = 128
PROMPT = "> "
CURSOR = "_"
ERROR_MSG = "Use command 'help' to see available commands\n"
INITIAL_MESSAGE_1 = "Welcome to ramOS!"
INITIAL_MESSAGE_2 = "Type your username: "
HELP_MESSAGE = "--Write help to see available commands--\n"
USERNAME_MAX_LENGTH = 16
MAX_ARGS = 16

INIT_PID = 0
SHELL_PID = 1
DEFAULT_PRIORITY = 1
MAX_PID = MAX_PROCESSES - 1

_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_TRAILING_BLANKS = " \t\n"


def parse_input(line: str) -> list[str]:
    """Split a command line on spaces; every '|' becomes a token of its own.

    At most ``MAX_ARGS`` tokens are kept.
    """
    tokens: list[str] = []
    current: list[str] = []
    for ch in line:
        if ch in " |":
            if current:
                tokens.append("".join(current))
                current = []
            if ch == "|":
                tokens.append("|")
        else:
            current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens[:MAX_ARGS]


def is_background(line: str) -> tuple[bool, str]:
    """Tell whether ``line`` ends in '&'; return the flag and the line without it."""
    stripped = line.rstrip(_TRAILING_BLANKS)
    if stripped.endswith("&"):
        return True, stripped[:-1]
    return False, line


def find_pipe_operator(tokens: Sequence[str]) -> int | None:
    """Index of the first token that starts with '|', or None."""
    return next((index for index, token in enumerate(tokens) if token.startswith("|")), None)


@dataclass
class _Job:
    pid: int
    name: str
    parent_pid: int
    priority: int
    status: ProcessStatus = ProcessStatus.RUNNING
    killable: bool = True
    stop: threading.Event = field(default_factory=threading.Event)
    resume: threading.Event = field(default_factory=threading.Event)

    def __post_init__(self) -> None:
        self.resume.set()

    def keep_going(self) -> bool:
        """Wait while blocked; False once the job has been killed."""
        while not self.resume.wait(0.05):
            if self.stop.is_set():
                return False
        return not self.stop.is_set()

    def info(self) -> ProcessInfo:
        return ProcessInfo(
            pid=self.pid,
            name=self.name,
            status=self.status,
            priority=self.priority,
            parent_pid=self.parent_pid,
            read_fd=Fd.STDIN,
            write_fd=Fd.STDOUT,
            stack_base=0,
            stack_pointer=0,
        )


class _ProcessTable:
    """The jobs the shell knows about, including init and the shell itself."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._jobs: dict[int, _Job] = {
            INIT_PID: _Job(INIT_PID, "init", -1, MIN_PRIORITY, ProcessStatus.READY, killable=False),
            SHELL_PID: _Job(SHELL_PID, "shell", INIT_PID, MAX_PRIORITY, killable=False),
        }

    def spawn(self, name: str, parent_pid: int, priority: int) -> _Job:
        with self._lock:
            pid = next((pid for pid in range(MAX_PROCESSES) if pid not in self._jobs), None)
            if pid is None:
                raise SyscallError(-1, "process table is full")
            job = _Job(pid, name, parent_pid, priority)
            self._jobs[pid] = job
            return job

    def exit(self, job: _Job) -> None:
        with self._lock:
            if self._jobs.get(job.pid) is job:
                del self._jobs[job.pid]

    def snapshot(self) -> list[ProcessInfo]:
        with self._lock:
            return [self._jobs[pid].info() for pid in sorted(self._jobs)]

    def set_status(self, pid: int, status: ProcessStatus) -> None:
        with self._lock:
            self._jobs[pid].status = status

    def _find(self, pid: int) -> _Job:
        job = self._jobs.get(pid)
        if job is None:
            raise SyscallError(-1, f"no such process: {pid}")
        return job

    def kill(self, pid: int) -> None:
        with self._lock:
            if not 0 <= pid <= MAX_PID:
                raise SyscallError(-2, f"invalid pid: {pid}")
            job = self._jobs.get(pid)
            if job is None:
                raise SyscallError(-3, f"no such process: {pid}")
            if not job.killable:
                raise SyscallError(-4, f"process {pid} is protected")
            job.stop.set()
            job.resume.set()
            del self._jobs[pid]

    def block(self, pid: int) -> None:
        with self._lock:
            job = self._find(pid)
            if not job.killable:
                raise SyscallError(-1, f"process {pid} cannot be blocked")
            job.status = ProcessStatus.BLOCKED
            job.resume.clear()

    def unblock(self, pid: int) -> None:
        with self._lock:
            job = self._find(pid)
            job.status = ProcessStatus.READY
            job.resume.set()

    def nice(self, pid: int, priority: int) -> None:
        with self._lock:
            job = self._find(pid)
            if not MAX_PRIORITY <= priority <= MIN_PRIORITY:
                raise SyscallError(-1, f"priority out of range: {priority}")
            job.priority = priority


class _RedirectedConsole(Console):
    """A console view that reads from the parent or from given text, and may capture stdout."""

    def __init__(self, parent: Console, stdin: str | None = None, capture: bool = False) -> None:
        super().__init__(stdin if stdin is not None else "")
        self._parent = parent
        self._from_parent = stdin is None
        self._captured: list[str] | None = [] if capture else None

    def getchar(self) -> str | None:
        if self._from_parent:
            return self._parent.getchar()
        return super().getchar()

    def write(self, fd: int, text: str) -> int:
        if self._captured is not None and fd == Fd.STDOUT:
            self._captured.append(text)
            return len(text)
        return self._parent.write(fd, text)

    @property
    def captured(self) -> str:
        return "".join(self._captured or [])


_Runner = Callable[[Console, list, _Job], int]


@dataclass(frozen=True)
class _Program:
    name: str
    description: str
    run: _Runner


_Stage = tuple[_Program, list, _Job]


class Shell:
    """Reads command lines and runs built-in commands and programs."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        username: str = "",
        echo: bool = True,
        now: Callable[[], datetime] | None = None,
        mem_info: Callable[[], MemInfo] | None = None,
        pipes: Callable[[], Sequence[PipeInfo]] | None = None,
        clear: Callable[[], object] | None = None,
    ) -> None:
        self.console = console if console is not None else Console()
        self.username = ""
        self.set_username(username)
        self.previous_input = ""
        self._echo = echo
        self._now = now
        self._mem_info = mem_info or (lambda: MemInfo(HEAP_SIZE, 0, HEAP_SIZE, 0))
        self._pipes = pipes or (lambda: ())
        self._clear = clear or (lambda: self.console.write(Fd.STDOUT, _CLEAR_SCREEN))
        self._font_size = 1
        self._current: list[str] = []
        self._table = _ProcessTable()
        self._builtins: dict[str, tuple[str, Callable[[list], None]]] = {
            "clear": ("clears the screen", lambda args: self._clear()),
            "help": ("provides information about available commands", lambda args: self.help()),
            "username": ("changes the shell username", self._username_command),
        }
        self._programs = {program.name: program for program in self._program_table()}

    @property
    def font_size(self) -> int:
        return self._font_size

    def _moment(self) -> datetime | None:
        return self._now() if self._now is not None else None

    def _program_table(self) -> list[_Program]:
        table = self._table
        return [
            _Program("ps", "prints to STDOUT information about current processes",
                     lambda c, a, j: ps_main(c, a, table.snapshot)),
            _Program("mem", "prints to STDOUT memory usage information",
                     lambda c, a, j: mem_main(c, a, self._mem_info)),
            _Program("pipes", "prints to STDOUT information about open pipes",
                     lambda c, a, j: pipes_main(c, a, self._pipes)),
            _Program("time", "prints system time to STDOUT",
                     lambda c, a, j: time_main(c, a, self._moment())),
            _Program("date", "prints system date to STDOUT",
                     lambda c, a, j: date_main(c, a, self._moment())),
            _Program("echo", "prints to STDOUT its params", lambda c, a, j: echo_main(c, a)),
            _Program("print", "prints a string to STDOUT and yields indefinately",
                     lambda c, a, j: print_main(c, a, j.keep_going)),
            _Program("cat", "reads from STDIN and prints it to STDOUT", lambda c, a, j: cat_main(c, a)),
            _Program("red", "reads from STDIN and prints it to STDERR", lambda c, a, j: red_main(c, a)),
            _Program("rainbow", "reads from STDIN and prints one char to each color fd",
                     lambda c, a, j: rainbow_main(c, a)),
            _Program("filter", "filters out vowels from input until '-' is encountered",
                     lambda c, a, j: filter_main(c, a)),
            _Program("wc", "counts the number of lines, words and characters from STDIN",
                     lambda c, a, j: wc_main(c, a)),
            _Program("mvar", "tests multi-variable synchronization", lambda c, a, j: mvar_main(c, a)),
            _Program("kill", "kills a process given its pid", lambda c, a, j: kill_main(c, a, table.kill)),
            _Program("block", "blocks a process given its pid",
                     lambda c, a, j: block_main(c, a, table.block)),
            _Program("unblock", "unblocks a blocked process given its pid",
                     lambda c, a, j: unblock_main(c, a, table.unblock)),
            _Program("nice", "changes the priority of a process",
                     lambda c, a, j: nice_main(c, a, table.nice)),
        ]

    # -- line editing ---------------------------------------------------

    def _echo_text(self, text: str) -> None:
        if self._echo:
            self.console.write(Fd.STDOUT, text)

    def _redraw(self, step: int) -> None:
        self._font_size = max(1, self._font_size + step)
        self._clear()
        self.console.fprint(Fd.STDCYAN, self.username)
        self.console.print(PROMPT)
        self.console.print("".join(self._current))
        self.console.putchar(CURSOR)

    def read_line(self, max_length: int) -> str:
        """Read one edited line of at most ``max_length`` characters.

        '+' and '-' change the font size, backspace deletes. Raises EOFError
        when input ends before anything was typed.
        """
        if max_length < 0:
            raise ValueError("max_length must not be negative")
        self._current = []
        self._echo_text(CURSOR)
        while True:
            ch = self.console.getchar()
            if ch is None:
                if not self._current:
                    self._echo_text("\b")
                    raise EOFError("end of input")
                break
            if ch == "\n":
                break
            if ch == "+":
                self._redraw(1)
            elif ch == "-":
                self._redraw(-1)
            elif ch == "\b":
                if self._current:
                    self._current.pop()
                    self._echo_text("\b\b" + CURSOR)
            elif len(self._current) < max_length:
                self._current.append(ch)
                self._echo_text("\b" + ch + CURSOR)
        self._echo_text("\b")
        return "".join(self._current)

    def set_username(self, name: str) -> None:
        """Set the name shown before the prompt, cut to fit."""
        self.username = name[: USERNAME_MAX_LENGTH - 1]

    # -- commands -------------------------------------------------------

    def help(self) -> None:
        """Print the built-in commands and programs with their descriptions."""
        out = self.console
        out.print("\nType '+' or '-' to change font size\n\n")
        out.print("Builtin commands:\n")
        for name, (description, _) in self._builtins.items():
            out.print(f"  {name} - {description}")
            out.putchar("\n")
        out.putchar("\n")
        out.print("\nExternal programs:\n")
        out.print("--Type <program_name> & to run in background, else it runs in foreground--\n")
        out.print("--Type <program_1> | <program_2> to pipe 2 programs--\n\n")
        for program in self._programs.values():
            out.print(f"  {program.name} - {program.description}")
            out.putchar("\n")
        out.putchar("\n")

    def _username_command(self, args: list) -> None:
        if not args:
            self.console.print("Usage: username <new_name>\n")
            return
        new_name = " ".join(args)[: USERNAME_MAX_LENGTH - 1]
        self.set_username(new_name)
        self.console.print("Username updated to: ")
        self.console.print(new_name)
        self.console.putchar("\n")

    def process_line(self, line: str) -> None:
        """Run one command line."""
        background, line = is_background(line)
        tokens = parse_input(line)
        if not tokens:
            return

        pipe_index = find_pipe_operator(tokens)
        if pipe_index is not None:
            if pipe_index == 0:
                self.console.print_err("Syntax error: pipe at start of command\n")
                return
            if pipe_index == len(tokens) - 1:
                self.console.print_err("Syntax error: pipe at end of command\n")
                return
            self._run_piped(tokens[:pipe_index], tokens[pipe_index + 1:], background)
            return

        command, args = tokens[0], tokens[1:]
        builtin = self._builtins.get(command)
        if builtin is not None:
            builtin[1](args)
            return
        if self._run_external(command, args, background):
            return
        self.console.print_err(f"Unknown command: '{command}'\n")
        self.console.print_err(ERROR_MSG)

    def _run_external(self, command: str, args: list, background: bool) -> bool:
        program = self._programs.get(command)
        if program is None:
            return False
        try:
            job = self._table.spawn(command, SHELL_PID, DEFAULT_PRIORITY)
        except SyscallError:
            self.console.print_err("Failed to create process\n")
            return False
        self._execute([(program, args, job)], background)
        return True

    def _run_piped(self, left: list, right: list, background: bool) -> None:
        for name in (left[0], right[0]):
            if name not in self._programs:
                self.console.print_err(f"Unknown program: '{name}'\n")
                return
        jobs: list[_Job] = []
        try:
            for name in (left[0], right[0]):
                jobs.append(self._table.spawn(name, SHELL_PID, DEFAULT_PRIORITY))
        except SyscallError:
            for job in jobs:
                self._table.exit(job)
            self.console.print_err("Failed to create piped processes\n")
            return
        stages = [
            (self._programs[left[0]], left[1:], jobs[0]),
            (self._programs[right[0]], right[1:], jobs[1]),
        ]
        self._execute(stages, background)

    def _execute(self, stages: list[_Stage], background: bool) -> None:
        if background:
            for _, _, job in stages:
                job.parent_pid = INIT_PID
            thread = threading.Thread(
                target=self._run_stages, args=(stages, False), name="background-job", daemon=True
            )
            thread.start()
            return

        for _, _, job in stages:
            job.priority = MAX_PRIORITY
        self._table.set_status(SHELL_PID, ProcessStatus.BLOCKED)
        try:
            self._run_stages(stages, True)
        except KeyboardInterrupt:
            for _, _, job in stages:
                job.stop.set()
        finally:
            self._table.set_status(SHELL_PID, ProcessStatus.RUNNING)
        self.console.putchar("\n")

    def _run_stages(self, stages: list[_Stage], interactive: bool) -> None:
        piped: str | None = None if interactive else ""
        try:
            for index, (program, args, job) in enumerate(stages):
                last = index == len(stages) - 1
                console = _RedirectedConsole(self.console, stdin=piped, capture=not last)
                if not job.stop.is_set():
                    program.run(console, list(args), job)
                self._table.exit(job)
                piped = console.captured
        finally:
            for _, _, job in stages:
                self._table.exit(job)

    # -- main loop ------------------------------------------------------

    def _greet(self) -> None:
        self._font_size += 1
        self.console.fprint(Fd.STDMAGENTA, INITIAL_MESSAGE_1)
        self.console.putchar("\n")
        self.console.print(INITIAL_MESSAGE_2)
        self.set_username(self.read_line(USERNAME_MAX_LENGTH - 1))
        self.console.putchar("\n")
        self.console.fprint(Fd.STDMAGENTA, HELP_MESSAGE)
        self.console.putchar("\n")
        self._font_size = max(1, self._font_size - 1)

    def run(self) -> int:
        """Greet, ask for a username, then run command lines until input ends."""
        try:
            self._greet()
            while True:
                self.console.fprint(Fd.STDCYAN, self.username)
                self.console.print(PROMPT)
                line = self.read_line(INPUT_MAX - 1)
                self.console.putchar("\n")
                self.process_line(line)
                self.previous_input = line
        except EOFError:
            return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the shell on standard input and output."""
    parser = argparse.ArgumentParser(prog="ramos", description="A small command shell.")
    parser.parse_args(argv)
    console = Console(sys.stdin, display=sys.stdout)
    shell = Shell(console, echo=not sys.stdin.isatty())
    try:
        return shell.run()
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())