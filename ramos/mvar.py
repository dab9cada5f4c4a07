"""An MVar shared by writer and reader threads, guarded by two semaphores."""

from __future__ import annotations

import os
import threading
from collections.abc import Sequence

from .console import Console, Fd
from .rand import UniformRandom
from .strings import num_to_str_base, satoi

OK = 0
ERROR = -1

MAX_SEM_NAME_LENGTH = 64
SEM_PREFIX = "mvar_"
SEM_EMPTY_SUFFIX = "empty_"
SEM_FULL_SUFFIX = "full_"

LETTER_POOL = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
MIN_SLEEP_MS = 100
MAX_RANDOM_SLEEP_OFFSET_MS = 1000

COLOR_FDS = (Fd.STDOUT, Fd.STDGREEN, Fd.STDBLUE, Fd.STDMAGENTA, Fd.STDYELLOW)

_USAGE = "Use: mvar <num_writers> <num_readers>\n"
_POLL_SECONDS = 0.05


def letter_for_writer(index: int) -> str:
    """The letter a writer puts in the MVar, or '?' past the end of the pool."""
    if 0 <= index < len(LETTER_POOL):
        return LETTER_POOL[index]
    return "?"


def semaphore_name(suffix: str, pid: int) -> str:
    """Build ``mvar_<suffix><pid>``, cut to fit a semaphore name."""
    name = SEM_PREFIX + suffix + num_to_str_base(pid, 10)
    return name[: MAX_SEM_NAME_LENGTH - 1]


class MVarSimulation:
    """Writers put their letter into a one-slot variable; readers take it and print it.

    Each reader prints to a colour descriptor chosen by its index.
    """

    def __init__(
        self,
        console: Console,
        writers: int,
        readers: int,
        pid: int = 0,
        *,
        min_sleep_ms: int = MIN_SLEEP_MS,
        max_offset_ms: int = MAX_RANDOM_SLEEP_OFFSET_MS,
        rng: UniformRandom | None = None,
    ) -> None:
        if writers <= 0 or readers <= 0:
            raise ValueError("writers and readers must be greater than 0")
        if writers > len(LETTER_POOL):
            raise ValueError(f"at most {len(LETTER_POOL)} writers are supported")
        if min_sleep_ms < 0 or max_offset_ms < 0:
            raise ValueError("sleep times must not be negative")
        self.console = console
        self.writers = writers
        self.readers = readers
        self.empty_name = semaphore_name(SEM_EMPTY_SUFFIX, pid)
        self.full_name = semaphore_name(SEM_FULL_SUFFIX, pid)
        self._min_sleep_ms = min_sleep_ms
        self._max_offset_ms = max_offset_ms
        self._rng = rng if rng is not None else UniformRandom()
        self._empty = threading.Semaphore(1)
        self._full = threading.Semaphore(0)
        self._value: str | None = None
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []
        self._readings: list[tuple[int, str]] = []

    @property
    def running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    @property
    def readings(self) -> tuple[tuple[int, str], ...]:
        """Every (reader index, letter) taken so far, in order."""
        with self._lock:
            return tuple(self._readings)

    def start(self) -> None:
        """Start all writer and reader threads."""
        if self._threads:
            raise RuntimeError("simulation already started")
        self._stop.clear()
        for index in range(self.writers):
            self._spawn(self._writer, index, "mvar_writer")
        for index in range(self.readers):
            self._spawn(self._reader, index, "mvar_reader")

    def stop(self) -> None:
        """Ask every thread to finish and wait for them."""
        self._stop.set()
        for thread in self._threads:
            thread.join()

    def __enter__(self) -> MVarSimulation:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _spawn(self, target, index: int, name: str) -> None:
        thread = threading.Thread(target=target, args=(index,), name=f"{name}-{index}", daemon=True)
        self._threads.append(thread)
        thread.start()

    def _pause(self) -> bool:
        """Sleep a random while; True when asked to stop."""
        with self._lock:
            delay = self._min_sleep_ms + self._rng.get_uniform(self._max_offset_ms)
        return self._stop.wait(delay / 1000)

    def _acquire(self, semaphore: threading.Semaphore) -> bool:
        while not self._stop.is_set():
            if semaphore.acquire(timeout=_POLL_SECONDS):
                return True
        return False

    def _writer(self, index: int) -> None:
        letter = letter_for_writer(index)
        while not self._pause():
            if not self._acquire(self._empty):
                return
            self._value = letter
            self._full.release()

    def _reader(self, index: int) -> None:
        fd = COLOR_FDS[index % len(COLOR_FDS)]
        while not self._pause():
            if not self._acquire(self._full):
                return
            letter = self._value
            self._value = None
            self._empty.release()
            with self._lock:
                self._readings.append((index, letter))
                self.console.write(fd, letter)
                self.console.write(fd, " ")


def mvar_main(console: Console, args: Sequence[str], duration: float | None = None) -> int:
    """Run ``mvar <num_writers> <num_readers>`` for ``duration`` seconds, or until interrupted."""
    if len(args) != 2:
        console.print_err(_USAGE)
        return ERROR

    num_writers = satoi(args[0])
    num_readers = satoi(args[1])

    if num_writers <= 0 or num_readers <= 0:
        console.print_err("mvar: paramers must be greater than 0.\n")
        console.print_err(_USAGE)
        return ERROR

    if num_writers > len(LETTER_POOL):
        console.print_err("mvar: maximum number of readers is 62.\n")
        return ERROR

    simulation = MVarSimulation(console, num_writers, num_readers, os.getpid())
    try:
        simulation.start()
    except RuntimeError:
        simulation.stop()
        console.print_err("mvar: error creating a writer.\n")
        return ERROR

    console.printf("mvar: %d writers y %d readers created.\n", num_writers, num_readers)
    try:
        if duration is None:
            while simulation.running:
                threading.Event().wait(1.0)
        else:
            threading.Event().wait(duration)
    except KeyboardInterrupt:
        pass
    finally:
        simulation.stop()
    return OK