# ramos

An interactive teaching shell built around a small set of text utilities,
process tools and a multi-variable (MVar) synchronisation demo. Programs talk
to a `Console` that has numbered output streams: standard output, standard
error and one stream for each colour (`Fd.STDGREEN`, `Fd.STDBLUE`,
`Fd.STDCYAN`, `Fd.STDMAGENTA`, `Fd.STDYELLOW`).

## Installation

    pip install .

To install with the test tools:

    pip install ".[test]"

## Running the shell

    ramos

The shell reads from standard input and writes to standard output. It first
asks for a username (at most 15 characters are kept), then shows a prompt made
of the username and `> `. Input ends the session. Type `help` to list the
commands it knows:

- built-in commands: `clear`, `help`, `username <new_name>`
- programs: `ps`, `mem`, `pipes`, `time`, `date`, `echo`, `print`, `cat`,
  `red`, `rainbow`, `filter`, `wc`, `mvar`, `kill`, `block`, `unblock`, `nice`

End a command with `&` to run it in the background. Join two programs with
`|` to send the output of the first into the second:

    > echo hello world | wc
    > echo some text | rainbow

Typing `+` or `-` at the prompt changes the shell's recorded font size and
redraws the prompt and the line typed so far; backspace deletes the last
character.

## Using it as a library

- `ramos.strings`: `num_to_str_base(value, base)` (upper-case digits),
  `satoi(text)` (returns 0 for anything that is not an optionally negative
  run of digits) and `strcmp(first, second)`.
- `ramos.rand`: `UniformRandom`, a multiply-with-carry generator with
  `get_uint()` and `get_uniform(maximum)`, and `inv_sqrt(number)`, a
  single-precision fast inverse square root.
- `ramos.system`: the records `MemInfo`, `ProcessInfo`, `PipeInfo`, the
  `ProcessStatus` enum and the `SyscallError` exception.
- `ramos.console`: `Console`, the `Fd` stream numbers and
  `format_printf(fmt, *args)`, which handles `%d %i %u %x %X %o %b %p %s %c %f`
  and `%%` (hexadecimal digits are upper case). `Console` has `write`,
  `getchar`, `putchar`, `print`, `print_err`, `fprint`, `printf`, `scanf` and
  `output(fd)`, which returns everything written to one stream.
- `ramos.textutils`: `cat_main`, `red_main`, `rainbow_main`, `filter_main`,
  `wc_main`, `echo_main`, `print_main`.
- `ramos.clock`: `date_main`, `time_main`, `to_bcd`, `format_fields`.
- `ramos.procs`: `ps_main`, `kill_main`, `block_main`, `unblock_main`,
  `nice_main`; each takes the function that lists or acts on processes.
- `ramos.sysinfo`: `mem_main`, `pipes_main`.
- `ramos.mvar`: `MVarSimulation` (writer and reader threads around a
  one-slot variable guarded by two semaphores), `letter_for_writer`,
  `semaphore_name` and `mvar_main`.
- `ramos.shell`: `Shell` with `process_line`, `read_line`, `set_username`,
  `help` and `run`, and the helpers `parse_input`, `is_background` and
  `find_pipe_operator`.
- `ramos.font`: an 8x16 bitmap font for character codes 0 to 127, with
  `glyph(code)` and `render(text, on, off)`.

An example:

    from ramos.console import Console, Fd
    from ramos.textutils import wc_main

    console = Console("hello world\n")
    wc_main(console, [])
    print(console.output(Fd.STDOUT))   # 2 lines, 2 words, 12 characters

## What the package does not do

- There is no kernel behind the shell. `ps`, `kill`, `block`, `unblock` and
  `nice` work on a process table that the shell keeps for itself: `init`
  (pid 0), `shell` (pid 1) and the programs it has started. Blocking only
  pauses `print`; the other programs do not check for it.
- `mem` reports a fixed 32 MiB heap with nothing used unless the `Shell` is
  given a `mem_info` function, and `pipes` reports no pipes unless it is given
  a `pipes` function.
- A pipe joins exactly two programs, and they do not run side by side: the
  first runs to completion, its standard output is collected and then handed
  to the second as its input.
- `clear` writes an ANSI clear-screen sequence; nothing is drawn with the
  bitmap font, which is only available through `ramos.font`.
- There are no memory, priority, process, synchronisation or pipe stress-test
  commands.

## Tests

    pytest