# composeops

A library of building blocks for tools that manage multi-container
projects: progress rendering, stack summaries, log printing, interactive
prompts and exit-code categories. Import it from your own code.

## Modules

- `composeops.utils`
  - `string_to_bool(s)` reads `"1"`, `"t"` or `"true"` (ignoring case and
    surrounding whitespace) as `True` and anything else as `False`.
  - `get_writer(consumer)` returns a `SplitWriter`. Its `write()` accepts
    `bytes` or `str`, hands every complete line (without the newline) to
    `consumer`, and returns the number of bytes taken. `close()` passes on
    any unfinished remainder. It also works as a context manager.
- `composeops.progress.event`
  - `Event`, a dataclass with `id`, `status`, `status_text`, `text`,
    `parent_id`, start and end times and a spinner; `Event.stop()` records
    the end time and settles the spinner.
  - `EventStatus` (`WORKING`, `DONE`, `ERROR`).
  - `Spinner`, a glyph that advances while a task runs and shows a fixed
    glyph once stopped.
  - Ready-made events: `new_event`, `error_event`, `error_message_event`,
    `creating_event`, `created_event`, `starting_event`, `started_event`,
    `waiting`, `healthy`, `exited`, `restarting_event`, `restarted_event`,
    `running_event`, `stopping_event`, `stopped_event`, `killing_event`,
    `killed_event`, `removing_event`, `removed_event`.
- `composeops.progress.writers`
  - `Writer`, the abstract interface (`start`, `stop`, `event`, `events`,
    `tail_msgf`).
  - `NoopWriter` discards everything; `PlainWriter` prints one line per
    event; `TTYWriter` redraws a coloured, aligned block of event lines in
    place, with child events indented under their parent, and prints tail
    messages when it finishes.
  - `new_writer(out, mode)` picks a `TTYWriter` or `PlainWriter` according
    to a `Mode` (`AUTO`, `TTY`, `PLAIN`); in `AUTO` a terminal stream gets
    the `TTYWriter`.
  - `run(fn)` and `run_with_status(fn)` call `fn` while a writer on stderr
    renders its progress; inside `fn`, `context_writer()` returns that
    writer. Outside any such block it returns a `NoopWriter`.
    `with_context_writer(writer)` sets the writer for a `with` block.
  - `line_text`, `align` and `num_done` are the formatting helpers the
    terminal writer uses.
- `composeops.compose.stacks`
  - `Container` and `Stack` records.
  - `containers_to_stacks(containers)` builds one `Stack` per project
    label, sorted by project name, with a combined status and the
    distinct config files of its containers.
  - `combined_status`, `combined_config_files` and
    `group_containers_by_label` are available on their own.
  - A container without a required label raises `MissingLabelError`.
- `composeops.compose.printer`
  - `LogPrinter` takes `ContainerEvent`s through `handle_event()` and
    passes them to a `LogConsumer` (`register`, `status`, `log`).
    `run(cascade_stop, exit_code_from, stop_fn)` processes events until the
    last attached container has terminated and returns the exit code; with
    cascade stop, the first exit calls `stop_fn` and the exit code is taken
    from the named service (or the first one to exit). `cancel()` stops
    further log and status output.
- `composeops.compose.metrics`
  - `FailureCategory` and `by_exit_code(exit_code)`: 0 success, 14 file
    not found, 15 compose parse failure, 16 command syntax, 17 build,
    18 pull, 130 canceled, anything else a generic failure.
- `composeops.prompt`
  - `User`, with `select`, `input`, `confirm` and `password`. It reads
    from the process's stdin and stdout unless other streams are given.
- `composeops.scan`
  - `display_scan_suggest_msg(config_dir, plugin_dirs, stream)` writes a
    suggestion to use the image scanner, unless the environment variable
    `DOCKER_SCAN_SUGGEST` is `false`, no scan plugin is found in the
    plugin directories, or the scanner's config already records an
    opt-in. It returns whether the message was written.
    `scan_available` and `scan_already_invoked` make those checks.

## Examples

```python
from composeops.compose.stacks import combined_status
from composeops.utils import string_to_bool

combined_status(["running", "exited", "running"])
# 'exited(1), running(2)'

string_to_bool(" True ")
# True
string_to_bool("nope")
# False
```

```python
from composeops.progress.event import started_event
from composeops.progress.writers import context_writer, run


def work():
    context_writer().event(started_event("Container web-1"))


run(work)
```

## What it does not do

The package does not talk to a container engine: it lists, starts,
stops or pulls nothing itself. Container records, container events and
exit codes have to be supplied by the calling code. It has no
command-line program of its own.

## Requirements

Python 3.10 or later. No third-party runtime dependencies; the tests use
pytest (`pip install composeops[test]`).