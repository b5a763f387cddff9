"""Writers that render progress events to a stream."""

from __future__ import annotations

import abc
import contextlib
import contextvars
import dataclasses
import enum
import shutil
import sys
import threading
import time
from typing import Callable, Iterable, Iterator, Mapping, TextIO, TypeVar

from composeops.progress.event import Event, EventStatus, Spinner

T = TypeVar("T")

_ESC = "\x1b["
_UP = _ESC + "1A"
_DOWN = _ESC + "1B"
_COLUMN0 = _ESC + "0G"
_HIDE = _ESC + "?25l"
_SHOW = _ESC + "?25h"
_RESET = _ESC + "0m"
_WHITE = _ESC + "37m"
_BLUE = _ESC + "34m"
_RED = _ESC + "31m"
_TICK = 0.1


def _apply(text: str, color: str) -> str:
    return color + text + _RESET


class Mode(str, enum.Enum):
    """How progress is rendered."""

    AUTO = "auto"
    TTY = "tty"
    PLAIN = "plain"


current_mode: Mode = Mode.AUTO


class Writer(abc.ABC):
    """Receives progress events and renders them."""

    @abc.abstractmethod
    def start(self) -> None:
        """Render until stop() is called."""

    @abc.abstractmethod
    def stop(self) -> None:
        """Ask start() to finish."""

    @abc.abstractmethod
    def event(self, event: Event) -> None:
        """Record one event."""

    def events(self, events: Iterable[Event]) -> None:
        for e in events:
            self.event(e)

    @abc.abstractmethod
    def tail_msgf(self, msg: str, *args: object) -> None:
        """Record a message shown after the events."""


@dataclasses.dataclass(frozen=True)
class NoopWriter(Writer):
    """A writer that discards everything."""

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def event(self, event: Event) -> None:
        pass

    def events(self, events: Iterable[Event]) -> None:
        pass

    def tail_msgf(self, msg: str, *args: object) -> None:
        pass


class PlainWriter(Writer):
    """Dumps each event as a plain line of text."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._done = threading.Event()

    def start(self) -> None:
        self._done.wait()
        self._done.clear()

    def stop(self) -> None:
        self._done.set()

    def event(self, event: Event) -> None:
        print(event.id, event.text, event.status_text, file=self._out)

    def tail_msgf(self, msg: str, *args: object) -> None:
        print(msg, *args, file=self._out)


class TTYWriter(Writer):
    """Redraws a block of event lines in place on a terminal."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._events: dict[str, Event] = {}
        self._event_ids: list[str] = []
        self._repeated = False
        self._num_lines = 0
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._tail_events: list[str] = []

    def __getitem__(self, event_id: str) -> Event:
        with self._lock:
            return self._events[event_id]

    def start(self) -> None:
        while not self._done.wait(_TICK):
            self.render()
        self._done.clear()
        self.render()
        self.print_tail_events()

    def stop(self) -> None:
        self._done.set()

    def event(self, event: Event) -> None:
        with self._lock:
            if event.id not in self._event_ids:
                self._event_ids.append(event.id)
            last = self._events.get(event.id)
            if last is not None:
                if event.status in (EventStatus.DONE, EventStatus.ERROR) and last.status != event.status:
                    last.stop()
                last.status = event.status
                last.text = event.text
                last.status_text = event.status_text
                last.parent_id = event.parent_id
            else:
                stored = dataclasses.replace(event, start_time=time.monotonic(), spinner=Spinner())
                if stored.status in (EventStatus.DONE, EventStatus.ERROR):
                    stored.stop()
                self._events[event.id] = stored

    def tail_msgf(self, msg: str, *args: object) -> None:
        with self._lock:
            self._tail_events.append(msg % args if args else msg)

    def print_tail_events(self) -> None:
        with self._lock:
            for msg in self._tail_events:
                self._out.write(msg + "\n")
            self._flush()

    def render(self) -> None:
        """Redraw every event line over the previous drawing."""
        with self._lock:
            if not self._event_ids:
                return
            width = shutil.get_terminal_size().columns
            cursor = _UP * (self._num_lines + 1)
            if not self._repeated:
                cursor += _DOWN
            self._repeated = True
            self._out.write(cursor + _COLUMN0)
            self._out.write(_HIDE)
            try:
                done = num_done(self._events)
                first_line = f"[+] Running {done}/{self._num_lines}"
                if self._num_lines != 0 and done == self._num_lines:
                    first_line = _apply(first_line, _BLUE)
                self._out.write(first_line + "\n")

                ordered = [self._events[eid] for eid in self._event_ids]
                status_padding = 0
                for e in ordered:
                    status_padding = max(status_padding, len(f"{e.id} {e.text}"))
                    if e.parent_id:
                        status_padding -= 2

                color = not sys.platform.startswith("win")
                lines = 0
                for parent in ordered:
                    if parent.parent_id:
                        continue
                    self._out.write(line_text(parent, "", width, status_padding, color))
                    lines += 1
                    for child in ordered:
                        if child.parent_id == parent.id:
                            self._out.write(line_text(child, "  ", width, status_padding, color))
                            lines += 1
                self._num_lines = lines
            finally:
                self._out.write(_SHOW)
                self._flush()

    def _flush(self) -> None:
        flush = getattr(self._out, "flush", None)
        if flush is not None:
            flush()


def line_text(event: Event, pad: str, terminal_width: int, status_padding: int, color: bool) -> str:
    """Format one event line, with its elapsed time aligned to the right."""
    end_time = time.monotonic()
    if event.status != EventStatus.WORKING:
        end_time = event.end_time if event.end_time is not None else event.start_time
    start_time = event.start_time
    elapsed = 0.0 if start_time is None or end_time is None else end_time - start_time

    text_len = len(f"{event.id} {event.text}")
    padding = max(status_padding - text_len, 0)
    max_status_len = terminal_width - text_len - status_padding - 15
    status = event.status_text
    if 0 < max_status_len < len(status):
        status = status[:max_status_len] + "..."
    spinner = str(event.spinner) if event.spinner is not None else ""
    text = f"{pad} {spinner} {event.id} {event.text}{' ' * padding} {status}"
    timer = f"{elapsed:.1f}s\n"
    line = align(text, timer, terminal_width)

    if not color:
        return line
    if event.status == EventStatus.DONE:
        return _apply(line, _BLUE)
    if event.status == EventStatus.ERROR:
        return _apply(line, _RED)
    return _apply(line, _WHITE)


def align(left: str, right: str, width: int) -> str:
    """Pad ``left`` so that ``right`` ends at column ``width``."""
    field_width = abs(width - len(right) - 1)
    return f"{left:<{field_width}} {right}"


def num_done(events: Mapping[str, Event]) -> int:
    return sum(1 for e in events.values() if e.status == EventStatus.DONE)


_WRITER: contextvars.ContextVar[Writer] = contextvars.ContextVar("progress_writer")


def context_writer() -> Writer:
    """Return the writer in effect, or a writer that discards everything."""
    return _WRITER.get(NoopWriter())


@contextlib.contextmanager
def with_context_writer(writer: Writer) -> Iterator[Writer]:
    """Make ``writer`` the one in effect for the duration of the block."""
    token = _WRITER.set(writer)
    try:
        yield writer
    finally:
        _WRITER.reset(token)


def new_writer(out: TextIO, mode: Mode | str = Mode.AUTO) -> Writer:
    """Pick a terminal or plain writer for ``out`` according to ``mode``."""
    mode = Mode(mode)
    isatty = getattr(out, "isatty", None)
    is_terminal = bool(isatty()) if isatty is not None else False
    if mode is Mode.TTY or (mode is Mode.AUTO and is_terminal):
        return TTYWriter(out)
    return PlainWriter(out)


def run_with_status(fn: Callable[[], T]) -> T:
    """Call ``fn`` while a writer on stderr renders its progress; return its result."""
    writer = new_writer(sys.stderr, current_mode)
    renderer = threading.Thread(target=writer.start, daemon=True)
    renderer.start()
    try:
        with with_context_writer(writer):
            return fn()
    finally:
        writer.stop()
        renderer.join()


def run(fn: Callable[[], object]) -> None:
    """Call ``fn`` while a writer on stderr renders its progress."""
    run_with_status(fn)