"""Progress events and the spinner drawn next to them."""

from __future__ import annotations

import enum
import sys
import time
from dataclasses import dataclass, field
from typing import Iterable

_SPIN_INTERVAL = 0.1


class EventStatus(enum.IntEnum):
    """State of the task an event reports on."""

    WORKING = 0
    DONE = 1
    ERROR = 2


def _platform_glyphs() -> tuple[tuple[str, ...], str]:
    if sys.platform.startswith("win"):
        return ("-",), "-"
    return ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"), "⠿"


class Spinner:
    """A glyph that advances while a task runs and settles once stopped."""

    def __init__(self, chars: Iterable[str] | None = None, done: str | None = None) -> None:
        default_chars, default_done = _platform_glyphs()
        self.chars = tuple(chars) if chars is not None else default_chars
        if not self.chars:
            raise ValueError("a spinner needs at least one character")
        self.done = done if done is not None else default_done
        self.index = 0
        self.started = time.monotonic()
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True

    def __str__(self) -> str:
        if self.stopped:
            return self.done
        if time.monotonic() - self.started > _SPIN_INTERVAL:
            self.index = (self.index + 1) % len(self.chars)
        return self.chars[self.index]


@dataclass
class Event:
    """A progress event about one task."""

    id: str
    status: EventStatus = EventStatus.WORKING
    status_text: str = ""
    text: str = ""
    parent_id: str = ""
    start_time: float | None = None
    end_time: float | None = None
    spinner: Spinner | None = field(default=None, repr=False, compare=False)

    def stop(self) -> None:
        """Record the end time and settle the spinner."""
        self.end_time = time.monotonic()
        if self.spinner is not None:
            self.spinner.stop()


def new_event(event_id: str, status: EventStatus, status_text: str) -> Event:
    return Event(id=event_id, status=status, status_text=status_text)


def error_message_event(event_id: str, msg: str) -> Event:
    return new_event(event_id, EventStatus.ERROR, msg)


def error_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.ERROR, "Error")


def creating_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.WORKING, "Creating")


def starting_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.WORKING, "Starting")


def started_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.DONE, "Started")


def waiting(event_id: str) -> Event:
    return new_event(event_id, EventStatus.WORKING, "Waiting")


def healthy(event_id: str) -> Event:
    return new_event(event_id, EventStatus.DONE, "Healthy")


def exited(event_id: str) -> Event:
    return new_event(event_id, EventStatus.DONE, "Exited")


def restarting_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.WORKING, "Restarting")


def restarted_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.DONE, "Restarted")


def running_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.DONE, "Running")


def created_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.DONE, "Created")


def stopping_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.WORKING, "Stopping")


def stopped_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.DONE, "Stopped")


def killing_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.WORKING, "Killing")


def killed_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.DONE, "Killed")


def removing_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.WORKING, "Removing")


def removed_event(event_id: str) -> Event:
    return new_event(event_id, EventStatus.DONE, "Removed")