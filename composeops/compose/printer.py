"""Collect container events and pass their logs to a consumer."""

from __future__ import annotations

import abc
import enum
import logging
import queue
from dataclasses import dataclass
from typing import Callable

_log = logging.getLogger(__name__)


class ContainerEventType(enum.Enum):
    """Kinds of event a log printer reacts to."""

    ATTACH = "attach"
    EXIT = "exit"
    STOPPED = "stopped"
    LOG = "log"
    USER_CANCEL = "user_cancel"


@dataclass(frozen=True)
class ContainerEvent:
    """Something that happened to an attached container."""

    type: ContainerEventType
    container: str = ""
    service: str = ""
    line: str = ""
    exit_code: int = 0
    restarting: bool = False


class LogConsumer(abc.ABC):
    """Receives the output and status of attached containers."""

    @abc.abstractmethod
    def register(self, container: str) -> None:
        """A container has been attached."""

    @abc.abstractmethod
    def status(self, container: str, message: str) -> None:
        """Report a change of state of a container."""

    @abc.abstractmethod
    def log(self, container: str, service: str, line: str) -> None:
        """Report one line of container output."""


class LogPrinter:
    """Watches application containers and collects their logs."""

    def __init__(self, consumer: LogConsumer) -> None:
        self._consumer = consumer
        self._queue: queue.Queue[ContainerEvent] = queue.Queue()

    def handle_event(self, event: ContainerEvent) -> None:
        self._queue.put(event)

    def cancel(self) -> None:
        self._queue.put(ContainerEvent(type=ContainerEventType.USER_CANCEL))

    def run(self, cascade_stop: bool, exit_code_from: str, stop_fn: Callable[[], object]) -> int:
        """Process events until the last attached container has terminated.

        Returns the exit code to report; errors from ``stop_fn`` propagate.
        """
        aborting = False
        exit_code = 0
        containers: set[str] = set()
        while True:
            event = self._queue.get()
            name = event.container
            if event.type is ContainerEventType.USER_CANCEL:
                aborting = True
            elif event.type is ContainerEventType.ATTACH:
                if name in containers:
                    continue
                containers.add(name)
                self._consumer.register(name)
            elif event.type in (ContainerEventType.EXIT, ContainerEventType.STOPPED):
                if not event.restarting:
                    containers.discard(name)
                if not aborting:
                    self._consumer.status(name, f"exited with code {event.exit_code}")
                if cascade_stop:
                    if not aborting:
                        aborting = True
                        print("Aborting on container exit...")
                        stop_fn()
                    if not exit_code_from:
                        exit_code_from = event.service
                    if exit_code_from == event.service:
                        _log.error("%d", event.exit_code)
                        exit_code = event.exit_code
                if not containers:
                    return exit_code
            elif event.type is ContainerEventType.LOG:
                if not aborting:
                    self._consumer.log(name, event.service, event.line)