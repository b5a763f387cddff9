"""Small string helpers and a line-splitting writer."""

from __future__ import annotations

from typing import Callable

_TRUE_WORDS = frozenset({"1", "t", "true"})


def string_to_bool(s: str) -> bool:
    """Read a boolean from text, treating anything unrecognised as False."""
    return s.strip().lower() in _TRUE_WORDS


class SplitWriter:
    """Collects written data and hands each complete line to a consumer."""

    def __init__(self, consumer: Callable[[str], None]) -> None:
        self._consumer = consumer
        self._buffer = bytearray()

    def write(self, data: bytes | str) -> int:
        """Append data and emit every complete line, without its newline."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._buffer.extend(data)
        while (index := self._buffer.find(b"\n")) >= 0:
            line = bytes(self._buffer[:index])
            del self._buffer[: index + 1]
            self._consumer(line.decode("utf-8", errors="replace"))
        return len(data)

    def close(self) -> None:
        """Emit whatever is left in the buffer as a final line."""
        if not self._buffer:
            return
        rest = bytes(self._buffer)
        self._buffer.clear()
        self._consumer(rest.decode("utf-8", errors="replace"))

    def __enter__(self) -> SplitWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def get_writer(consumer: Callable[[str], None]) -> SplitWriter:
    """Build a writer that passes each line it receives to ``consumer``."""
    return SplitWriter(consumer)