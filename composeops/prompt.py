"""Interactive questions put to the user on the terminal."""

from __future__ import annotations

import getpass
import sys
from dataclasses import dataclass
from typing import Sequence, TextIO

_YES = frozenset({"y", "yes"})
_NO = frozenset({"n", "no"})


@dataclass
class User:
    """Asks the user questions; streams default to the process's own."""

    stdin: TextIO | None = None
    stdout: TextIO | None = None

    def _out(self) -> TextIO:
        return self.stdout if self.stdout is not None else sys.stdout

    def _ask(self, prompt: str) -> str:
        out = self._out()
        out.write(prompt)
        out.flush()
        source = self.stdin if self.stdin is not None else sys.stdin
        line = source.readline()
        if not line:
            raise EOFError("no answer given")
        return line.rstrip("\r\n")

    def select(self, message: str, options: Sequence[str]) -> int:
        """Show numbered options and return the index of the chosen one."""
        if not options:
            raise ValueError("nothing to select from")
        out = self._out()
        out.write(f"? {message}\n")
        for number, option in enumerate(options, start=1):
            out.write(f"  {number}) {option}\n")
        while True:
            answer = self._ask(f"Choose 1-{len(options)}: ").strip()
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return int(answer) - 1
            out.write("Invalid choice\n")

    def input(self, message: str, default_value: str) -> str:
        """Read a line of text, falling back to the default when empty."""
        suffix = f" ({default_value})" if default_value else ""
        answer = self._ask(f"? {message}{suffix} ")
        return answer if answer else default_value

    def confirm(self, message: str, default_value: bool) -> bool:
        """Ask a yes or no question."""
        hint = "(Y/n)" if default_value else "(y/N)"
        while True:
            answer = self._ask(f"? {message} {hint} ").strip().lower()
            if not answer:
                return default_value
            if answer in _YES:
                return True
            if answer in _NO:
                return False
            self._out().write("Please answer yes or no\n")

    def password(self, message: str) -> str:
        """Read a line without echoing it when reading from the terminal."""
        prompt = f"? {message} "
        if self.stdin is None:
            return getpass.getpass(prompt, stream=self.stdout)
        return self._ask(prompt)