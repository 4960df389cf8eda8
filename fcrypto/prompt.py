"""Interactive password entry.

All terminal I/O goes through a :class:`PasswordPrompter`, which is handed its
prompt sink, its stdin and its visible-line reader when it is built. Tests
construct one with ``io.StringIO`` objects; the module-level helpers build a
default one on stderr/stdin per call.
"""

from __future__ import annotations

import getpass
import sys
from typing import Callable, Optional, TextIO

from .errors import PasswordError, PasswordReadError
from .kdf import normalize_password


def _is_terminal(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (ValueError, OSError):  # closed or detached stream
        return False


def _stdin_line_reader(stdin: TextIO) -> Callable[[], str]:
    def read_line() -> str:
        line = stdin.readline()
        if not line:
            raise PasswordReadError("Failed to read line: end of input")
        return line.strip()

    return read_line


class TerminalReader:
    """Reads without echo from the controlling terminal."""

    def __init__(self, output: TextIO):
        self.output = output

    def read(self) -> str:
        try:
            return getpass.getpass(prompt="", stream=self.output)
        except EOFError as exc:
            raise PasswordReadError("Failed to read password: end of input") from exc


class LineReader:
    """Reads one visible line; used when stdin is not a terminal."""

    def __init__(self, read_line: Callable[[], str]):
        self.read_line = read_line

    def read(self) -> str:
        return self.read_line()


class PasswordPrompter:
    def __init__(
        self,
        output: Optional[TextIO] = None,
        read_line: Optional[Callable[[], str]] = None,
        stdin: Optional[TextIO] = None,
    ):
        self.output = output if output is not None else sys.stderr
        self.stdin = stdin if stdin is not None else sys.stdin
        self.read_line = read_line if read_line is not None else _stdin_line_reader(self.stdin)

    def reader(self):
        if _is_terminal(self.stdin):
            return TerminalReader(self.output)
        return LineReader(self.read_line)

    def read_password(self) -> str:
        return self.reader().read()

    def get_password(self, prompt: str) -> str:
        """Ask until a valid password is entered; returns it normalized."""
        print(prompt, file=self.output)
        while True:
            print("password:", end="", file=self.output, flush=True)
            entry = self.read_password()
            try:
                return normalize_password(entry)
            except PasswordError as exc:
                print(f"Bad password: {exc}", file=self.output)

    def change_password(self, label: str) -> str:
        """Ask twice for the ``label`` password until both entries match."""
        while True:
            first = self.get_password(f"Enter {label} password:")
            second = self.get_password(f"Confirm {label} password:")
            if first == second:
                return first
            print("Passwords do not match!", file=self.output)


def read_password() -> str:
    return PasswordPrompter().read_password()


def get_password(prompt: str) -> str:
    return PasswordPrompter().get_password(prompt)


def change_password(label: str) -> str:
    return PasswordPrompter().change_password(label)
