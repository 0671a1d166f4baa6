from __future__ import annotations
from typing import Optional


class ProcNetError(Exception):
    """Base class for everything raised while reading a connection table."""


class TableIOError(ProcNetError):
    """The line source could not be opened or read."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class FormatError(ProcNetError, ValueError):
    """A hex or decimal token is malformed, has the wrong length or is out of range."""

    def __init__(self, token: str, expected: str):
        super().__init__(f"invalid token {token!r}: expected {expected}")
        self.token = token
        self.expected = expected


class DecodeError(ProcNetError, ValueError):
    """A table row could not be turned into an Entry.

    `field` names the column that failed (``local_address``, ``uid``, ...).
    The underlying FormatError, if any, is chained as ``__cause__``.
    """

    def __init__(self, field: str, reason: str, line_no: Optional[int] = None, line: Optional[str] = None,
                 path: Optional[str] = None):
        self.field = field
        self.reason = reason
        self.line_no = line_no
        self.line = line
        self.path = path
        super().__init__(self._message())

    def _message(self) -> str:
        where = f"line {self.line_no}: " if self.line_no is not None else ""
        if self.path:
            where = f"{self.path}: {where}"
        return f"{where}cannot decode {self.field}: {self.reason}"

    def at_line(self, line_no: int, line: str) -> "DecodeError":
        self.line_no = line_no
        self.line = line
        self.args = (self._message(),)
        return self

    def in_file(self, path: str) -> "DecodeError":
        self.path = path
        self.args = (self._message(),)
        return self
