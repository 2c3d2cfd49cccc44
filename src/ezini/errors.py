# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/19 11:04:37
# @Author : Kariko Lin

"""Everything raised by this package derives from `IniError`,
so callers may catch a single base and switch on `.kind`."""

from .consts import ErrorKind


class IniError(Exception):
    kind: ErrorKind


class InvalidArgument(IniError, ValueError):
    """A required parameter is missing, `None` or of a wrong type."""
    kind = ErrorKind.INVALID_ARGUMENT


class IniIOError(IniError, OSError):
    """Wraps the `OSError` of a failed open, read or write.

    `errno`, `strerror` and `filename` are kept from the original error.
    """
    kind = ErrorKind.IO_ERROR

    @classmethod
    def wrap(cls, err: OSError) -> 'IniIOError':
        if err.errno is None:
            return cls(str(err))
        return cls(err.errno, err.strerror, err.filename)


class IniSyntaxError(IniError):
    """Base of the errors that point at a bad line of INI text."""

    def __init__(
        self, message: str,
        lineno: int | None = None, line: str | None = None
    ) -> None:
        self.lineno = lineno
        self.line = line
        if lineno is not None:
            message = f'line {lineno}: {message}'
        super().__init__(message)


class MalformedSection(IniSyntaxError):
    kind = ErrorKind.MALFORMED_SECTION


class MalformedEntry(IniSyntaxError):
    kind = ErrorKind.MALFORMED_ENTRY


class OutOfMemory(IniError, MemoryError):
    kind = ErrorKind.OUT_OF_MEMORY


class CallbackAborted(IniError):
    """The consumer of `parse_stream_with_callback` asked to stop."""
    kind = ErrorKind.ABORTED

    def __init__(self, entry: object) -> None:
        self.entry = entry
        super().__init__(f'consumer rejected {entry!r}')
