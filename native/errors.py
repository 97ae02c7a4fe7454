"""Exceptions raised by the native driver."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class DriverError(RuntimeError):
    """Base class for native driver failures."""


class NotRunningError(DriverError):
    """Raised when a request is issued to a driver that is not running."""

    def __init__(self, message: str = "native driver is not running") -> None:
        super().__init__(message)


class DriverStartError(DriverError):
    """Raised when the native driver process cannot be spawned."""


class DriverTimeoutError(DriverError):
    """Raised when a request exceeds its deadline and the child was killed."""

    def __init__(self, message: str, *, timeout: float) -> None:
        super().__init__(message)
        self.timeout = timeout


class ProcessExitError(DriverError):
    """Raised by close() when the native driver exits with a non-zero status."""

    def __init__(self, returncode: int) -> None:
        super().__init__(f"native driver exited with status {returncode}")
        self.returncode = returncode


class InvalidEncodingError(DriverError, ValueError):
    """Raised for an encoding tag outside the supported set."""

    def __init__(self, encoding: Any) -> None:
        super().__init__(f"invalid Encoding: {encoding}")
        self.encoding = encoding


class EncodingEncodeError(DriverError, ValueError):
    """Raised when content cannot be represented in its wire encoding."""


class EncodingDecodeError(DriverError, ValueError):
    """Raised when wire content cannot be decoded with its declared encoding."""


class DriverWriteError(DriverError):
    """Raised when a request could not be written but the child left a message.

    The raw line read back from the child (usually a stack trace or a crash
    notice) is preserved next to the original write failure.
    """

    def __init__(self, write_error: BaseException, raw: str) -> None:
        super().__init__(f"error: {write_error}; {raw}")
        self.write_error = write_error
        self.raw = raw


class UnsupportedStatusError(DriverError):
    """Raised when the child replies with a status the driver does not know."""

    def __init__(self, status: str) -> None:
        super().__init__(f"unsupported status: {status}")
        self.status = status


class MultiError(DriverError):
    """The child could not produce a tree; only error messages are available."""

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = list(errors)
        super().__init__(self._format(self.errors))

    @staticmethod
    def _format(errors: list[str]) -> str:
        if not errors:
            return "native driver failed without reporting errors"
        if len(errors) == 1:
            return errors[0]
        lines = "\n".join(f"\t* {err}" for err in errors)
        return f"{len(errors)} errors occurred:\n{lines}"


class PartialParseError(MultiError):
    """The child produced a (possibly incomplete) tree alongside errors."""

    def __init__(self, ast: Any, errors: Sequence[str]) -> None:
        super().__init__(errors)
        self.ast = ast
