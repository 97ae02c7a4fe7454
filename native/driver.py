"""Run a native driver process and exchange parse requests over its stdio."""

from __future__ import annotations

import errno
import logging
import subprocess
import threading
from typing import IO

from native.base import NativeDriver
from native.constants import DEFAULT_BINARY, DEFAULT_ENCODING
from native.encoding import Encoding, encode
from native.errors import (
    DriverError,
    DriverStartError,
    DriverTimeoutError,
    DriverWriteError,
    MultiError,
    NotRunningError,
    PartialParseError,
    ProcessExitError,
    UnsupportedStatusError,
)
from native.jsonlines import Decoder, Encoder, FramingError, FrameWriteError
from native.models import ParseRequest, ParseResponse, Status
from native.nodes import Node

logger = logging.getLogger("native.driver")


class Driver(NativeDriver):
    """Wrapper around a native driver command.

    Requests are synchronous by design: a lock admits a single parse request
    to the pipes at a time, because replies carry no request identifier and
    are matched to requests by order alone.
    """

    def __init__(
        self,
        binary: str | None = None,
        encoding: Encoding | str | None = None,
        *,
        timeout_seconds: float | None = None,
    ):
        self.binary = binary or DEFAULT_BINARY
        # Validated on use so that a bad encoding fails the request, not the constructor.
        self.encoding = encoding or Encoding(DEFAULT_ENCODING)
        self.timeout_seconds = timeout_seconds

        self._running = False
        self._lock = threading.Lock()
        self._killed = threading.Event()
        self._process: subprocess.Popen | None = None
        self._stdin: IO[bytes] | None = None
        self._stdout: IO[bytes] | None = None
        self._encoder: Encoder | None = None
        self._decoder: Decoder | None = None

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Execute the native driver and prepare it to parse code."""

        if self._running:
            return
        if self._process is not None:
            # a child killed after a timeout is still attached
            self._reap()

        logger.debug("Starting native driver: %s", self.binary)
        try:
            # stderr is inherited so driver diagnostics reach the parent's stderr.
            process = subprocess.Popen(
                [self.binary],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
            )
        except OSError as exc:
            raise DriverStartError(f"Cannot start native driver '{self.binary}': {exc}") from exc

        self._process = process
        self._stdin = process.stdin
        self._stdout = process.stdout
        self._encoder = Encoder(process.stdin)
        self._decoder = Decoder(process.stdout)
        self._killed.clear()
        self._running = True
        logger.debug("Native driver started (pid=%s)", process.pid)

    def parse(self, content: str, *, timeout: float | None = None) -> Node:
        """Send a parse request to the native driver and return the tree it replies with."""

        if not self._running:
            raise NotRunningError()

        encoding = Encoding.parse(self.encoding)
        request = ParseRequest(content=encode(content, encoding), encoding=encoding)
        deadline = timeout if timeout is not None else self.timeout_seconds

        with self._lock:
            # A previous request may have timed out while this one was waiting.
            if not self._running:
                raise NotRunningError()

            timer = self._arm_timer(deadline)
            try:
                response = self._exchange(request)
            except FramingError as exc:
                if self._killed.is_set():
                    raise DriverTimeoutError(
                        f"Native driver did not reply within {deadline} seconds",
                        timeout=deadline,
                    ) from exc
                raise
            finally:
                if timer is not None:
                    timer.cancel()
                    # a kill already in progress must finish before _killed is read
                    timer.join()
                if self._killed.is_set():
                    self._running = False

        return self._classify(response)

    def close(self) -> None:
        """Stop the native driver.

        Closing stdin tells the driver that no more requests are coming; the
        process is then waited for and stdout is closed. The first failure is
        raised once every step has run.
        """

        process = self._process
        if process is None:
            return

        self._running = False
        self._process = None
        first_error: BaseException | None = None

        try:
            self._stdin.close()
        except OSError as exc:
            first_error = exc

        try:
            returncode = process.wait()
        except OSError as exc:
            returncode = None
            if first_error is None:
                first_error = exc
        if returncode and not self._killed.is_set() and first_error is None:
            first_error = ProcessExitError(returncode)

        try:
            self._stdout.close()
        except (OSError, ValueError) as exc:
            if not _already_closed(exc) and first_error is None:
                first_error = exc

        logger.debug("Native driver stopped (pid=%s, returncode=%s)", process.pid, returncode)
        if first_error is not None:
            raise first_error

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _reap(self) -> None:
        try:
            self.close()
        except (OSError, DriverError) as exc:
            logger.warning("Failed to clean up killed native driver: %s", exc)

    def _exchange(self, request: ParseRequest) -> ParseResponse:
        try:
            self._encoder.encode(request)
        except FrameWriteError as exc:
            # The stream is broken or the driver crashed. The driver may have
            # printed a stack trace or an error message before dying, so read one
            # line back as raw text to keep it instead of failing on decoding.
            logger.warning("Failed to write request to native driver: %s", exc)
            raw = self._decoder.decode_raw()
            raise DriverWriteError(exc, raw) from exc

        return self._decoder.decode(ParseResponse)

    @staticmethod
    def _classify(response: ParseResponse) -> Node:
        if response.status == Status.OK:
            return response.ast
        if response.status == Status.ERROR:
            raise PartialParseError(response.ast, response.errors)
        if response.status == Status.FATAL:
            raise MultiError(response.errors)
        raise UnsupportedStatusError(str(response.status))

    def _arm_timer(self, timeout: float | None) -> threading.Timer | None:
        if timeout is None:
            return None
        timer = threading.Timer(timeout, self._kill, args=(timeout,))
        timer.daemon = True
        timer.start()
        return timer

    def _kill(self, timeout: float) -> None:
        process = self._process
        if process is None or process.poll() is not None:
            return
        logger.warning("Native driver did not reply within %s seconds; killing pid %s", timeout, process.pid)
        self._killed.set()
        process.kill()


def _already_closed(exc: BaseException) -> bool:
    if isinstance(exc, ValueError):
        return True
    return getattr(exc, "errno", None) == errno.EBADF
