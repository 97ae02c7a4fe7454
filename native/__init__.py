"""Client for native parser drivers that speak JSON lines over stdio."""

from __future__ import annotations

from .base import NativeDriver
from .driver import Driver
from .encoding import Encoding
from .errors import (
    DriverError,
    DriverStartError,
    DriverTimeoutError,
    DriverWriteError,
    EncodingDecodeError,
    EncodingEncodeError,
    InvalidEncodingError,
    MultiError,
    NotRunningError,
    PartialParseError,
    ProcessExitError,
    UnsupportedStatusError,
)
from .models import DriverConfig


def create_driver(config: DriverConfig | None = None) -> Driver:
    """Build a driver from ``config``, or from NATIVE_DRIVER_* variables when omitted."""

    config = config or DriverConfig.from_env()
    return Driver(config.binary, config.encoding, timeout_seconds=config.timeout_seconds)


__all__ = [
    "Driver",
    "DriverConfig",
    "DriverError",
    "DriverStartError",
    "DriverTimeoutError",
    "DriverWriteError",
    "Encoding",
    "EncodingDecodeError",
    "EncodingEncodeError",
    "InvalidEncodingError",
    "MultiError",
    "NativeDriver",
    "NotRunningError",
    "PartialParseError",
    "ProcessExitError",
    "UnsupportedStatusError",
    "create_driver",
]
