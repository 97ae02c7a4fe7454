"""Internal defaults and constants for the native driver."""

from __future__ import annotations

# Location of the native driver binary inside a driver image. Pass an explicit
# path to Driver (or set NATIVE_DRIVER_BIN) instead of changing this value.
DEFAULT_BINARY = "/opt/driver/bin/native"
DEFAULT_ENCODING = "utf8"

BINARY_ENV_VAR = "NATIVE_DRIVER_BIN"
ENCODING_ENV_VAR = "NATIVE_DRIVER_ENCODING"
TIMEOUT_ENV_VAR = "NATIVE_DRIVER_TIMEOUT"
