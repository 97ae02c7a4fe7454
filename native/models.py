"""Pydantic models for native driver configuration and wire messages."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, field_validator

from native.constants import BINARY_ENV_VAR, DEFAULT_BINARY, DEFAULT_ENCODING, ENCODING_ENV_VAR, TIMEOUT_ENV_VAR
from native.encoding import Encoding
from native.nodes import to_node
from utils.env import get_env


class Status(str, Enum):
    """Outcome reported by the native driver for a parse request."""

    OK = "ok"
    # the driver got an AST, but with errors
    ERROR = "error"
    # the driver could not get an AST at all
    FATAL = "fatal"


class ParseRequest(BaseModel):
    """Request written to the native driver, one per line."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: str
    encoding: Encoding = Field(alias="Encoding")


class ParseResponse(BaseModel):
    """Reply to a ParseRequest.

    ``status`` is folded to lower case. Known values become ``Status`` members;
    anything else stays a plain string so the driver can report it verbatim.
    """

    status: Status | str = Field(default="", union_mode="left_to_right")
    errors: list[str] = Field(default_factory=list)
    ast: Any = None

    @field_validator("status", mode="before")
    @classmethod
    def _fold_status(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.lower()
        return value

    @field_validator("errors", mode="before")
    @classmethod
    def _ensure_errors_list(cls, value: Any) -> Any:
        if value is None:
            return []
        return value

    @field_validator("ast")
    @classmethod
    def _to_tree(cls, value: Any) -> Any:
        return to_node(value)


class DriverConfig(BaseModel):
    """Settings used to launch a native driver."""

    binary: str = Field(default=DEFAULT_BINARY, description="Path to the native driver executable.")
    encoding: Encoding = Field(default=Encoding(DEFAULT_ENCODING), description="Encoding used for request content.")
    timeout_seconds: PositiveFloat | None = Field(
        default=None,
        description="Default per-request deadline. The child is killed when it expires.",
    )

    @field_validator("binary", mode="before")
    @classmethod
    def _default_binary(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_BINARY
        return value

    @field_validator("encoding", mode="before")
    @classmethod
    def _parse_encoding(cls, value: Any) -> Any:
        if value is None or value == "":
            return Encoding(DEFAULT_ENCODING)
        return Encoding.parse(value)

    @field_validator("timeout_seconds", mode="before")
    @classmethod
    def _blank_timeout(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_env(cls) -> DriverConfig:
        """Build a configuration from NATIVE_DRIVER_* environment variables."""

        return cls(
            binary=get_env(BINARY_ENV_VAR),
            encoding=get_env(ENCODING_ENV_VAR),
            timeout_seconds=get_env(TIMEOUT_ENV_VAR),
        )
