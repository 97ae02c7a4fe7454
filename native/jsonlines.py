"""Line-delimited JSON framing over byte streams."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import IO, Any, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger("native.jsonlines")

ModelT = TypeVar("ModelT", bound=BaseModel)


class FramingError(RuntimeError):
    """Base class for failures on a JSON lines stream."""


class FrameWriteError(FramingError):
    """Raised when a message cannot be written to the stream."""


class FrameEncodeError(FramingError):
    """Raised when a message cannot be serialized as a UTF-8 JSON line."""


class StreamClosedError(FramingError):
    """Raised when the stream ends before a complete message was read."""


class FrameDecodeError(FramingError):
    """Raised when a line is not valid JSON or does not match the expected message."""


def encode_frame(message: BaseModel | Mapping[str, Any]) -> bytes:
    if isinstance(message, BaseModel):
        payload = message.model_dump(mode="json", by_alias=True)
    else:
        payload = dict(message)
    try:
        return (json.dumps(payload, separators=(",", ":"), ensure_ascii=False) + "\n").encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise FrameEncodeError(f"cannot encode message: {exc}") from exc


class Encoder:
    """Write one JSON message per line."""

    def __init__(self, writer: IO[bytes]):
        self._writer = writer

    def encode(self, message: BaseModel | Mapping[str, Any]) -> None:
        frame = encode_frame(message)
        try:
            self._writer.write(frame)
            self._writer.flush()
        except (OSError, ValueError) as exc:
            raise FrameWriteError(f"cannot write message: {exc}") from exc


class Decoder:
    """Read one JSON message per line."""

    def __init__(self, reader: IO[bytes]):
        self._reader = reader

    def _readline(self) -> bytes:
        try:
            line = self._reader.readline()
        except ValueError as exc:
            # readline on a closed file object
            raise StreamClosedError(f"cannot read message: {exc}") from exc
        except OSError as exc:
            raise FramingError(f"cannot read message: {exc}") from exc
        if not line:
            raise StreamClosedError("stream closed before a message was received")
        return line

    def decode(self, model: type[ModelT] | None = None) -> ModelT | Any:
        """Read the next message, validated against ``model`` when given."""

        line = self._readline()
        while not line.strip():
            line = self._readline()
        try:
            payload = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise FrameDecodeError(f"invalid JSON message: {exc}") from exc
        if model is None:
            return payload
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise FrameDecodeError(f"invalid {model.__name__}: {exc}") from exc

    def decode_raw(self) -> str:
        """Read the next line without interpreting it as JSON."""

        line = self._readline()
        text = line.decode("utf-8", errors="replace").rstrip("\r\n")
        logger.debug("Read raw line (%d bytes)", len(line))
        return text
