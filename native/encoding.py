"""Content encodings understood by native drivers."""

from __future__ import annotations

import base64
from enum import Enum

from .errors import EncodingDecodeError, EncodingEncodeError, InvalidEncodingError


class Encoding(str, Enum):
    """Encoding of the content string sent to the native driver.

    Prefer UTF-8; use Base64 as a fallback for sources that are not valid text.
    """

    UTF8 = "utf8"
    BASE64 = "base64"

    @classmethod
    def parse(cls, raw: Encoding | str) -> Encoding:
        if isinstance(raw, Encoding):
            return raw
        try:
            return cls(str(raw).lower())
        except ValueError:
            raise InvalidEncodingError(raw) from None


def encode(text: str, encoding: Encoding | str) -> str:
    """Convert a UTF-8 string into the given wire encoding."""

    encoding = Encoding.parse(encoding)
    try:
        raw = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingEncodeError(f"content is not valid UTF-8 text: {exc}") from exc
    if encoding is Encoding.BASE64:
        return base64.b64encode(raw).decode("ascii")
    return text


def decode(text: str, encoding: Encoding | str) -> str:
    """Convert a string in the given wire encoding back into UTF-8 text."""

    encoding = Encoding.parse(encoding)
    if encoding is Encoding.BASE64:
        try:
            return base64.b64decode(text, validate=True).decode("utf-8")
        except ValueError as exc:  # binascii.Error and UnicodeDecodeError included
            raise EncodingDecodeError(f"cannot decode base64 content: {exc}") from exc
    return text
