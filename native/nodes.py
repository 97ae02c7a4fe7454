"""Tree representation for ASTs returned by native drivers.

Native drivers emit their AST as plain JSON. ``to_node`` turns the decoded JSON
value into a tree of ``Object`` and ``Array`` containers with scalar leaves
(``str``, ``int``, ``float``, ``bool`` and ``None``).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

__all__ = ["Array", "Node", "NodeConversionError", "Object", "to_node"]


class NodeConversionError(ValueError):
    """Raised when a JSON value cannot be represented as a tree node."""


class Object(dict):
    """Mapping node with string keys."""

    def __repr__(self) -> str:
        return f"Object({dict.__repr__(self)})"


class Array(list):
    """Ordered sequence of nodes."""

    def __repr__(self) -> str:
        return f"Array({list.__repr__(self)})"


Node = Union[Object, Array, str, int, float, bool, None]

_SCALARS = (str, int, float, bool)


def to_node(value: Any) -> Node:
    """Convert a decoded JSON value into a tree node."""

    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        obj = Object()
        for key, child in value.items():
            if not isinstance(key, str):
                raise NodeConversionError(f"object keys must be strings, got {type(key).__name__}")
            obj[key] = to_node(child)
        return obj
    if isinstance(value, (list, tuple)):
        return Array(to_node(child) for child in value)
    raise NodeConversionError(f"unsupported type: {type(value).__name__}")
