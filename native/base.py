"""Interface shared by native driver implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod

from native.nodes import Node


class NativeDriver(ABC):
    """A process that parses source code into a tree.

    Implementations are started once, serve any number of ``parse`` calls and
    are then closed. They can be used as context managers.
    """

    @abstractmethod
    def start(self) -> None:
        """Launch the driver and prepare it to parse code."""

    @abstractmethod
    def parse(self, content: str, *, timeout: float | None = None) -> Node:
        """Parse ``content`` and return its tree.

        Raises ``PartialParseError`` when a tree was produced with errors and
        ``MultiError`` when no tree could be produced.
        """

    @abstractmethod
    def close(self) -> None:
        """Stop the driver and release its resources."""

    def __enter__(self) -> NativeDriver:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
