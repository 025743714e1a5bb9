"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`plotpipe.protocol` so the protocol remains
transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """No message arrived within the requested time."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class TransportPortError(TransportError):
    """The endpoint could not be bound or connected."""


class Transport(ABC):
    """Minimal contract for a fire-and-forget, one-to-many transport."""

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying connection/socket."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    @abstractmethod
    def send(self, frame, copy: bool = True) -> None:
        """Send one discrete message to all current subscribers.

        *frame* is bytes or any read-only buffer. With ``copy=False`` the
        transport borrows the caller's memory, and must not return until
        it no longer needs it.
        """

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
