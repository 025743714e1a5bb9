"""ZeroMQ publish/subscribe transport."""

from __future__ import annotations

import atexit
import logging
from typing import Optional

import zmq

from ..base import Transport, TransportConnectionError, TransportError, TransportPortError

logger = logging.getLogger(__name__)

zmq_context = zmq.Context()


class Server(Transport):
    """PUB server.

    The producer side binds; any number of consumers connect and receive
    every message sent after their subscription took effect. Each call to
    :func:`send` is one discrete ZeroMQ message, not a multipart sequence.

    *linger* is how long, in milliseconds, unsent messages are kept after
    :func:`close`; it gives the final shutdown message a chance to leave.

    Borrowed (``copy=False``) payloads are held until libzmq releases them.
    Over tcp that happens once the bytes are written to the socket; over
    inproc the message itself is handed to the subscriber, so the send
    completes only when the subscriber has received it.
    """

    def __init__(self, address: str, linger: int = 1000):
        self.address = address
        self.linger = int(linger)
        self.endpoint: Optional[str] = None
        self.socket = None

    def open(self) -> None:
        if self.socket is not None:
            return

        socket = zmq_context.socket(zmq.PUB)
        socket.setsockopt(zmq.LINGER, self.linger)

        try:
            socket.bind(self.address)
        except zmq.ZMQError as exc:
            socket.close(linger=0)
            raise TransportPortError(
                f"cannot bind {self.address}: {exc}"
            ) from exc

        # Wildcard addresses (tcp://127.0.0.1:*) resolve to a real port.
        self.endpoint = socket.getsockopt(zmq.LAST_ENDPOINT).decode()
        self.socket = socket
        logger.info("publishing on %s", self.endpoint)

    def close(self) -> None:
        if self.socket is None:
            return

        self.socket.close()
        self.socket = None
        logger.debug("closed %s", self.endpoint)

    @property
    def is_open(self) -> bool:
        return self.socket is not None

    def send(self, frame, copy: bool = True) -> None:
        if self.socket is None:
            raise TransportConnectionError("transport is not open")

        try:
            if copy:
                self.socket.send(frame)
            else:
                # The tracker reports when libzmq has released the borrowed
                # buffer; only then may the caller touch it again.
                tracker = self.socket.send(frame, copy=False, track=True)
                if tracker is not None:
                    tracker.wait()
        except zmq.ZMQError as exc:
            raise TransportError(f"send failed on {self.endpoint}: {exc}") from exc


class Client:
    """SUB client, subscribed to everything."""

    def __init__(self, address: str):
        self.address = address

        self.socket = zmq_context.socket(zmq.SUB)
        self.socket.setsockopt(zmq.LINGER, 0)

        try:
            self.socket.connect(address)
        except zmq.ZMQError as exc:
            self.socket.close()
            raise TransportConnectionError(
                f"cannot connect to {address}: {exc}"
            ) from exc

        self.socket.setsockopt(zmq.SUBSCRIBE, b"")
        self._poll_flush()

    def _poll_flush(self, timeout: float = 0.01) -> None:
        """Poll the socket briefly to help the subscription settle before
        any messages are expected. Not deterministic, but observed to avoid
        missing the first messages on a fresh connection.
        """

        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN | zmq.POLLOUT)
        poller.poll(timeout * 1000)

    def recv(self, timeout: Optional[float] = None) -> Optional[bytes]:
        """Return the next message, or None if *timeout* seconds pass first.
        A *timeout* of None blocks indefinitely.
        """

        if timeout is not None:
            if self.socket.poll(timeout * 1000, zmq.POLLIN) == 0:
                return None

        return self.socket.recv()

    def close(self) -> None:
        self.socket.close()


def _cleanup() -> None:
    try:
        zmq_context.destroy()
    except zmq.ZMQError:
        logger.exception("error terminating the ZeroMQ context")


atexit.register(_cleanup)
