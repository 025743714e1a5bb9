""" The producer side of plotpipe: a :class:`Session` accumulates command
    text, sends named buffers, and frames each batch for the consumer.
"""

import atexit
import logging
import time

from . import config
from . import protocol
from . import text
from .consumer import Consumer
from .protocol import fields
from .transport import TransportError
from .transport.zmq import publish

logger = logging.getLogger(__name__)


class Session:
    """ A :class:`Session` owns the outbound *transport* and the command
        text accumulated for the current batch. A batch on the wire is a
        header and payload message for each named buffer, in the order
        given, followed by one message with the command text, followed by
        the ``finalize`` sentinel; the consumer acts on a batch once the
        sentinel arrives.

        Payloads are sent without copying: each payload message borrows the
        storage of the caller's container, and the send does not return
        until the transport has released it.

        A :class:`Session` holds mutable state with no locking; if several
        threads share one, the caller must serialize all calls.

        :ivar transport: A :class:`plotpipe.transport.Transport` instance.
        :ivar consumer: The :class:`plotpipe.Consumer` launched on behalf of
                        this session, if any.
    """

    def __init__(self, transport, consumer=None):

        self.transport = transport
        self.consumer = consumer
        self.commands = list()
        self.closed = False

        atexit.register(self.close)


    @classmethod
    def open(cls, address=None, consumer=None, connect_delay=None, startup_delay=None, path=None):
        """ Bind a ZeroMQ PUB socket and, if a consumer command is configured,
            launch the consumer with the bound endpoint as its final argument.
            Arguments that are None fall back to :func:`plotpipe.config.load`;
            *path* names an alternate configuration file.
        """

        settings = config.load(path, address=address, consumer=consumer,
                        connect_delay=connect_delay, startup_delay=startup_delay)

        transport = publish.Server(settings.address)
        transport.open()

        # Give the socket a moment before anyone connects to it.
        time.sleep(settings.connect_delay)

        if settings.consumer is None:
            launched = None
        else:
            launched = Consumer(settings.consumer, transport.endpoint, settings.startup_delay)
            try:
                launched.start()
            except Exception:
                transport.close()
                raise

        return cls(transport, launched)


    def __enter__(self):
        return self


    def __exit__(self, *exception):
        self.close()


    def __lshift__(self, line):
        self.push_text(line)
        return self


    def begin_batch(self):
        """ Start a new batch, discarding any command text accumulated
            since the last flush.
        """

        if self.commands:
            logger.debug("discarding %d unflushed command fragments", len(self.commands))

        self.commands = list()


    def push_text(self, line):
        """ Append *line* to the command text, followed by a newline.
        """

        self.commands.append(str(line) + '\n')


    def push_raw(self, block):
        """ Append a multi-line block of command text, after stripping the
            indentation it was written with; see :func:`plotpipe.text.dedent`.
            No newline is added beyond those already in *block*.
        """

        self.commands.append(text.dedent(block))


    def command_text(self):
        """ Return the command text accumulated so far in this batch.
        """

        return ''.join(self.commands)


    def send_named_buffers(self, pairs):
        """ Send a header message and a payload message for each
            (name, container) pair in *pairs*, in order. *pairs* may also be
            a dictionary mapping names to containers.

            Every pair is validated before anything is sent: an unsupported
            element type, an unusable name, or a container without
            contiguous storage raises :class:`plotpipe.errors.EncodingError`
            and leaves the wire untouched.
        """

        try:
            pairs = pairs.items()
        except AttributeError:
            pass

        encoded = list()
        for name,value in pairs:
            encoded.append(protocol.encode(name, value))

        for header,payload in encoded:
            self.transport.send(header)
            self.transport.send(payload, copy=False)

        logger.debug("sent %d named buffers", len(encoded))


    def flush_batch(self):
        """ Send the accumulated command text as one message, then the
            ``finalize`` sentinel, then clear the command text. If a send
            fails the command text is retained.
        """

        commands = self.command_text()

        self.transport.send(commands.encode('utf-8'))
        self.transport.send(fields.FINALIZE)

        self.commands = list()
        logger.debug("flushed batch with %d characters of command text", len(commands))


    def send(self, *pairs, **named):
        """ Send one complete batch: the named buffers, given either as
            (name, container) tuples or as keyword arguments, followed by
            the accumulated command text and the ``finalize`` sentinel.
        """

        pairs = list(pairs)
        pairs.extend(named.items())

        self.send_named_buffers(pairs)
        self.flush_batch()


    def close(self):
        """ Send the ``exit`` sentinel, instructing the consumer to shut
            down, and close the transport. Only the first call has any
            effect. Delivery is best-effort: a transport failure here is
            logged, not raised.
        """

        if self.closed:
            return

        self.closed = True
        atexit.unregister(self.close)

        try:
            self.transport.send(fields.EXIT)
        except TransportError:
            logger.warning("could not send the exit message", exc_info=True)
        finally:
            self.transport.close()

        logger.info("session closed")


# end of class Session


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
