""" The consumer side of the wire format: reassemble the message sequence
    published by a :class:`plotpipe.Session` into :class:`Batch` instances.
    What a consumer does with a batch (rendering, evaluating the command
    text) is up to the consumer; this module only decodes.

    The :func:`main` entry point (``python -m plotpipe``) prints a summary
    of every batch received, which is handy for checking a producer without
    a renderer.
"""

import logging

import numpy

from . import config
from .errors import ProtocolError
from .protocol import fields
from .protocol import header
from .transport import TransportTimeout
from .transport.zmq import publish

logger = logging.getLogger(__name__)

_data_prefix = (fields.DATA + fields.SEPARATOR).encode(fields.ENCODING)


class Batch:
    """ One complete batch: the named arrays, in the order they were sent,
        and the command text that accompanied them.

        :ivar data: A dictionary mapping names to numpy arrays.
        :ivar commands: The command text, as a string.
    """

    def __init__(self, data, commands):
        self.data = data
        self.commands = commands


    def __repr__(self):
        return 'Batch(data=%r, commands=%r)' % (sorted(self.data), self.commands)


# end of class Batch



def decode(descriptor, dims, payload):
    """ Reconstruct a numpy array from a payload, given the type descriptor
        and shape parsed from its header. The array is row-major and shares
        memory with *payload*.
    """

    count = 1
    for dim in dims:
        count *= dim

    expected = count * descriptor.width

    if len(payload) != expected:
        raise ProtocolError('payload is %d bytes, header promises %d' % (len(payload), expected))

    if count == 0:
        return numpy.empty(dims, dtype=descriptor.tag)

    array = numpy.frombuffer(payload, dtype=descriptor.tag, count=count)
    return array.reshape(dims)



class Receiver:
    """ Decode batches arriving on a subscriber. The *source* is either an
        endpoint address, in which case a
        :class:`plotpipe.transport.zmq.publish.Client` is created for it, or
        any object with a compatible ``recv(timeout)`` method.
    """

    def __init__(self, source):

        if isinstance(source, str):
            source = publish.Client(source)

        self.source = source
        self.finished = False


    def __iter__(self):
        while True:
            batch = self.recv_batch()
            if batch is None:
                break
            yield batch


    def _recv(self, timeout):

        message = self.source.recv(timeout)

        if message is None:
            raise TransportTimeout('no message received in %s seconds' % (timeout,))

        return message


    def recv_batch(self, timeout=None):
        """ Block until a complete batch arrives and return it as a
            :class:`Batch`. Returns None once the producer has sent its
            ``exit`` message. The *timeout*, in seconds, applies to each
            message individually; :class:`plotpipe.transport.TransportTimeout`
            is raised if it expires.
        """

        if self.finished:
            return None

        data = dict()

        while True:
            message = self._recv(timeout)

            if message == fields.EXIT:
                if data:
                    logger.warning("exit received mid-batch, discarding %d buffers", len(data))
                self.finished = True
                return None

            if message.startswith(_data_prefix):
                name, descriptor, count, dims = header.parse_header(message)
                payload = self._recv(timeout)
                data[name] = decode(descriptor, dims, payload)
                continue

            # Anything else is the command text, which must be followed
            # immediately by the end of the batch.

            commands = message.decode('utf-8')

            final = self._recv(timeout)
            if final != fields.FINALIZE:
                raise ProtocolError('expected ' + repr(fields.FINALIZE) + ' after command text, got ' + repr(final[:32]))

            logger.debug("received batch with %d buffers", len(data))
            return Batch(data, commands)


    def close(self):
        self.source.close()


# end of class Receiver



def main():
    """ Print a summary of each batch published on an endpoint. """
    import argparse

    parser = argparse.ArgumentParser(
        description='Print the batches published by a plotpipe producer'
    )
    parser.add_argument(
        'address',
        nargs='?',
        help='Endpoint to connect to (default: from the plotpipe configuration)',
        default=None
    )
    parser.add_argument(
        '-v', '--verbose',
        help='Enable debug logging',
        action='store_true'
    )

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    address = args.address
    if address is None:
        address = config.load().address

    # The producer binds; a tcp://*:port bind address is reached via localhost.
    address = address.replace('://*:', '://127.0.0.1:')

    receiver = Receiver(address)
    logger.info("listening on %s", address)

    try:
        for number, batch in enumerate(receiver, 1):
            print(f"batch {number}:")
            for name, array in batch.data.items():
                print(f"  {name}: {array.dtype} {array.shape}")
            for line in batch.commands.splitlines():
                print(f"  > {line}")
    except KeyboardInterrupt:
        pass
    finally:
        receiver.close()

    print("producer exited")


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
