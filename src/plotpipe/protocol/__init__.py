""" The plotpipe wire protocol: the type table, the container adapters,
    and the buffer header format. The protocol layer does not depend on any
    transport implementation.

    A batch on the wire is a sequence of discrete messages::

        data|<name>|<tag>|<count>|<shape>    one header per buffer,
        <count * width bytes>                immediately followed by its payload
        ...
        <command text>                       one message
        finalize                             end of the batch

    and the literal ``exit`` is sent once, when the producer shuts down.
"""

from ..errors import EncodingError
from . import fields
from . import types
from . import containers
from . import header

from .types import TypeDescriptor, describe, require
from .containers import adapt
from .header import build_header, format_shape, parse_header, validate_name


def encode(name, value):
    """ Validate and encode one named buffer. Returns a tuple of the header
        bytes and a read-only view of the payload; the view borrows the
        storage of *value*.
    """

    validate_name(name)

    container = adapt(value)
    descriptor = require(container.dtype)
    count = container.element_count()

    payload = container.raw_pointer()

    if payload.nbytes != count * descriptor.width:
        raise EncodingError('payload is %d bytes, expected %d' % (payload.nbytes, count * descriptor.width))

    built = build_header(name, descriptor, count, container.shape())
    return built.encode(fields.ENCODING), payload


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
