""" The type table maps scalar element types to the one-character codes
    used by the :mod:`struct` module, along with the width of one element in
    bytes. A consumer can decode any payload with nothing more than the tag
    from its header: ``numpy.frombuffer(payload, dtype=tag)`` or
    ``struct.unpack('%d%s' % (count, tag), payload)``.

    Widths are native widths, as the payload is the caller's own storage
    put on the wire without conversion.
"""

from typing import NamedTuple

import numpy

from ..errors import UnsupportedTypeError


class TypeDescriptor(NamedTuple):
    tag: str
    width: int


UNSUPPORTED = TypeDescriptor('0', 0)

# Signed/unsigned 8, 16, 32 and 64-bit integers, followed by binary32 and
# binary64 floats. 'c' is a single character, carried as one byte.

tags = 'cbBhHiIlLqQfd'

table = dict()

for tag in tags:
    table[tag] = TypeDescriptor(tag, numpy.dtype(tag).itemsize)

del tag


def _tag(dtype):
    """ Return the type tag for a numpy dtype, or None if the dtype is not
        one of the supported scalar types.
    """

    if dtype.isnative:
        pass
    else:
        return None

    # numpy reports one-byte strings ('S1', also spelled 'c') with the
    # generic string character 'S'.

    if dtype.kind == 'S':
        if dtype.itemsize == 1:
            return 'c'
        return None

    if dtype.char in table:
        return dtype.char

    # Aliases such as intp carry their own type character; match them
    # against the canonical entries by equivalence.

    for tag in table:
        if tag == 'c':
            continue
        if numpy.dtype(tag) == dtype:
            return tag

    return None


def describe(dtype):
    """ Return the :class:`TypeDescriptor` for the element type *dtype*,
        which can be anything :func:`numpy.dtype` accepts: a numpy dtype,
        a numpy scalar type, or a :mod:`struct`/:mod:`array` format
        character. Unsupported types return :data:`UNSUPPORTED` rather
        than raising; callers that intend to put the result on the wire
        should use :func:`require` instead.
    """

    if dtype is None:
        return UNSUPPORTED

    try:
        dtype = numpy.dtype(dtype)
    except (TypeError, ValueError):
        return UNSUPPORTED

    tag = _tag(dtype)

    if tag is None:
        return UNSUPPORTED

    return table[tag]


def require(dtype):
    """ Same as :func:`describe`, but raise :class:`UnsupportedTypeError`
        instead of returning :data:`UNSUPPORTED`.
    """

    descriptor = describe(dtype)

    if descriptor == UNSUPPORTED:
        raise UnsupportedTypeError('unsupported element type: ' + repr(dtype))

    return descriptor


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
