""" Construction and parsing of buffer headers. A header is a single ASCII
    message of pipe-separated fields::

        data|<name>|<type tag>|<element count>|<shape>

    The shape is rendered the way Python renders a tuple of integers, minus
    the spaces: ``()``, ``(N,)``, or ``(R,C)``.
"""

from ..errors import InvalidNameError, ProtocolError
from . import fields
from . import types


def format_shape(dims):
    """ Render a sequence of dimension sizes as a shape string.

        >>> format_shape((5,))
        '(5,)'
        >>> format_shape((2, 3))
        '(2,3)'
    """

    dims = [str(int(dim)) for dim in dims]

    if len(dims) == 1:
        return '(' + dims[0] + ',)'

    return '(' + ','.join(dims) + ')'


def parse_shape(shape):
    """ Inverse of :func:`format_shape`: return a tuple of integers.
    """

    if shape.startswith('(') and shape.endswith(')'):
        pass
    else:
        raise ProtocolError('malformed shape: ' + repr(shape))

    inner = shape[1:-1]

    if inner == '':
        return ()

    dims = inner.split(',')

    # A rank 1 shape has a trailing comma, and nothing else does.

    if dims[-1] == '':
        dims.pop()
        if len(dims) != 1:
            raise ProtocolError('malformed shape: ' + repr(shape))
    elif len(dims) == 1:
        raise ProtocolError('rank 1 shape is missing its trailing comma: ' + repr(shape))

    try:
        dims = tuple(int(dim) for dim in dims)
    except ValueError:
        raise ProtocolError('malformed shape: ' + repr(shape))

    for dim in dims:
        if dim < 0:
            raise ProtocolError('negative dimension in shape: ' + repr(shape))

    return dims


def validate_name(name):
    """ Raise :class:`InvalidNameError` if *name* cannot be carried in a
        header: it must be a non-empty ASCII string without the field
        separator. :func:`build_header` does not check; callers putting
        headers on the wire must call this first.
    """

    if isinstance(name, str):
        pass
    else:
        raise InvalidNameError('buffer name must be a string, not ' + type(name).__name__)

    if name == '':
        raise InvalidNameError('buffer name cannot be empty')

    if fields.SEPARATOR in name:
        raise InvalidNameError('buffer name cannot contain ' + repr(fields.SEPARATOR) + ': ' + repr(name))

    try:
        name.encode(fields.ENCODING)
    except UnicodeEncodeError:
        raise InvalidNameError('buffer name must be ASCII: ' + repr(name))


def build_header(name, descriptor, count, shape):
    """ Return the header string for one buffer. *descriptor* is a
        :class:`plotpipe.protocol.types.TypeDescriptor` (or a bare tag),
        *count* the total number of elements, and *shape* either a shape
        string or a sequence of dimension sizes.

        No validation is performed; *name* must not contain ``|``.
    """

    try:
        tag = descriptor.tag
    except AttributeError:
        tag = descriptor

    if isinstance(shape, str):
        pass
    else:
        shape = format_shape(shape)

    parts = (fields.DATA, name, tag, str(count), shape)
    return fields.SEPARATOR.join(parts)


def parse_header(header):
    """ Inverse of :func:`build_header`: return a tuple of the name, the
        :class:`plotpipe.protocol.types.TypeDescriptor`, the element count,
        and the shape as a tuple of integers. *header* may be bytes or str.
    """

    try:
        header = header.decode(fields.ENCODING)
    except AttributeError:
        pass
    except UnicodeDecodeError:
        raise ProtocolError('header is not ASCII: ' + repr(header))

    parts = header.split(fields.SEPARATOR)

    if len(parts) != 5 or parts[0] != fields.DATA:
        raise ProtocolError('malformed header: ' + repr(header))

    tag, name, count, shape = parts[2], parts[1], parts[3], parts[4]

    try:
        descriptor = types.table[tag]
    except KeyError:
        raise ProtocolError('unknown type tag ' + repr(tag) + ' in header: ' + repr(header))

    try:
        count = int(count)
    except ValueError:
        raise ProtocolError('malformed element count in header: ' + repr(header))

    dims = parse_shape(shape)

    product = 1
    for dim in dims:
        product *= dim

    if product != count:
        raise ProtocolError('element count %d does not match shape %s' % (count, shape))

    return name, descriptor, count, dims


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
