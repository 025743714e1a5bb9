""" Adapters presenting heterogeneous containers through one interface:
    the number of elements, the shape, the element type, and a read-only
    view of the raw bytes. The view always borrows the caller's storage;
    nothing here copies element data.

    Storage is interpreted in row-major (C) order. The wire format carries
    no strides, so storage that is not C-contiguous is rejected rather than
    silently copied into a contiguous buffer.

    Supporting a new kind of container means adding a :class:`Container`
    subclass and teaching :func:`adapt` to select it; nothing else changes.
"""

import array

import numpy

from ..errors import ContainerError


class Container:
    """ Base class for the container adapters. Subclasses set *rank*.

        :ivar value: The wrapped container, owned by the caller.
        :ivar dtype: The element type, as accepted by
                     :func:`plotpipe.protocol.types.describe`.
    """

    rank = None

    def __init__(self, value, dims, dtype):

        if len(dims) != self.rank:
            raise ContainerError('%s expects rank %d, got shape %r' % (type(self).__name__, self.rank, tuple(dims)))

        self.value = value
        self.dims = tuple(int(dim) for dim in dims)
        self.dtype = dtype


    def element_count(self):
        count = 1
        for dim in self.dims:
            count *= dim
        return count


    def shape(self):
        return self.dims


    def raw_pointer(self):
        """ Return a read-only, byte-oriented :class:`memoryview` over the
            caller's storage. The view must not outlive the send operation
            that uses it.
        """

        value = self.value

        if isinstance(value, numpy.ndarray):
            flat = value.reshape(-1)
            flat = flat.view(numpy.uint8)
            view = memoryview(flat)
        else:
            view = memoryview(value)
            try:
                view = view.cast('B')
            except TypeError as error:
                raise ContainerError('cannot view storage as bytes: ' + str(error)) from error

        return view.toreadonly()


# end of class Container



class Scalar(Container):
    """ A single element, shape ``()``. """

    rank = 0


class Vector(Container):
    """ A flat sequence of N elements, shape ``(N,)``. """

    rank = 1


class Matrix(Container):
    """ A two-dimensional matrix of R rows and C columns, shape ``(R,C)``,
        stored row by row.
    """

    rank = 2


by_rank = {
    Scalar.rank: Scalar,
    Vector.rank: Vector,
    Matrix.rank: Matrix,
}



def adapt(value):
    """ Return the :class:`Container` adapter appropriate for *value*.
        Accepted values are numpy arrays of rank 0, 1, or 2, numpy scalars,
        and anything exposing a contiguous buffer: :class:`array.array`,
        :class:`bytes`, :class:`bytearray`, and :class:`memoryview`.
    """

    if isinstance(value, Container):
        return value

    if isinstance(value, numpy.generic):
        value = numpy.asarray(value)

    if isinstance(value, numpy.ndarray):
        if value.flags.c_contiguous:
            pass
        else:
            raise ContainerError('array storage must be C-contiguous (row-major); use numpy.ascontiguousarray()')

        dims = value.shape
        dtype = value.dtype

    elif isinstance(value, (array.array, bytes, bytearray, memoryview)):
        view = memoryview(value)

        if view.c_contiguous:
            pass
        else:
            raise ContainerError('buffer storage must be C-contiguous (row-major)')

        dims = view.shape
        dtype = view.format

    else:
        raise ContainerError('no contiguous storage to send for ' + type(value).__name__ + '; convert it with numpy.asarray()')

    try:
        adapter = by_rank[len(dims)]
    except KeyError:
        raise ContainerError('unsupported rank %d, shape %r' % (len(dims), tuple(dims)))

    return adapter(value, dims, dtype)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
