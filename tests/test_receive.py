import numpy
import pytest

import plotpipe
from plotpipe.protocol import fields


def test_decode_batch(session, recorder):

    x = numpy.linspace(-1, 1, 11, dtype=numpy.float32)
    image = numpy.arange(12, dtype=numpy.uint16).reshape(3, 4)
    letters = numpy.frombuffer(b'abc', dtype='S1')

    session.push_text('imshow(image)')
    session.send(('x', x), ('image', image), ('letters', letters))

    receiver = plotpipe.Receiver(recorder)
    batch = receiver.recv_batch()

    assert list(batch.data) == ['x', 'image', 'letters']
    assert batch.commands == 'imshow(image)\n'

    assert batch.data['x'].dtype == numpy.float32
    assert numpy.array_equal(batch.data['x'], x)

    assert batch.data['image'].shape == (3, 4)
    assert numpy.array_equal(batch.data['image'], image)

    assert batch.data['letters'].tobytes() == b'abc'


def test_exit(session, recorder):

    session.send(x=numpy.zeros(2))
    session.send(y=numpy.ones(3))
    session.close()

    receiver = plotpipe.Receiver(recorder)
    batches = list(receiver)

    assert len(batches) == 2
    assert list(batches[0].data) == ['x']
    assert list(batches[1].data) == ['y']

    assert receiver.recv_batch() is None


def test_empty_containers(session, recorder):

    session.send(nothing=numpy.zeros((0, 3)))

    batch = plotpipe.Receiver(recorder).recv_batch()
    assert batch.data['nothing'].shape == (0, 3)


def test_timeout(recorder):

    receiver = plotpipe.Receiver(recorder)

    with pytest.raises(plotpipe.transport.TransportTimeout):
        receiver.recv_batch(timeout=0)


def test_truncated_payload(recorder):

    recorder.messages.extend((b'data|x|d|2|(2,)', b'\x00' * 15, b'', fields.FINALIZE))

    with pytest.raises(plotpipe.errors.ProtocolError):
        plotpipe.Receiver(recorder).recv_batch()


def test_missing_finalize(recorder):

    recorder.messages.extend((b'plot()\n', b'plot()\n'))

    with pytest.raises(plotpipe.errors.ProtocolError):
        plotpipe.Receiver(recorder).recv_batch()


def test_exit_mid_batch(recorder):

    recorder.messages.extend((b'data|x|B|1|(1,)', b'\x07', fields.EXIT))
    assert plotpipe.Receiver(recorder).recv_batch() is None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
