import pytest

import plotpipe
from plotpipe.protocol import header
from plotpipe.protocol import types


def test_format_shape():

    assert header.format_shape(()) == '()'
    assert header.format_shape((5,)) == '(5,)'
    assert header.format_shape([0]) == '(0,)'
    assert header.format_shape((2, 3)) == '(2,3)'


def test_build_header():

    for tag, descriptor in types.table.items():
        for count, shape in ((0, '(0,)'), (12, '(12,)'), (6, '(2,3)')):
            built = header.build_header('x', descriptor, count, shape)
            assert built == 'data|x|' + tag + '|' + str(count) + '|' + shape


def test_build_header_dims():

    built = header.build_header('matrix', types.table['d'], 6, (2, 3))
    assert built == 'data|matrix|d|6|(2,3)'

    built = header.build_header('letters', 'c', 4, (4,))
    assert built == 'data|letters|c|4|(4,)'


def test_build_header_does_not_validate():

    # Checking the name is the caller's job; see validate_name().
    built = header.build_header('a|b', types.UNSUPPORTED, 1, '(1,)')
    assert built == 'data|a|b|0|1|(1,)'


def test_validate_name():

    header.validate_name('x')
    header.validate_name('some_array.with-punctuation')

    for bad in ('', 'a|b', '|', 'café', None, 42):
        with pytest.raises(plotpipe.errors.InvalidNameError):
            header.validate_name(bad)


def test_parse_header():

    name, descriptor, count, dims = header.parse_header(b'data|x|f|6|(2,3)')
    assert name == 'x'
    assert descriptor == types.table['f']
    assert count == 6
    assert dims == (2, 3)

    name, descriptor, count, dims = header.parse_header('data|y|q|4|(4,)')
    assert name == 'y'
    assert descriptor.tag == 'q'
    assert dims == (4,)


def test_parse_header_rejects():

    malformed = (
        b'data|x|f|6',
        b'info|x|f|6|(6,)',
        b'data|x|0|1|(1,)',
        b'data|x|f|six|(6,)',
        b'data|x|f|5|(2,3)',
        b'data|x|f|6|(6)',
        b'data|x|f|6|6,',
        b'data|x|f|6|(,6,)',
        b'data|x|f|6|(2,3,)',
    )

    for bad in malformed:
        with pytest.raises(plotpipe.errors.ProtocolError):
            header.parse_header(bad)


def test_parse_shape():

    assert header.parse_shape('()') == ()
    assert header.parse_shape('(7,)') == (7,)
    assert header.parse_shape('(3,4)') == (3, 4)

    with pytest.raises(plotpipe.errors.ProtocolError):
        header.parse_shape('(-1,)')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
