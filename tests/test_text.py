from plotpipe.text import dedent


samples = (
    '',
    '\n',
    '   \n\t\n',
    'a\nb\n',
    '  a\n  b\n',
    '  a\n    b\n',
    '    a\n  b\n',
    '\n\n    plt.plot(x, y)\n    plt.show()\n  ',
    '\tx = 1\n\tif x:\n\t\ty = 2\n',
    '  no trailing newline',
    '  a\n\n  b\n   \n',
)


def test_simple():
    assert dedent('  a\n  b\n') == 'a\nb\n'


def test_relative_indentation():
    assert dedent('  a\n    b\n') == 'a\n  b\n'


def test_unchanged():

    assert dedent('a\n  b\n') == 'a\n  b\n'
    assert dedent('\n\na\n  b\n') == '\n\na\n  b\n'
    assert dedent('') == ''


def test_blank():

    # Nothing but whitespace: there is no reference indentation.

    for text in ('\n', '   \n\t\n', '    '):
        assert dedent(text) == text


def test_leading_blank_lines():

    fragment = '''
        plt.plot(x, y)
        plt.show()
        '''

    assert dedent(fragment) == 'plt.plot(x, y)\nplt.show()\n'


def test_short_indentation():

    # A line indented less than the first line loses only what it has,
    # never any of its content.

    assert dedent('    a\n  b\nc\n') == 'a\nb\nc\n'


def test_blank_lines_within():
    assert dedent('  a\n\n   \n  b\n') == 'a\n\n \nb\n'


def test_tabs():

    assert dedent('\tx = 1\n\tif x:\n\t\ty = 2\n') == 'x = 1\nif x:\n\ty = 2\n'

    # A tab is one character of indentation, like a space.
    assert dedent(' \ta\n  b\n') == 'a\nb\n'


def test_no_trailing_newline():
    assert dedent('  a\n  b') == 'a\nb'


def test_idempotent():

    for text in samples:
        once = dedent(text)
        assert dedent(once) == once


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
