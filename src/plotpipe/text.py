""" Text handling for command fragments. Script fragments are often
    written inline as triple-quoted strings, indented to match the code
    around them; :func:`dedent` left-justifies such a fragment so that the
    consumer receives it as if it had been typed at the left margin.
"""

whitespace = ' \t'


def _lines(text):
    """ Split *text* into physical lines, each retaining its trailing
        newline. Only ``\\n`` is treated as a line terminator; the last line
        has no newline if the text does not end with one.
    """

    lines = text.split('\n')
    last = lines.pop()

    lines = [line + '\n' for line in lines]
    if last:
        lines.append(last)

    return lines


def _indentation(line):
    return len(line) - len(line.lstrip(whitespace))


def _blank(line):
    return line.strip(whitespace) in ('', '\n')


def dedent(text):
    """ Remove the leading indentation of the first non-blank line from
        that line and every line after it, preserving any additional
        relative indentation. Lines indented less than the first
        non-blank line only lose the whitespace they actually have.
        Blank lines ahead of the first non-blank line are dropped.

        Only spaces and tabs count as indentation, and a tab counts as a
        single character. If the first non-blank line is not indented, or
        there is no such line, *text* is returned unchanged.

        >>> dedent('  a\\n    b\\n')
        'a\\n  b\\n'
    """

    lines = _lines(text)

    for first,line in enumerate(lines):
        if _blank(line):
            continue
        reference = _indentation(line)
        break
    else:
        return text

    if reference == 0:
        return text

    dedented = list()

    for line in lines[first:]:
        strip = min(reference, _indentation(line))
        dedented.append(line[strip:])

    return ''.join(dedented)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
