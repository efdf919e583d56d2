"""Re-typeset a sequence of words into lines of bounded width.

A zero-length word is a paragraph separator: it ends the current line and
adds an empty line.  Joining the output with newlines turns those empty
lines into the visible paragraph break.

A word longer than the line width is written on a line of its own rather
than split.  Long "words" in text are usually URLs or identifiers that
should stay intact; the viewer can wrap them if it must.
"""
from __future__ import annotations

from strarray.constants import JOIN_SPACE
from strarray.core.array import StringArray
from strarray.core.split import from_lines, from_words
from strarray.errors import InvalidArgumentError


def convert_words_to_lines(words: StringArray | None, line_size: int) -> StringArray:
    """Pack ``words`` into lines of at most ``line_size`` characters.

    Each word counts with one trailing space, and packed lines keep that
    trailing space: ``["aa", "bb", "cc"]`` with ``line_size=6`` gives
    ``["aa bb ", "cc "]``.
    """
    if words is None:
        raise InvalidArgumentError("convert_words_to_lines", "words array not defined")
    if not isinstance(line_size, int) or isinstance(line_size, bool):
        raise InvalidArgumentError("convert_words_to_lines", "line_size must be an int")

    lines = StringArray()
    current = StringArray()
    total = 0
    for word in words:
        length = len(word)
        if length == 0:
            if total > 0:
                lines.append_owned(current.to_string(JOIN_SPACE))
            lines.append_owned("")
            current.clear()
            total = 0
        elif total == 0 and length + 1 > line_size:
            lines.append_copy(word)
        elif total + length + 1 > line_size:
            lines.append_owned(current.to_string(JOIN_SPACE))
            current.clear()
            current.append_copy(word)
            total = length + 1
        else:
            current.append_copy(word)
            total += length + 1

    if total > 0:
        lines.append_owned(current.to_string(JOIN_SPACE))
    current.destroy()
    return lines


def paragraph_words(text: str) -> StringArray:
    """Words of ``text`` with one empty word standing for each blank line."""
    words = StringArray()
    for line in from_lines(text, keep_blank_lines=True):
        line_words = from_words(line)
        if line_words.count == 0:
            words.append_owned("")
        for word in line_words:
            words.append_owned(word)
        line_words.destroy()
    return words


__all__ = ["convert_words_to_lines", "paragraph_words"]
