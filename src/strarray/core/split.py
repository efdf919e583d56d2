"""Build string arrays from raw text."""
from __future__ import annotations

import re

from strarray.constants import LINE_SEPARATOR, WORD_SEPARATORS
from strarray.core.array import StringArray
from strarray.errors import InvalidArgumentError


def _require_text(operation: str, text: object, name: str = "text") -> str:
    if text is None:
        raise InvalidArgumentError(operation, f"{name} not defined")
    if not isinstance(text, str):
        raise InvalidArgumentError(operation, f"{name} must be a str, got {type(text).__name__}")
    return text


def split_string(array: StringArray | None, text: str, separators: str) -> None:
    """Append each non-empty token of ``text``, split on any char in ``separators``."""
    if array is None:
        raise InvalidArgumentError("split_string", "array not defined")
    _require_text("split_string", text)
    _require_text("split_string", separators, "separators")

    if not separators:
        tokens = [text] if text else []
    else:
        pattern = f"[{re.escape(separators)}]+"
        tokens = [token for token in re.split(pattern, text) if token]
    for token in tokens:
        array.append_owned(token)


def count_words(text: str) -> int:
    """Number of maximal runs of non-separator characters in ``text``."""
    words = 0
    in_word = False
    for char in text:
        if char in WORD_SEPARATORS:
            in_word = False
        elif not in_word:
            in_word = True
            words += 1
    return words


def from_words(text: str) -> StringArray:
    """One element per run of characters between spaces, tabs and newlines."""
    _require_text("from_words", text)
    array = StringArray(count_words(text))
    split_string(array, text, WORD_SEPARATORS)
    return array


def from_lines(text: str, keep_blank_lines: bool = True) -> StringArray:
    """One element per ``\\n``-terminated line.

    With ``keep_blank_lines`` every line, empty ones included, becomes an
    element, as does any text after the last newline.  Otherwise empty lines
    are dropped.
    """
    _require_text("from_lines", text)
    # Only a size hint: an unterminated last line can add one more element.
    array = StringArray(text.count(LINE_SEPARATOR) + 1)
    if not keep_blank_lines:
        split_string(array, text, LINE_SEPARATOR)
        return array

    lines = text.split(LINE_SEPARATOR)
    if lines[-1] == "":
        # Text ends with a newline (or is empty): no unterminated final line.
        lines.pop()
    for line in lines:
        array.append_owned(line)
    return array


__all__ = [
    "count_words",
    "from_lines",
    "from_words",
    "split_string",
]
