"""strarray core: the string array container and the algorithms over it.

Splitting, joining, reflow, sorting and the serialized format live here.  It
has **no** dependency on typer, rich or yaml.
"""
from __future__ import annotations

from strarray.core.array import StringArray, concatenate
from strarray.core.io import (
    append_file,
    iter_streams,
    read_all,
    read_file,
    read_stream,
    serialize,
    write_file,
    write_stream,
)
from strarray.core.reflow import convert_words_to_lines, paragraph_words
from strarray.core.sort import compare_lexical, sort_array
from strarray.core.split import from_lines, from_words, split_string

__all__ = [
    "StringArray",
    "append_file",
    "compare_lexical",
    "concatenate",
    "convert_words_to_lines",
    "from_lines",
    "from_words",
    "iter_streams",
    "paragraph_words",
    "read_all",
    "read_file",
    "read_stream",
    "serialize",
    "sort_array",
    "split_string",
    "write_file",
    "write_stream",
]
