"""Reference-counted string arrays with a length-prefixed text format."""
from __future__ import annotations

from strarray.core import (
    StringArray,
    append_file,
    compare_lexical,
    concatenate,
    convert_words_to_lines,
    from_lines,
    from_words,
    iter_streams,
    paragraph_words,
    read_all,
    read_file,
    read_stream,
    serialize,
    sort_array,
    split_string,
    write_file,
    write_stream,
)
from strarray.errors import (
    AllocationError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    SarrayFormatError,
    StreamError,
    StringArrayError,
)

__version__ = "0.1.0"

__all__ = [
    "AllocationError",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "SarrayFormatError",
    "StreamError",
    "StringArray",
    "StringArrayError",
    "__version__",
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
