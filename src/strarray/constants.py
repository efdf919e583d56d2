from __future__ import annotations

from pathlib import Path

# Serialized array format version. Readers reject any other value.
SARRAY_VERSION = 1

# Slot count used when an array is created with no (or a non-positive) size hint.
DEFAULT_CAPACITY = 50

COPY_MODE_INSERT = "insert"
COPY_MODE_COPY = "copy"
COPY_MODE_NOCOPY = "nocopy"

JOIN_NONE = "none"
JOIN_NEWLINE = "newline"
JOIN_SPACE = "space"
JOIN_SEPARATORS = {
    JOIN_NONE: "",
    JOIN_NEWLINE: "\n",
    JOIN_SPACE: " ",
}

SORT_INCREASING = "increasing"
SORT_DECREASING = "decreasing"
SORT_ORDERS = (SORT_INCREASING, SORT_DECREASING)

WORD_SEPARATORS = " \t\n"
LINE_SEPARATOR = "\n"

# Encoding used for element bytes on disk; surrogateescape keeps every byte value.
STRING_ENCODING = "utf-8"
STRING_ERRORS = "surrogateescape"

CONFIG_FILENAME = Path(".strarray.yaml")
CONFIG_ENV_VAR = "STRARRAY_CONFIG"
DEFAULT_LINE_WIDTH = 72

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERNAL_ERROR = 2
