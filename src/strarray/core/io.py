"""Serialized string array format.

Layout, byte for byte::

    \\nSarray Version 1\\n
    Number of strings = N\\n
      0[LEN]:  DATA\\n
      ...
    \\n

``LEN`` is the encoded byte length of ``DATA``.  Readers take exactly that
many bytes, so elements may hold newlines or any other byte.  The newline
after ``DATA`` is added by the writer and stripped by the reader.
"""
from __future__ import annotations

import io
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from strarray.constants import SARRAY_VERSION, STRING_ENCODING, STRING_ERRORS
from strarray.core.array import StringArray, encode_string
from strarray.errors import AllocationError, InvalidArgumentError, SarrayFormatError, StreamError

logger = logging.getLogger(__name__)

_WHITESPACE = b" \t\n\r\v\f"
_DIGITS = b"0123456789"
_VERSION_TOKEN = b"Sarray Version"
_COUNT_TOKEN = b"Number of strings ="


def _encode(item: str) -> bytes:
    return encode_string(item, operation="serialize")


def _decode(data: bytes) -> str:
    return data.decode(STRING_ENCODING, STRING_ERRORS)


def _require_binary(operation: str, stream: object) -> None:
    if stream is None:
        raise InvalidArgumentError(operation, "stream not defined")
    if isinstance(stream, io.TextIOBase):
        raise InvalidArgumentError(operation, "stream must be opened in binary mode")


class _StreamScanner:
    """Byte reader with one byte of push-back, enough for scanf-style parsing."""

    def __init__(self, stream: BinaryIO, operation: str) -> None:
        self._stream = stream
        self._operation = operation
        self._pending = b""

    def _read(self, size: int) -> bytes:
        try:
            data = self._stream.read(size)
        except (MemoryError, OverflowError) as exc:
            raise AllocationError(self._operation, f"cannot allocate {size} bytes") from exc
        except (OSError, ValueError) as exc:
            raise StreamError(self._operation, f"stream read failed: {exc}") from exc
        return data or b""

    def read_byte(self) -> bytes:
        if self._pending:
            byte, self._pending = self._pending, b""
            return byte
        return self._read(1)

    def unread(self, byte: bytes) -> None:
        self._pending = byte

    def at_eof(self) -> bool:
        byte = self.read_byte()
        if not byte:
            return True
        self.unread(byte)
        return False

    def skip_whitespace(self) -> None:
        while True:
            byte = self.read_byte()
            if not byte:
                return
            if byte not in _WHITESPACE:
                self.unread(byte)
                return

    def expect(self, literal: bytes, what: str) -> None:
        for expected in literal:
            byte = self.read_byte()
            if not byte:
                raise StreamError(self._operation, f"stream ended while reading {what}")
            if byte[0] != expected:
                raise SarrayFormatError(
                    self._operation,
                    f"malformed {what}: expected {bytes([expected])!r}, found {byte!r}",
                )

    def read_int(self, what: str) -> int:
        self.skip_whitespace()
        digits = b""
        byte = self.read_byte()
        if byte in (b"-", b"+"):
            digits, byte = byte, self.read_byte()
        while byte and byte in _DIGITS:
            digits += byte
            byte = self.read_byte()
        if byte:
            self.unread(byte)
        elif not digits:
            raise StreamError(self._operation, f"stream ended while reading {what}")
        if not digits.lstrip(b"+-"):
            raise SarrayFormatError(self._operation, f"malformed {what}: no number found")
        return int(digits)

    def remaining(self) -> int | None:
        """Bytes left to read, or None when the stream cannot seek."""
        seekable = getattr(self._stream, "seekable", None)
        if seekable is None or not seekable():
            return None
        try:
            here = self._stream.tell()
            end = self._stream.seek(0, io.SEEK_END)
            self._stream.seek(here)
        except OSError:
            return None
        return end - here + len(self._pending)

    def read_exact(self, size: int, what: str) -> bytes:
        available = self.remaining()
        if available is not None and available < size:
            raise StreamError(
                self._operation,
                f"stream ended while reading {what}: wanted {size} bytes, {available} left",
                {"expected": size, "actual": available},
            )
        data = self._pending
        self._pending = b""
        if len(data) < size:
            data += self._read(size - len(data))
        while len(data) < size:
            chunk = self._read(size - len(data))
            if not chunk:
                raise StreamError(
                    self._operation,
                    f"stream ended while reading {what}: wanted {size} bytes, got {len(data)}",
                    {"expected": size, "actual": len(data)},
                )
            data += chunk
        return data


def _read_array(scanner: _StreamScanner) -> StringArray:
    operation = "read_stream"
    scanner.skip_whitespace()
    if scanner.at_eof():
        raise SarrayFormatError(operation, "not a string array stream: no header found")
    scanner.expect(_VERSION_TOKEN, "version header")
    version = scanner.read_int("version number")
    if version != SARRAY_VERSION:
        raise SarrayFormatError(
            operation,
            f"unsupported version {version}; expected {SARRAY_VERSION}",
            {"version": version, "expected": SARRAY_VERSION},
        )
    scanner.skip_whitespace()
    scanner.expect(_COUNT_TOKEN, "string count header")
    count = scanner.read_int("string count")
    if count < 0:
        raise SarrayFormatError(operation, f"negative string count {count}")
    scanner.expect(b"\n", "string count header")

    array = StringArray(count)
    for position in range(count):
        index = scanner.read_int("string index")
        if index != position:
            raise SarrayFormatError(
                operation,
                f"string index {index} out of sequence; expected {position}",
                {"index": index, "expected": position},
            )
        scanner.expect(b"[", "string length")
        size = scanner.read_int("string length")
        if size < 0:
            raise SarrayFormatError(operation, f"negative length {size} for string {position}")
        scanner.expect(b"]:", "string length")
        # Two pad spaces, the data, then the writer's newline.
        raw = scanner.read_exact(size + 3, f"string {position}")
        if raw[:2] != b"  " or raw[-1:] != b"\n":
            raise SarrayFormatError(
                operation,
                f"string {position} does not match its declared length {size}",
                {"index": position, "length": size},
            )
        array.append_owned(_decode(raw[2:-1]))
    scanner.expect(b"\n", "closing blank line")
    logger.debug("read string array with %d strings", count)
    return array


def read_stream(stream: BinaryIO) -> StringArray:
    """Read one serialized array from a binary stream."""
    _require_binary("read_stream", stream)
    return _read_array(_StreamScanner(stream, "read_stream"))


def iter_streams(stream: BinaryIO) -> Iterator[StringArray]:
    """Yield every array stored back to back in ``stream`` (see ``append_file``)."""
    _require_binary("iter_streams", stream)
    scanner = _StreamScanner(stream, "read_stream")
    while True:
        scanner.skip_whitespace()
        if scanner.at_eof():
            return
        yield _read_array(scanner)


def serialize(array: StringArray) -> bytes:
    if array is None:
        raise InvalidArgumentError("serialize", "array not defined")
    parts = [
        b"\nSarray Version %d\n" % SARRAY_VERSION,
        b"Number of strings = %d\n" % array.count,
    ]
    for index, item in enumerate(array.items()):
        data = _encode(item)
        parts.append(b"  %d[%d]:  " % (index, len(data)))
        parts.append(data)
        parts.append(b"\n")
    parts.append(b"\n")
    return b"".join(parts)


def _write_payload(stream: BinaryIO, payload: bytes, count: int) -> None:
    try:
        stream.write(payload)
    except (OSError, ValueError) as exc:
        raise StreamError("write_stream", f"stream write failed: {exc}") from exc
    logger.debug("wrote string array with %d strings (%d bytes)", count, len(payload))


def write_stream(stream: BinaryIO, array: StringArray) -> None:
    _require_binary("write_stream", stream)
    _write_payload(stream, serialize(array), array.count)


def write_file(path: Path | str, array: StringArray, *, append: bool = False) -> None:
    if path is None:
        raise InvalidArgumentError("write_file", "filename not defined")
    if array is None:
        raise InvalidArgumentError("write_file", "array not defined")
    # Encode first: opening with "wb" truncates the file.
    payload = serialize(array)
    target = Path(path)
    try:
        handle = target.open("ab" if append else "wb")
    except OSError as exc:
        raise StreamError("write_file", f"cannot open {target}: {exc}", {"path": str(target)}) from exc
    with handle:
        _write_payload(handle, payload, array.count)


def append_file(path: Path | str, array: StringArray) -> None:
    write_file(path, array, append=True)


def read_file(path: Path | str) -> StringArray:
    if path is None:
        raise InvalidArgumentError("read_file", "filename not defined")
    target = Path(path)
    try:
        handle = target.open("rb")
    except OSError as exc:
        raise StreamError("read_file", f"cannot open {target}: {exc}", {"path": str(target)}) from exc
    with handle:
        return read_stream(handle)


def read_all(path: Path | str) -> list[StringArray]:
    """Every array in a file written with ``write_file`` and ``append_file``."""
    if path is None:
        raise InvalidArgumentError("read_all", "filename not defined")
    target = Path(path)
    try:
        handle = target.open("rb")
    except OSError as exc:
        raise StreamError("read_all", f"cannot open {target}: {exc}", {"path": str(target)}) from exc
    with handle:
        return list(iter_streams(handle))


__all__ = [
    "append_file",
    "iter_streams",
    "read_all",
    "read_file",
    "read_stream",
    "serialize",
    "write_file",
    "write_stream",
]
