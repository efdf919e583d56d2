from __future__ import annotations

import io
from pathlib import Path

import pytest

from strarray.core.array import StringArray
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
from strarray.errors import AllocationError, InvalidArgumentError, SarrayFormatError, StreamError


def _array(*items: str) -> StringArray:
    return StringArray.from_strings(items)


def _round_trip(array: StringArray) -> StringArray:
    buffer = io.BytesIO()
    write_stream(buffer, array)
    buffer.seek(0)
    return read_stream(buffer)


def test_writer_emits_exact_layout() -> None:
    payload = serialize(_array("a", "", "b c"))

    assert payload == (
        b"\nSarray Version 1\n"
        b"Number of strings = 3\n"
        b"  0[1]:  a\n"
        b"  1[0]:  \n"
        b"  2[3]:  b c\n"
        b"\n"
    )


def test_empty_array_layout_and_round_trip() -> None:
    array = StringArray()

    assert serialize(array) == b"\nSarray Version 1\nNumber of strings = 0\n\n"
    assert _round_trip(array).count == 0


@pytest.mark.parametrize(
    "items",
    [
        ("alpha", "beta", "gamma"),
        ("", "", "x", ""),
        ("line1\nline2", "\n", "trailing\n\n", "\nleading"),
        ("  two leading spaces", "tab\tinside", "3[4]:  looks like a header"),
        ("héllo wörld", "日本語"),
    ],
)
def test_round_trip_preserves_elements(items: tuple[str, ...]) -> None:
    original = _array(*items)

    restored = _round_trip(original)

    assert restored == original
    assert serialize(restored) == serialize(original)


def test_length_counts_encoded_bytes() -> None:
    assert b"  0[2]:  \xc3\xa9\n" in serialize(_array("é"))


def test_arbitrary_bytes_survive_a_file_round_trip(tmp_path: Path) -> None:
    raw = b"\nSarray Version 1\nNumber of strings = 1\n  0[3]:  \xff\x00\xfe\n\n"
    source = tmp_path / "raw.sa"
    source.write_bytes(raw)

    array = read_file(source)
    write_file(tmp_path / "copy.sa", array)

    assert array.count == 1
    assert (tmp_path / "copy.sa").read_bytes() == raw


def test_second_write_is_byte_identical(tmp_path: Path) -> None:
    first = tmp_path / "first.sa"
    second = tmp_path / "second.sa"
    write_file(first, _array("a\nb", "", "c"))

    write_file(second, read_file(first))

    assert first.read_bytes() == second.read_bytes()


def test_reader_rejects_wrong_version() -> None:
    payload = serialize(_array("a")).replace(b"Version 1", b"Version 2")

    with pytest.raises(SarrayFormatError, match="unsupported version 2") as excinfo:
        read_stream(io.BytesIO(payload))

    assert excinfo.value.kind == "FORMAT_ERROR"
    assert excinfo.value.details["version"] == 2


@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b"\n\n   \n",
        b"not a string array\n",
        b"\nSarray Version x\n",
        b"\nSarray Version 1\nNumber of things = 1\n",
        b"\nSarray Version 1\nNumber of strings = -1\n\n",
    ],
)
def test_reader_rejects_malformed_headers(payload: bytes) -> None:
    with pytest.raises(SarrayFormatError):
        read_stream(io.BytesIO(payload))


def test_reader_rejects_length_mismatch() -> None:
    payload = b"\nSarray Version 1\nNumber of strings = 1\n  0[2]:  abc\n\n"

    with pytest.raises(SarrayFormatError, match="declared length"):
        read_stream(io.BytesIO(payload))


def test_reader_rejects_out_of_sequence_index() -> None:
    payload = b"\nSarray Version 1\nNumber of strings = 2\n  0[1]:  a\n  5[1]:  b\n\n"

    with pytest.raises(SarrayFormatError, match="out of sequence"):
        read_stream(io.BytesIO(payload))


@pytest.mark.parametrize(
    "payload",
    [
        b"\nSarray Version 1\nNumber of strings = 2\n  0[1]:  a\n",
        b"\nSarray Version 1\nNumber of strings = 1\n  0[50]:  short\n\n",
        b"\nSarray Version 1\nNumber of strings = 1\n  0[1]:  a\n",
    ],
)
def test_reader_reports_truncated_streams_as_io_errors(payload: bytes) -> None:
    with pytest.raises(StreamError) as excinfo:
        read_stream(io.BytesIO(payload))

    assert excinfo.value.kind == "IO_ERROR"


def test_reader_leaves_stream_after_the_array() -> None:
    buffer = io.BytesIO(serialize(_array("a")) + b"tail")

    read_stream(buffer)

    assert buffer.read() == b"tail"


def test_text_streams_are_rejected() -> None:
    with pytest.raises(InvalidArgumentError, match="binary"):
        read_stream(io.StringIO("\nSarray Version 1\n"))
    with pytest.raises(InvalidArgumentError, match="binary"):
        write_stream(io.StringIO(), _array("a"))


class _BrokenStream(io.RawIOBase):
    def writable(self) -> bool:
        return True

    def write(self, data: object) -> int:
        raise OSError("disk full")


def test_write_failure_is_reported_as_stream_error() -> None:
    with pytest.raises(StreamError, match="disk full") as excinfo:
        write_stream(_BrokenStream(), _array("a"))

    assert excinfo.value.operation == "write_stream"


def test_append_file_and_read_all(tmp_path: Path) -> None:
    target = tmp_path / "many.sa"
    write_file(target, _array("a", "b"))
    append_file(target, _array("c"))
    append_file(target, StringArray())

    arrays = read_all(target)

    assert [array.items() for array in arrays] == [("a", "b"), ("c",), ()]
    assert read_file(target).items() == ("a", "b")


def test_iter_streams_on_empty_stream_yields_nothing() -> None:
    assert list(iter_streams(io.BytesIO(b""))) == []


def test_file_errors_are_stream_errors(tmp_path: Path) -> None:
    with pytest.raises(StreamError, match="cannot open"):
        read_file(tmp_path / "missing.sa")
    with pytest.raises(StreamError, match="cannot open"):
        write_file(tmp_path, _array("a"))
    with pytest.raises(InvalidArgumentError):
        write_file(tmp_path / "x.sa", None)  # type: ignore[arg-type]


def test_failed_write_leaves_existing_file_untouched(tmp_path: Path) -> None:
    target = tmp_path / "keep.sa"
    write_file(target, _array("precious"))
    before = target.read_bytes()
    unencodable = StringArray()
    unencodable.append_owned("\ud800")

    with pytest.raises(InvalidArgumentError, match="cannot be encoded"):
        write_file(target, unencodable)
    with pytest.raises(InvalidArgumentError):
        append_file(target, unencodable)

    assert target.read_bytes() == before
    assert read_file(target).items() == ("precious",)


class _UnseekableStream(io.RawIOBase):
    """Non-seekable reader that cannot satisfy very large reads."""

    def __init__(self, payload: bytes) -> None:
        self._data = io.BytesIO(payload)

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def read(self, size: int = -1) -> bytes:
        if size > 1 << 20:
            raise MemoryError
        return self._data.read(size)


def test_unallocatable_length_is_an_allocation_failure() -> None:
    payload = b"\nSarray Version 1\nNumber of strings = 1\n  0[99999999999]:  x\n\n"

    with pytest.raises(AllocationError) as excinfo:
        read_stream(_UnseekableStream(payload))

    assert excinfo.value.kind == "ALLOCATION_FAILURE"
    assert excinfo.value.operation == "read_stream"


def test_length_beyond_end_of_seekable_stream_is_truncation(tmp_path: Path) -> None:
    payload = b"\nSarray Version 1\nNumber of strings = 1\n  0[99999999999999]:  x\n\n"
    source = tmp_path / "huge.sa"
    source.write_bytes(payload)

    with pytest.raises(StreamError, match="left") as excinfo:
        read_stream(io.BytesIO(payload))
    assert excinfo.value.kind == "IO_ERROR"
    with pytest.raises(StreamError):
        read_file(source)
