"""Orchestration behind the CLI commands: file in, string array work, file out."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from strarray.constants import EXIT_FAILURE, EXIT_SUCCESS, STRING_ENCODING, STRING_ERRORS
from strarray.core.array import StringArray, concatenate, encode_string
from strarray.core.io import read_all, read_file, write_file
from strarray.core.reflow import convert_words_to_lines, paragraph_words
from strarray.core.sort import sort_array
from strarray.core.split import from_lines, from_words
from strarray.errors import StreamError, StringArrayError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandOutcome:
    exit_code: int
    processed_strings: int = 0
    output: str = ""
    errors: list[str] = field(default_factory=list)


def _failure(exc: StringArrayError) -> CommandOutcome:
    logger.debug("command failed: %s", exc.to_dict())
    return CommandOutcome(exit_code=EXIT_FAILURE, errors=[str(exc)])


def _read_text(path: Path) -> str:
    try:
        return path.read_bytes().decode(STRING_ENCODING, STRING_ERRORS)
    except OSError as exc:
        raise StreamError("read_text", f"cannot read {path}: {exc}", {"path": str(path)}) from exc


def _store(array: StringArray, output: Path) -> CommandOutcome:
    count = array.count
    write_file(output, array)
    array.destroy()
    return CommandOutcome(exit_code=EXIT_SUCCESS, processed_strings=count)


def split_words(source: Path, output: Path) -> CommandOutcome:
    try:
        return _store(from_words(_read_text(source)), output)
    except StringArrayError as exc:
        return _failure(exc)


def split_lines(source: Path, output: Path, *, keep_blank_lines: bool) -> CommandOutcome:
    try:
        return _store(from_lines(_read_text(source), keep_blank_lines), output)
    except StringArrayError as exc:
        return _failure(exc)


def join_strings(source: Path, *, join: str, first: int = 0, count: int = 0) -> CommandOutcome:
    try:
        array = read_file(source)
        if first == 0 and count == 0:
            text = array.to_string(join)
        else:
            text = array.to_string_range(first, count, join)
        processed = array.count
        array.destroy()
    except StringArrayError as exc:
        return _failure(exc)
    return CommandOutcome(exit_code=EXIT_SUCCESS, processed_strings=processed, output=text)


def sort_strings(source: Path, output: Path, *, order: str) -> CommandOutcome:
    try:
        array = read_file(source)
        sort_array(array, array, order)
        return _store(array, output)
    except StringArrayError as exc:
        return _failure(exc)


def reflow_text(source: Path, *, width: int, join: str, output: Path | None = None) -> CommandOutcome:
    try:
        words = paragraph_words(_read_text(source))
        lines = convert_words_to_lines(words, width)
        words.destroy()
        if output is not None:
            return _store(lines, output)
        text = lines.to_string(join)
        processed = lines.count
        lines.destroy()
    except StringArrayError as exc:
        return _failure(exc)
    return CommandOutcome(exit_code=EXIT_SUCCESS, processed_strings=processed, output=text)


def concatenate_files(sources: list[Path], output: Path, *, append: bool = False) -> CommandOutcome:
    """Concatenate every array found in ``sources`` into one array at ``output``."""
    try:
        combined = StringArray()
        for source in sources:
            for array in read_all(source):
                concatenate(combined, array)
                array.destroy()
        count = combined.count
        write_file(output, combined, append=append)
        combined.destroy()
    except StringArrayError as exc:
        return _failure(exc)
    return CommandOutcome(exit_code=EXIT_SUCCESS, processed_strings=count)


def describe_file(source: Path) -> CommandOutcome:
    try:
        arrays = read_all(source)
    except StringArrayError as exc:
        return _failure(exc)

    lines: list[str] = []
    processed = 0
    for position, array in enumerate(arrays):
        if len(arrays) > 1:
            lines.append(f"# array {position}")
        lines.append(f"Number of strings = {array.count}")
        for index, item in enumerate(array):
            lines.append(f"  {index}[{len(encode_string(item))}]: {item!r}")
        processed += array.count
        array.destroy()
    return CommandOutcome(
        exit_code=EXIT_SUCCESS,
        processed_strings=processed,
        output="\n".join(lines) + "\n",
    )


__all__ = [
    "CommandOutcome",
    "concatenate_files",
    "describe_file",
    "join_strings",
    "reflow_text",
    "sort_strings",
    "split_lines",
    "split_words",
]
