from __future__ import annotations

from pathlib import Path

import typer

from strarray.cli.engine import (
    CommandOutcome,
    concatenate_files,
    describe_file,
    join_strings,
    reflow_text,
    sort_strings,
    split_lines,
    split_words,
)
from strarray.config import StrArrayConfig, load_config
from strarray.console import configure_logging
from strarray.constants import EXIT_INTERNAL_ERROR, JOIN_SEPARATORS, SORT_ORDERS


def _version_callback(value: bool) -> None:
    if value:
        from strarray import __version__

        typer.echo(f"strarray {__version__}")
        raise typer.Exit()


app = typer.Typer(add_completion=False, help="Build, sort, reflow and serialize string arrays")


@app.callback(invoke_without_command=True)
def _main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Print version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr."),
    config: Path | None = typer.Option(None, "--config", help="YAML file with command defaults"),
) -> None:
    configure_logging(verbose)
    try:
        ctx.obj = load_config(config)
    except (OSError, ValueError) as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(EXIT_INTERNAL_ERROR) from exc


def _config(ctx: typer.Context) -> StrArrayConfig:
    if isinstance(ctx.obj, StrArrayConfig):
        return ctx.obj
    return StrArrayConfig()


def _check_choice(value: str, choices: list[str] | tuple[str, ...], option: str) -> str:
    if value not in choices:
        typer.echo(f"ERROR: {option} must be one of: {', '.join(choices)}", err=True)
        raise typer.Exit(EXIT_INTERNAL_ERROR)
    return value


def _emit_outcome(outcome: CommandOutcome, summary: str | None = None) -> None:
    if outcome.errors:
        for error in outcome.errors:
            typer.echo(f"ERROR: {error}", err=True)
    elif outcome.output:
        typer.echo(outcome.output, nl=False)
    elif summary:
        typer.echo(summary)
    raise typer.Exit(outcome.exit_code)


@app.command()
def words(
    source: Path = typer.Argument(..., help="Text file to split into words"),
    output: Path = typer.Option(..., "--output", "-o", help="Serialized array to write"),
) -> None:
    """Split text on spaces, tabs and newlines into a string array."""
    outcome = split_words(source, output)
    _emit_outcome(outcome, f"Wrote {outcome.processed_strings} string(s) to {output}")


@app.command()
def lines(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="Text file to split into lines"),
    output: Path = typer.Option(..., "--output", "-o", help="Serialized array to write"),
    keep_blank: bool | None = typer.Option(
        None, "--keep-blank/--drop-blank", help="Keep empty lines as empty strings"
    ),
) -> None:
    """Split text on newlines into a string array."""
    keep_blank_lines = _config(ctx).keep_blank_lines if keep_blank is None else keep_blank
    outcome = split_lines(source, output, keep_blank_lines=keep_blank_lines)
    _emit_outcome(outcome, f"Wrote {outcome.processed_strings} string(s) to {output}")


@app.command()
def join(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="Serialized array to read"),
    sep: str | None = typer.Option(None, "--sep", help="Separator after each string: none | newline | space"),
    first: int = typer.Option(0, "--first", min=0, help="Index of the first string to use"),
    count: int = typer.Option(0, "--count", min=0, help="Number of strings to use (0 = to the end)"),
) -> None:
    """Print the strings of an array concatenated back into text."""
    separator = _check_choice(sep or _config(ctx).join, sorted(JOIN_SEPARATORS), "--sep")
    outcome = join_strings(source, join=separator, first=first, count=count)
    _emit_outcome(outcome)


@app.command()
def sort(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="Serialized array to read"),
    output: Path = typer.Option(..., "--output", "-o", help="Serialized array to write"),
    order: str | None = typer.Option(None, "--order", help="increasing | decreasing"),
) -> None:
    """Sort an array by byte value."""
    resolved_order = _check_choice(order or _config(ctx).sort_order, SORT_ORDERS, "--order")
    outcome = sort_strings(source, output, order=resolved_order)
    _emit_outcome(outcome, f"Sorted {outcome.processed_strings} string(s) into {output}")


@app.command()
def reflow(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="Text file to re-typeset"),
    width: int | None = typer.Option(None, "--width", "-w", min=1, help="Maximum line width"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write lines as a serialized array"),
) -> None:
    """Re-typeset text to a maximum line width, keeping paragraph breaks."""
    settings = _config(ctx)
    outcome = reflow_text(
        source,
        width=width or settings.line_width,
        join=settings.join,
        output=output,
    )
    summary = f"Wrote {outcome.processed_strings} line(s) to {output}" if output is not None else None
    _emit_outcome(outcome, summary)


@app.command()
def cat(
    output: Path = typer.Argument(..., help="Serialized array to write"),
    sources: list[str] = typer.Argument(..., help="Serialized arrays to concatenate, in order"),
    append: bool = typer.Option(False, "--append", help="Append to OUTPUT instead of replacing it"),
) -> None:
    """Concatenate serialized arrays into one."""
    outcome = concatenate_files([Path(source) for source in sources], output, append=append)
    _emit_outcome(outcome, f"Wrote {outcome.processed_strings} string(s) to {output}")


@app.command()
def show(source: Path = typer.Argument(..., help="Serialized array file to inspect")) -> None:
    """Print the count and every string of each array in a file."""
    _emit_outcome(describe_file(source))


__all__ = ["app"]
