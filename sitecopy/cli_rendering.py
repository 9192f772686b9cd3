"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
page listings, diff lines, and locale coverage reports.
"""

from __future__ import annotations

from typing import Any, Iterable, NoReturn

import typer

from .errors import SitecopyError
from .io.storage import dump_json
from .models.datatypes import DiffEntry, MissingLocaleRecord
from .document.validation import format_missing_locale_record
from .schema.fields import PageSchema


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, SitecopyError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_json(payload: Any, indent: int) -> None:
    """Print a JSON payload deterministically."""

    typer.echo(dump_json(payload, indent))


def echo_page_list(schemas: Iterable[PageSchema]) -> None:
    """Print registered pages as `key<TAB>title` rows sorted by key."""

    for schema in sorted(schemas, key=lambda item: item.key):
        typer.echo(f"{schema.key}\t{schema.title}")


def _format_diff_value(value: Any) -> str:
    return dump_json(value, 0)


def echo_diff_entries(entries: list[DiffEntry]) -> None:
    """Print one line per change, or a notice when nothing changed."""

    if not entries:
        typer.echo("No changes.")
        return
    for entry in entries:
        if entry.op == "add":
            typer.echo(f"+ {entry.path} {_format_diff_value(entry.after)}")
        elif entry.op == "remove":
            typer.echo(f"- {entry.path} {_format_diff_value(entry.before)}")
        else:
            typer.echo(
                f"~ {entry.path} {_format_diff_value(entry.before)} -> "
                f"{_format_diff_value(entry.after)}"
            )


def echo_missing_locales(records: list[MissingLocaleRecord]) -> None:
    """Print locale coverage gaps, one field per line."""

    if not records:
        typer.echo("All localized fields are complete.")
        return
    for record in records:
        typer.echo(format_missing_locale_record(record))
    typer.echo(f"Fields missing locales: {len(records)}")
