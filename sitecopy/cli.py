"""Command-line interface for sitecopy.

Responsibilities:
- Expose commands that run the document engine over JSON files.
- Convert CLI arguments into `SitecopyConfig` and page schemas.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer

from .cli_rendering import (
    echo_diff_entries,
    echo_json,
    echo_missing_locales,
    echo_page_list,
    exit_with_command_error,
)
from .config import ConfigLoader, SitecopyConfig
from .document.diff import diff_json_values
from .document.dirty import is_dirty
from .document.envelope import with_meta_envelope
from .document.validation import collect_missing_locales
from .errors import SchemaError, SitecopyError
from .io.storage import FileSaveWriter, read_json_document
from .schema.fields import PageSchema
from .schema.pages import PAGE_SCHEMAS, get_page_schema
from .session import EditingSession

app = typer.Typer(
    name="sitecopy",
    no_args_is_help=True,
    help="Localized page document tools.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file."),
]
PageOption = Annotated[
    str,
    typer.Option("--page", help="Registered page key, see `sitecopy pages`."),
]


def _load_config(config_path: Path | None) -> SitecopyConfig:
    """Load YAML config when requested, else environment config, mapping failures to stage errors."""

    if config_path is None:
        try:
            return ConfigLoader.from_env()
        except ValueError as exc:
            raise SitecopyError(
                stage="config",
                detail=f"Invalid environment configuration: {exc}",
                hint="Fix `SITECOPY_*` environment variables and rerun.",
            ) from exc

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise SitecopyError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise SitecopyError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _resolve_page(page: str) -> PageSchema:
    """Return a registered page schema or raise a stage error."""

    try:
        return get_page_schema(page)
    except SchemaError as exc:
        raise SitecopyError(
            stage="page",
            detail=str(exc),
            hint="Run `sitecopy pages` to list registered pages.",
        ) from exc


def _read_input(path: Path) -> Any:
    """Read one JSON input file or raise a stage error."""

    try:
        return read_json_document(path)
    except ValueError as exc:
        raise SitecopyError(
            stage="input",
            detail=str(exc),
            hint="Check the file is a UTF-8 JSON document.",
        ) from exc
    except OSError as exc:
        raise SitecopyError(
            stage="input",
            detail=f"Failed to read `{path}`: {exc}",
            hint="Verify the path and file permissions.",
        ) from exc


@app.command("pages")
def pages_command() -> None:
    """List registered page schemas."""

    echo_page_list(PAGE_SCHEMAS.values())


@app.command("normalize")
def normalize_command(
    input_json: Annotated[Path, typer.Argument(help="Persisted page JSON.")],
    page: PageOption,
    config_path: ConfigOption = None,
) -> None:
    """Print the editing document, including stable list ids."""

    try:
        config = _load_config(config_path)
        schema = _resolve_page(page)
        session = EditingSession.open(_read_input(input_json), schema, config)
    except Exception as exc:
        exit_with_command_error("normalize", exc)

    echo_json(session.document, config.indent)


@app.command("overrides")
def overrides_command(
    input_json: Annotated[Path, typer.Argument(help="Persisted page JSON.")],
    page: PageOption,
    config_path: ConfigOption = None,
) -> None:
    """Print the non-default-locale override map."""

    try:
        config = _load_config(config_path)
        schema = _resolve_page(page)
        session = EditingSession.open(_read_input(input_json), schema, config)
    except Exception as exc:
        exit_with_command_error("overrides", exc)

    echo_json(session.overrides, config.indent)


@app.command("roundtrip")
def roundtrip_command(
    input_json: Annotated[Path, typer.Argument(help="Persisted page JSON.")],
    page: PageOption,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write the payload here instead of printing it."),
    ] = None,
    stamp: Annotated[
        bool,
        typer.Option("--stamp/--no-stamp", help="Add `_meta.updatedAt` to the payload."),
    ] = False,
    config_path: ConfigOption = None,
) -> None:
    """Normalize and re-serialize a document, merging its overrides back."""

    try:
        config = _load_config(config_path)
        schema = _resolve_page(page)
        raw = _read_input(input_json)
        session = EditingSession.open(raw, schema, config)
        payload = session.payload()
        changed = is_dirty(payload, raw)

        if out is not None:
            outcome = session.save(FileSaveWriter(out, config.indent, stamp=stamp))
            if not outcome.ok:
                raise SitecopyError(
                    stage="save",
                    detail=outcome.message,
                    hint="Choose a writable `--out` path.",
                )
    except Exception as exc:
        exit_with_command_error("roundtrip", exc)

    if out is None:
        echo_json(with_meta_envelope(payload) if stamp else payload, config.indent)
        return
    typer.echo(f"Payload: {out}")
    typer.echo(f"Changed: {'yes' if changed else 'no'}")


@app.command("diff")
def diff_command(
    before_json: Annotated[Path, typer.Argument(help="Previous JSON version; a missing or blank file reads as `{}`.")],
    after_json: Annotated[Path, typer.Argument(help="Next JSON version.")],
) -> None:
    """Print JSON-pointer changes between two documents."""

    try:
        before = _read_input(before_json)
        after = _read_input(after_json)
    except Exception as exc:
        exit_with_command_error("diff", exc)

    echo_diff_entries(diff_json_values(before, after))


@app.command("check-locales")
def check_locales_command(
    input_json: Annotated[Path, typer.Argument(help="Persisted page JSON.")],
    page: PageOption,
    config_path: ConfigOption = None,
) -> None:
    """List localized fields that lack some supported locales; exit 1 if any."""

    try:
        config = _load_config(config_path)
        schema = _resolve_page(page)
        records = collect_missing_locales(_read_input(input_json), schema, config.locales)
    except Exception as exc:
        exit_with_command_error("check-locales", exc)

    echo_missing_locales(records)
    if records:
        raise typer.Exit(code=1)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
