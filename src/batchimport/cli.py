from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from batchimport.config import Settings, load_settings
from batchimport.importer import Importer
from batchimport.loaders import Loader, ModuleLoader, NamespaceLoader, RecordingLoader

app = typer.Typer(help="Load Python scripts in batch and report what failed")


class LoadMode(str, Enum):
    namespace = "namespace"
    module = "module"


@app.callback()
def configure_logging(ctx: typer.Context, verbose: bool = typer.Option(False, "--verbose", "-v")) -> None:
    ctx.obj = {"verbose": verbose}
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


@app.command("run")
def run(
    ctx: typer.Context,
    paths: List[str] = typer.Argument(..., help="Script files and/or directories, loaded in order"),
    settings_file: Optional[Path] = typer.Option(
        None,
        "--settings",
        help="JSON settings file (accepts echoErrors/htmlMessages keys)",
    ),
    echo_errors: Optional[bool] = typer.Option(
        None,
        "--echo/--no-echo",
        help="Print each error as it is found plus a summary line",
    ),
    html_messages: Optional[bool] = typer.Option(
        None,
        "--html/--no-html",
        help="Format error messages with <code>/<strong> markup",
    ),
    extension: Optional[str] = typer.Option(None, help="Required script extension (default .py)"),
    mode: LoadMode = typer.Option(
        LoadMode.namespace,
        help="namespace: exec every script into one shared namespace; module: import each as a module",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the error report as JSON"),
) -> None:
    settings = _settings(ctx, settings_file, echo_errors, html_messages, extension)
    loader: Loader = ModuleLoader() if mode is LoadMode.module else NamespaceLoader()

    report = Importer(loader, settings).run(paths)

    if as_json:
        typer.echo(json.dumps([record.to_dict() for record in report.errors], indent=2, ensure_ascii=False))
    else:
        typer.echo(f"Import complete: loaded={len(report.loaded)} errors={len(report.errors)}")
    if report.errors:
        raise typer.Exit(code=1)


@app.command("check")
def check(
    ctx: typer.Context,
    paths: List[str] = typer.Argument(..., help="Script files and/or directories to validate"),
    settings_file: Optional[Path] = typer.Option(None, "--settings", help="JSON settings file"),
    extension: Optional[str] = typer.Option(None, help="Required script extension (default .py)"),
) -> None:
    """Validate paths without executing anything."""

    settings = _settings(ctx, settings_file, None, None, extension)
    loader = RecordingLoader()
    report = Importer(loader, settings).run(paths)

    for path in loader.calls:
        typer.echo(f"would load {path}")
    for record in report.errors:
        typer.echo(f"{record.kind.value}: {record.message}", err=True)
    typer.echo(f"Import complete: loaded={len(report.loaded)} errors={len(report.errors)}")
    if report.errors:
        raise typer.Exit(code=1)


def _settings(
    ctx: typer.Context,
    settings_file: Optional[Path],
    echo_errors: Optional[bool],
    html_messages: Optional[bool],
    extension: Optional[str],
) -> Settings:
    try:
        return load_settings(
            settings_file,
            echo_errors=echo_errors,
            html_messages=html_messages,
            extension=extension,
            log_level="DEBUG" if (ctx.obj or {}).get("verbose") else None,
        )
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--settings") from exc


if __name__ == "__main__":
    app()
