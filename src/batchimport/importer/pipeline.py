from __future__ import annotations

import logging
import os
import traceback
from collections.abc import Sequence
from typing import Any, Callable

import typer

from batchimport.config import Settings
from batchimport.errors import ImportFailure, InvalidArgumentError, LoadFailureError
from batchimport.importer.resolve import resolve_path
from batchimport.loaders import Loader, NamespaceLoader
from batchimport.types import ErrorDetails, ErrorRecord, ImportReport

logger = logging.getLogger(__name__)

Echo = Callable[[str], Any]


class Importer:
    """
    Best-effort batch loader.

    Paths are handled strictly in the order given; a failing path is recorded and the
    batch moves on. Only a malformed request raises (``InvalidArgumentError``).
    """

    def __init__(
        self,
        loader: Loader | None = None,
        settings: Settings | None = None,
        *,
        echo: Echo | None = None,
    ) -> None:
        self.loader = loader or NamespaceLoader()
        self.settings = settings
        self.echo = echo or typer.echo

    def run(self, paths: Sequence[str]) -> ImportReport:
        requested = normalize_request(paths)
        settings = self.settings or Settings()
        report = ImportReport()
        logging.getLogger("batchimport").setLevel(settings.log_level)

        logger.info(
            "Starting import",
            extra={"paths": len(requested), "extension": settings.extension},
        )

        for item in requested:
            resolution = resolve_path(item, settings.extension)
            logger.debug(
                "Resolved path",
                extra={
                    "item": resolution.item,
                    "targets": len(resolution.targets),
                    "failures": len(resolution.failures),
                },
            )
            for failure in resolution.failures:
                self._record(report, failure, settings)

            for target in resolution.targets:
                try:
                    self.loader.load(target.path)
                except Exception as exc:
                    failure = LoadFailureError(target.path)
                    failure.__cause__ = exc
                    logger.debug(
                        "Loader raised",
                        exc_info=exc,
                        extra={"item": target.path, "origin": target.origin.value},
                    )
                    self._record(report, failure, settings)
                    continue
                logger.debug("Loaded script", extra={"item": target.path, "origin": target.origin.value})
                report.loaded.append(target.path)

        if report.errors and settings.echo_errors:
            self.echo(summary_line(len(report.errors)))

        logger.info(
            "Import finished",
            extra={"loaded": len(report.loaded), "errors": len(report.errors)},
        )
        return report

    def _record(self, report: ImportReport, failure: ImportFailure, settings: Settings) -> None:
        message = failure.describe(html=settings.html_messages)
        report.errors.append(
            ErrorRecord(
                item=failure.item,
                message=message,
                details=error_details(failure.__cause__ or failure),
                kind=failure.kind,
            )
        )
        logger.warning(
            "Import failure: %s",
            failure,
            extra={"item": failure.item, "kind": failure.kind.value},
        )
        if settings.echo_errors:
            self.echo(message)


def import_scripts(
    paths: Sequence[str],
    *,
    loader: Loader | None = None,
    settings: Settings | None = None,
    echo: Echo | None = None,
) -> list[ErrorRecord]:
    """Load every script in ``paths``; return one error record per failed path."""

    return Importer(loader, settings, echo=echo).run(paths).errors


def normalize_request(paths: Sequence[str]) -> list[str]:
    if isinstance(paths, (str, bytes)) or not isinstance(paths, Sequence):
        raise InvalidArgumentError(
            f"import paths must be a sequence of strings, got {type(paths).__name__}"
        )

    requested: list[str] = []
    for index, item in enumerate(paths):
        if isinstance(item, os.PathLike):
            item = os.fspath(item)
        if not isinstance(item, str):
            raise InvalidArgumentError(
                f"import path at position {index} must be a string, got {type(item).__name__}"
            )
        requested.append(item)
    return requested


def error_details(exc: BaseException) -> ErrorDetails:
    """Describe where ``exc`` originated: message, innermost location and traceback."""

    frames = traceback.extract_tb(exc.__traceback__)
    if isinstance(exc, SyntaxError) and exc.filename:
        file, line = exc.filename, exc.lineno or 0
    elif frames:
        file, line = frames[-1].filename, frames[-1].lineno or 0
    else:
        file, line = "", 0
    trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return ErrorDetails(internal=str(exc), file=file, line=line, trace=trace)


def summary_line(count: int) -> str:
    if count == 1:
        return "A importação foi concluída, mas foi identificado 1 erro no processo."
    return f"A importação foi concluída, mas foram identificados {count} erros no processo."
