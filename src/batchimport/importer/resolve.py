from __future__ import annotations

import logging
import os

from batchimport.errors import (
    DirectoryNotFoundError,
    EmptyDirectoryError,
    ImportFailure,
    InvalidExtensionError,
    ScriptNotFoundError,
)
from batchimport.types import ImportTarget, Resolution, TargetOrigin

logger = logging.getLogger(__name__)
_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


def resolve_path(item: str, extension: str) -> Resolution:
    """
    Expand one requested path into loadable targets plus validation failures.

    Directories expand to their conforming children in sorted listing order. Hidden
    names (leading ``.``) are skipped without a failure. Nothing here raises for a
    validation problem; failures are collected on the returned resolution.
    """

    resolution = Resolution(item=item)
    if os.path.isdir(item) or item.endswith(_SEPARATORS):
        _resolve_directory(item, extension, resolution)
    else:
        _resolve_file(item, extension, resolution)
    return resolution


def is_hidden(path: str) -> bool:
    name = os.path.basename(path.rstrip("".join(_SEPARATORS)) or path)
    return name.startswith(".") and name not in {".", ".."}


def _resolve_file(item: str, extension: str, resolution: Resolution) -> None:
    if is_hidden(item):
        logger.debug("Skipping hidden path", extra={"item": item})
        return
    try:
        _check_script(item, item, extension)
    except ImportFailure as exc:
        resolution.failures.append(exc)
        return
    resolution.targets.append(ImportTarget(path=item, origin=TargetOrigin.FILE))


def _resolve_directory(directory: str, extension: str, resolution: Resolution) -> None:
    try:
        entries = _list_directory(directory)
    except ImportFailure as exc:
        resolution.failures.append(exc)
        return

    for name in entries:
        if name.startswith("."):
            continue
        path = os.path.join(directory, name)
        try:
            _check_script(path, path, extension)
        except ImportFailure as exc:
            resolution.failures.append(exc)
            continue
        resolution.targets.append(ImportTarget(path=path, origin=TargetOrigin.DIRECTORY))

    try:
        _check_not_empty(directory, extension, resolution)
    except ImportFailure as exc:
        resolution.failures.append(exc)


def _list_directory(directory: str) -> list[str]:
    if not os.path.isdir(directory):
        raise DirectoryNotFoundError(directory)
    try:
        return sorted(os.listdir(directory))
    except OSError as exc:
        raise DirectoryNotFoundError(directory) from exc


def _check_script(item: str, path: str, extension: str) -> None:
    if not os.path.exists(path):
        raise ScriptNotFoundError(item, path)
    if not path.endswith(extension):
        raise InvalidExtensionError(item, extension, path)


def _check_not_empty(directory: str, extension: str, resolution: Resolution) -> None:
    if not resolution.targets:
        raise EmptyDirectoryError(directory, extension)
