"""Exception taxonomy for batch imports.

Every per-path problem is an :class:`ImportFailure`. The importer catches these
locally and turns them into :class:`~batchimport.types.ErrorRecord` entries; only
:class:`InvalidArgumentError` ever reaches the caller.
"""

from __future__ import annotations

from typing import Any, ClassVar

from batchimport.types import ErrorKind


class InvalidArgumentError(TypeError):
    """Raised when the import request is not a sequence of paths."""


def _code(value: str, html: bool) -> str:
    return f"<code>{value}</code>" if html else f"'{value}'"


def _strong(value: str, html: bool) -> str:
    return f"<strong>{value}</strong>" if html else value


class ImportFailure(Exception):
    """
    Base for per-path failures.

    Subclasses declare ``kind`` and a message ``template`` using the ``{path}``,
    ``{directory}`` and ``{extension}`` fields.
    """

    kind: ClassVar[ErrorKind]
    template: ClassVar[str]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        missing = [name for name in ("kind", "template") if not hasattr(cls, name)]
        if missing:
            raise TypeError(f"{cls.__name__} must define {', '.join(missing)}")

    def __init__(self, item: str, path: str | None = None, extension: str = ""):
        self.item = item
        self.path = path or item
        self.extension = extension
        super().__init__(self.describe(html=False))

    def describe(self, html: bool = False) -> str:
        return self.template.format(
            path=_code(self.path, html),
            directory=self.path,
            extension=_strong(self.extension, html),
        )


class DirectoryNotFoundError(ImportFailure):
    kind = ErrorKind.DIRECTORY_NOT_FOUND
    template = "O diretório {path} não existe."


class ScriptNotFoundError(ImportFailure):
    kind = ErrorKind.FILE_NOT_FOUND
    template = "O arquivo {path} não existe."


class InvalidExtensionError(ImportFailure):
    kind = ErrorKind.INVALID_EXTENSION
    template = (
        "O arquivo {path} não parece ser um script válido porque não possui a extensão "
        "{extension}. Apenas arquivos {extension} são permitidos."
    )

    def __init__(self, item: str, extension: str, path: str | None = None):
        super().__init__(item, path, extension)


class EmptyDirectoryError(ImportFailure):
    kind = ErrorKind.EMPTY_DIRECTORY
    template = "Não foram encontrados arquivos {extension} no diretório {directory}."

    def __init__(self, item: str, extension: str):
        super().__init__(item, extension=extension)


class LoadFailureError(ImportFailure):
    """Wraps whatever the loader raised; the original exception is ``__cause__``."""

    kind = ErrorKind.LOAD_FAILURE
    template = "Ocorreu um erro ao carregar o arquivo {path}."


__all__ = [
    "DirectoryNotFoundError",
    "EmptyDirectoryError",
    "ImportFailure",
    "InvalidArgumentError",
    "InvalidExtensionError",
    "LoadFailureError",
    "ScriptNotFoundError",
]
