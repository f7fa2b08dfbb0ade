"""Batch loading of Python scripts with a structured error report."""

from importlib import metadata

from batchimport.config import Settings, load_settings
from batchimport.errors import ImportFailure, InvalidArgumentError
from batchimport.importer import Importer, import_scripts
from batchimport.types import ErrorDetails, ErrorKind, ErrorRecord, ImportReport

__all__ = [
    "ErrorDetails",
    "ErrorKind",
    "ErrorRecord",
    "ImportFailure",
    "ImportReport",
    "Importer",
    "InvalidArgumentError",
    "Settings",
    "__version__",
    "import_scripts",
    "load_settings",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("batchimport")
        except metadata.PackageNotFoundError:  # pragma: no cover - package not installed yet
            return "0.0.0"
    raise AttributeError(name)
