from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from batchimport.errors import ImportFailure


class ErrorKind(str, Enum):
    DIRECTORY_NOT_FOUND = "DirectoryNotFound"
    FILE_NOT_FOUND = "FileNotFound"
    INVALID_EXTENSION = "InvalidExtension"
    EMPTY_DIRECTORY = "EmptyDirectory"
    LOAD_FAILURE = "LoadFailure"


class TargetOrigin(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(slots=True)
class ErrorDetails:
    internal: str
    file: str
    line: int
    trace: str


@dataclass(slots=True)
class ErrorRecord:
    item: str
    message: str
    details: ErrorDetails
    kind: ErrorKind

    def to_dict(self) -> dict[str, Any]:
        return {
            "item": self.item,
            "message": self.message,
            "kind": self.kind.value,
            "details": {
                "internal": self.details.internal,
                "file": self.details.file,
                "line": self.details.line,
                "trace": self.details.trace,
            },
        }


@dataclass(slots=True, frozen=True)
class ImportTarget:
    path: str
    origin: TargetOrigin


@dataclass(slots=True)
class Resolution:
    """Outcome of resolving one requested path, in discovery order."""

    item: str
    targets: list[ImportTarget] = field(default_factory=list)
    failures: list[ImportFailure] = field(default_factory=list)


@dataclass
class ImportReport:
    """Paths loaded and errors recorded by one import batch."""

    loaded: list[str] = field(default_factory=list)
    errors: list[ErrorRecord] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
