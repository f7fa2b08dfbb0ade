from __future__ import annotations

from typing import Mapping

from batchimport.loaders.base import Loader


class RecordingLoader(Loader):
    """Fake loader that records calls and fails on demand without executing anything."""

    def __init__(self, failures: Mapping[str, BaseException] | None = None):
        self.calls: list[str] = []
        self._failures = dict(failures or {})

    def fail_on(self, path: str, exc: BaseException | None = None) -> None:
        self._failures[path] = exc or RuntimeError(f"Simulated failure loading {path}")

    def load(self, path: str) -> None:
        self.calls.append(path)
        exc = self._failures.get(path)
        if exc is not None:
            raise exc
