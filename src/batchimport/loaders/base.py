from __future__ import annotations

from typing import Protocol


class Loader(Protocol):
    """Interface for executing one script inside the running process."""

    def load(self, path: str) -> None:
        """Execute the script at ``path``; raise on any failure."""
