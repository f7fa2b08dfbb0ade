from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping

from batchimport.loaders.base import Loader

logger = logging.getLogger(__name__)


class NamespaceLoader(Loader):
    """
    Execute scripts into one shared globals mapping.

    Every script sees the names defined by scripts loaded before it, the same way
    successive ``exec`` calls on a single namespace behave.
    """

    def __init__(self, namespace: MutableMapping[str, Any] | None = None) -> None:
        self.namespace: MutableMapping[str, Any] = namespace if namespace is not None else {}
        self.namespace.setdefault("__name__", "__batchimport__")

    def load(self, path: str) -> None:
        script = Path(path)
        source = script.read_bytes()
        code = compile(source, str(script), "exec", dont_inherit=True)
        previous_file = self.namespace.get("__file__")
        self.namespace["__file__"] = str(script)
        try:
            exec(code, self.namespace)  # noqa: S102 - executing caller-selected scripts is the point
        finally:
            if previous_file is None:
                self.namespace.pop("__file__", None)
            else:
                self.namespace["__file__"] = previous_file
        logger.debug("Executed script into shared namespace", extra={"path": str(script)})
