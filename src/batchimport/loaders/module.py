from __future__ import annotations

import importlib.util
import logging
import re
import sys
from pathlib import Path
from types import ModuleType

from batchimport.loaders.base import Loader

logger = logging.getLogger(__name__)
_INVALID_NAME_CHARS = re.compile(r"\W")


class ModuleLoader(Loader):
    """Import each script as its own module registered under ``package``."""

    def __init__(self, package: str = "batchimport.loaded") -> None:
        self.package = package
        self.modules: dict[str, ModuleType] = {}

    def module_name(self, path: str) -> str:
        stem = _INVALID_NAME_CHARS.sub("_", Path(path).stem)
        if stem[:1].isdigit():
            stem = f"_{stem}"
        name = f"{self.package}.{stem}"
        candidate, counter = name, 2
        while candidate in self.modules or candidate in sys.modules:
            candidate = f"{name}_{counter}"
            counter += 1
        return candidate

    def load(self, path: str) -> None:
        script = Path(path)
        name = self.module_name(path)
        spec = importlib.util.spec_from_file_location(name, script)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot build a module spec for {script}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(name, None)
            raise
        self.modules[name] = module
        logger.debug("Imported script as module", extra={"path": str(script), "module_name": name})
