from .base import Loader
from .mock import RecordingLoader
from .module import ModuleLoader
from .namespace import NamespaceLoader

__all__ = [
    "Loader",
    "ModuleLoader",
    "NamespaceLoader",
    "RecordingLoader",
]
