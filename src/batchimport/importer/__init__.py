from .pipeline import Importer, error_details, import_scripts, normalize_request, summary_line
from .resolve import resolve_path

__all__ = [
    "Importer",
    "error_details",
    "import_scripts",
    "normalize_request",
    "resolve_path",
    "summary_line",
]
