"""
Core infrastructure for the citation export engine.

Provides settings loading and the shared error taxonomy.
"""

from src.core.errors import (
    CitationExportError,
    InvalidMetadata,
    CorruptProvenance,
    MissingReference,
    EncodingFailure,
    BatchExportFailed,
)
from src.core.config import ExportSettings, get_settings
from src.core.models import CamelModel

__all__ = [
    # Errors
    "CitationExportError",
    "InvalidMetadata",
    "CorruptProvenance",
    "MissingReference",
    "EncodingFailure",
    "BatchExportFailed",
    # Settings
    "ExportSettings",
    "get_settings",
    # Models
    "CamelModel",
]
