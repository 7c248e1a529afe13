"""
Error taxonomy for citation export.

- InvalidMetadata: a required identity field is missing at format time
- CorruptProvenance: provenance chain or source registry validation failed
- MissingReference: a section/document/jurisdiction id did not resolve
- EncodingFailure: an encoder could not represent the record collection
- BatchExportFailed: terminal failure of a whole batch
"""

from typing import Optional


class CitationExportError(Exception):
    """Base class for all citation export errors."""


class InvalidMetadata(CitationExportError):
    """A required identity field (section id, document id) is missing."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Required identity field '{field}' is missing")


class CorruptProvenance(CitationExportError):
    """Provenance data failed structural validation."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Corrupt provenance: {reason}")


class MissingReference(CitationExportError):
    """A joined lookup for a section, document or jurisdiction failed."""

    def __init__(self, kind: str, ref_id: str):
        self.kind = kind
        self.ref_id = ref_id
        super().__init__(f"Unknown {kind} id '{ref_id}'")


class EncodingFailure(CitationExportError):
    """An encoder could not serialize the export."""

    def __init__(self, format: str, reason: str):
        self.format = format
        self.reason = reason
        super().__init__(f"Failed to encode {format} export: {reason}")


class BatchExportFailed(CitationExportError):
    """A batch export aborted; no partial output is produced."""

    def __init__(self, index: int, cause: BaseException):
        self.index = index
        self.cause = cause
        super().__init__(f"Batch export failed at item {index + 1}: {cause}")
