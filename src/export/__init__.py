"""
Export module for court-defensible citation export.

Builds export records that pair a formatted citation with provenance,
runs batches of citation requests, and encodes them as JSON, CSV or
plain text.

Classes:
    ExportRecordBuilder: Build one CourtDefensibleExportRecord
    BatchExportPipeline: Sequential batch export with progress reporting
    ReferenceCollections: Id lookup for sections, documents, jurisdictions
    ExportOptions: Citation style, format, full text and metadata switches
    ExportResult: Result model with bytes, filename and mime type
"""

from src.export.models import (
    ExportFormat,
    ExportOptions,
    CitationAnnotations,
    CitationRequest,
    ExportRecordMetadata,
    CourtDefensibleExportRecord,
    BatchExportJob,
    ExportJobMeta,
    ExportResult,
)
from src.export.builder import ExportRecordBuilder
from src.export.encoders import get_encoder
from src.export.batch import BatchExportPipeline, ReferenceCollections
from src.export.quick import copy_citation, quick_export

__all__ = [
    # Models
    "ExportFormat",
    "ExportOptions",
    "CitationAnnotations",
    "CitationRequest",
    "ExportRecordMetadata",
    "CourtDefensibleExportRecord",
    "BatchExportJob",
    "ExportJobMeta",
    "ExportResult",
    # Builder and pipeline
    "ExportRecordBuilder",
    "BatchExportPipeline",
    "ReferenceCollections",
    # Encoders
    "get_encoder",
    # Single-citation export
    "copy_citation",
    "quick_export",
]
