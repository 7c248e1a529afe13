"""
Single-citation export path.

copy_citation() formats directly for clipboard use; quick_export()
builds one record and encodes it without going through the batch
pipeline.
"""

import time
from datetime import datetime
from typing import Optional, Union

from src.citations.formatter import CitationFormatter
from src.citations.models import CitationMetadata, CitationStyle
from src.export.builder import ExportRecordBuilder
from src.export.encoders import get_encoder
from src.export.models import CitationAnnotations, ExportJobMeta, ExportOptions, ExportResult
from src.verification.audit import ExportAuditEvent, get_audit_logger, log_export_event

_audit_logger = get_audit_logger("quick_export")


def copy_citation(metadata: CitationMetadata, style: Union[CitationStyle, str]) -> str:
    """Citation text for the clipboard; no record, no file."""
    return CitationFormatter.format(metadata, style)


def quick_export_filename(
    section_id: str,
    style: CitationStyle,
    exported_at: datetime,
    extension: str,
) -> str:
    """citation_<section>_<style>_<YYYY-MM-DDTHH-MM-SS>.<ext>"""
    timestamp = exported_at.strftime("%Y-%m-%dT%H-%M-%S")
    return f"citation_{section_id}_{style.value}_{timestamp}.{extension}"


async def quick_export(
    metadata: CitationMetadata,
    options: ExportOptions,
    builder: Optional[ExportRecordBuilder] = None,
    annotations: Optional[CitationAnnotations] = None,
) -> ExportResult:
    """
    Export a single citation as a file.

    Args:
        metadata: Citation input bundle captured at request time
        options: Export options (style, format, full text, metadata)
        builder: Record builder; a builder without provenance store is used
            when omitted
        annotations: Optional saved-citation annotations

    Returns:
        ExportResult named after the section and style

    Raises:
        InvalidMetadata: section or document id is missing
        CorruptProvenance: the store returned invalid provenance
        EncodingFailure: the record could not be encoded
    """
    builder = builder or ExportRecordBuilder()
    start = time.perf_counter()

    try:
        record = await builder.build(metadata, options, annotations)
        job_meta = ExportJobMeta(
            exported_at=metadata.export_date,
            exported_by=metadata.user_id,
            citation_style=options.citation_style,
        )
        result = get_encoder(options.format)([record], job_meta)
    except Exception as e:
        _audit(metadata, options, 0, "FAILED", start, reason=str(e))
        raise

    _audit(metadata, options, 1, "SUCCESS", start)
    return result.model_copy(update={
        "filename": quick_export_filename(
            metadata.section.id,
            options.citation_style,
            metadata.export_date,
            options.format.extension,
        ),
    })


def _audit(
    metadata: CitationMetadata,
    options: ExportOptions,
    item_count: int,
    result: str,
    start: float,
    reason: Optional[str] = None,
) -> None:
    log_export_event(
        _audit_logger,
        ExportAuditEvent(
            entity_type="citation",
            entity_id=metadata.section.id,
            user_id=metadata.user_id,
            format=options.format.value,
            citation_style=options.citation_style.value,
            item_count=item_count,
            result=result,
            duration_ms=int((time.perf_counter() - start) * 1000),
            reason=reason,
        ),
    )
