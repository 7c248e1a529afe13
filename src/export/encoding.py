"""Helpers shared by the export encoders."""

from datetime import datetime

from src.core.errors import EncodingFailure
from src.export.models import ExportFormat, ExportJobMeta, ExportResult

BATCH_FILENAME_PREFIX = "citation-library-batch"
EXPORT_TYPE = "citation-library-batch"


def batch_filename(exported_at: datetime, export_format: ExportFormat) -> str:
    """citation-library-batch-<YYYY-MM-DD>.<ext>"""
    return f"{BATCH_FILENAME_PREFIX}-{exported_at.date().isoformat()}.{export_format.extension}"


def to_result(
    content: str,
    export_format: ExportFormat,
    job_meta: ExportJobMeta,
    record_count: int,
) -> ExportResult:
    """Encode content as UTF-8 and wrap it in an ExportResult."""
    try:
        content_bytes = content.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingFailure(export_format.value, str(e)) from e

    return ExportResult(
        format=export_format,
        content_bytes=content_bytes,
        filename=batch_filename(job_meta.exported_at, export_format),
        mime_type=export_format.mime_type,
        record_count=record_count,
    )
