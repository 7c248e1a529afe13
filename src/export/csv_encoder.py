"""
CSV encoder for citation library exports.

Column order is fixed; spreadsheet tooling downstream depends on it.
Every cell is quoted, and a record without tags still gets an empty
quoted Tags cell.
"""

import csv
import io
import logging
from typing import Sequence

from src.core.errors import EncodingFailure
from src.export.encoding import to_result
from src.export.models import (
    CourtDefensibleExportRecord,
    ExportFormat,
    ExportJobMeta,
    ExportResult,
)

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Title",
    "Citation",
    "Document",
    "Jurisdiction",
    "Authority Level",
    "Verification Status",
    "Notes",
    "Tags",
    "Access Count",
]

TAG_SEPARATOR = "; "


def _enum_value(value) -> str:
    if value is None:
        return ""
    return getattr(value, "value", value)


def record_row(record: CourtDefensibleExportRecord) -> list[str]:
    """One CSV row, in CSV_HEADERS order."""
    meta = record.metadata
    return [
        meta.section_reference,
        record.citation,
        meta.document_title,
        meta.jurisdiction,
        _enum_value(meta.authority_level),
        _enum_value(meta.verification_status),
        record.user_notes or "",
        TAG_SEPARATOR.join(record.tags),
        str(record.access_count),
    ]


def encode(
    records: Sequence[CourtDefensibleExportRecord],
    job_meta: ExportJobMeta,
) -> ExportResult:
    """Encode records as a CSV export with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    try:
        writer.writerow(CSV_HEADERS)
        writer.writerows(record_row(record) for record in records)
    except csv.Error as e:
        raise EncodingFailure(ExportFormat.CSV.value, str(e)) from e

    logger.debug("Encoded %d citations as CSV", len(records))
    return to_result(buffer.getvalue(), ExportFormat.CSV, job_meta, len(records))
