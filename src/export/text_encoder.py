"""
Plain-text encoder for citation library exports.

Fixed layout for human and legal review. Given identical input the
output is identical line by line apart from the 'Exported:' line, so
repeated exports of the same set can be diffed.
"""

import logging
from typing import Optional, Sequence

from src.core.config import get_settings
from src.export.encoding import to_result
from src.export.models import (
    CourtDefensibleExportRecord,
    ExportFormat,
    ExportJobMeta,
    ExportResult,
)

logger = logging.getLogger(__name__)

RULE_WIDTH = 80
HEAVY_RULE = "=" * RULE_WIDTH
LIGHT_RULE = "-" * RULE_WIDTH


def _banner(job_meta: ExportJobMeta, total: int, platform_name: str) -> list[str]:
    return [
        HEAVY_RULE,
        f"{platform_name.upper()} - BATCH CITATION EXPORT",
        HEAVY_RULE,
        "",
        f"Exported: {job_meta.exported_at.isoformat()}",
        f"Total Citations: {total}",
        f"Citation Style: {job_meta.citation_style.value}",
        f"Exported By: {job_meta.exported_by}",
        "",
        HEAVY_RULE,
        "",
    ]


def record_block(index: int, record: CourtDefensibleExportRecord) -> list[str]:
    """Lines for one record; index is 1-based."""
    meta = record.metadata
    authority = meta.authority_level.value if meta.authority_level else ""
    verification = meta.verification_status.value if meta.verification_status else ""

    lines = [
        f"[{index}] {meta.section_reference}",
        LIGHT_RULE,
        f"Citation: {record.citation}",
        f"Document: {meta.document_title}",
        f"Jurisdiction: {meta.jurisdiction}",
        f"Authority Level: {authority}",
        f"Verification: {verification}",
    ]
    if record.user_notes:
        lines.append(f"Notes: {record.user_notes}")
    if record.tags:
        lines.append(f"Tags: {', '.join(record.tags)}")
    lines.append(f"Access Count: {record.access_count}")
    if record.full_text:
        lines += ["", "Full Text:", record.full_text]
    lines += ["", HEAVY_RULE, ""]
    return lines


def encode(
    records: Sequence[CourtDefensibleExportRecord],
    job_meta: ExportJobMeta,
    platform_name: Optional[str] = None,
) -> ExportResult:
    """Encode records as a plain-text export."""
    platform_name = platform_name or get_settings().platform_name
    lines = _banner(job_meta, len(records), platform_name)
    for index, record in enumerate(records, start=1):
        lines += record_block(index, record)

    logger.debug("Encoded %d citations as text", len(records))
    return to_result("\n".join(lines), ExportFormat.TXT, job_meta, len(records))
