"""
JSON encoder for citation library exports.

Emits one object:
    {exportType, exportedAt, exportedBy, totalCitations, citationStyle, citations}
Optional record fields that are absent are omitted rather than null.
decode() restores the record collection in order.
"""

import json
import logging
from typing import Sequence, Union

from pydantic import ValidationError

from src.core.errors import EncodingFailure
from src.export.encoding import EXPORT_TYPE, to_result
from src.export.models import (
    CourtDefensibleExportRecord,
    ExportFormat,
    ExportJobMeta,
    ExportResult,
)

logger = logging.getLogger(__name__)


def build_document(
    records: Sequence[CourtDefensibleExportRecord],
    job_meta: ExportJobMeta,
) -> dict:
    """Return the JSON-ready export object."""
    return {
        "exportType": EXPORT_TYPE,
        "exportedAt": job_meta.exported_at.isoformat(),
        "exportedBy": job_meta.exported_by,
        "totalCitations": len(records),
        "citationStyle": job_meta.citation_style.value,
        "citations": [record.to_wire() for record in records],
    }


def encode(
    records: Sequence[CourtDefensibleExportRecord],
    job_meta: ExportJobMeta,
) -> ExportResult:
    """Encode records as a JSON export."""
    try:
        content = json.dumps(build_document(records, job_meta), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise EncodingFailure(ExportFormat.JSON.value, str(e)) from e

    logger.debug("Encoded %d citations as JSON", len(records))
    return to_result(content, ExportFormat.JSON, job_meta, len(records))


def decode(content: Union[str, bytes]) -> tuple[dict, list[CourtDefensibleExportRecord]]:
    """
    Parse a JSON export back into its header and records.

    Returns:
        (header, records) where header holds every top-level key except
        'citations'

    Raises:
        ValueError: content is not a citation library export
        CorruptProvenance: a record's provenance fails validation, e.g.
            an out-of-order verification chain
    """
    data = json.loads(content)
    if not isinstance(data, dict) or data.get("exportType") != EXPORT_TYPE:
        raise ValueError("Not a citation library batch export")

    try:
        records = [
            CourtDefensibleExportRecord.model_validate(item)
            for item in data.get("citations", [])
        ]
    except ValidationError as e:
        raise ValueError(f"Invalid citation record in export: {e}") from e

    header = {k: v for k, v in data.items() if k != "citations"}
    return header, records
