"""Encoder lookup by export format."""

from typing import Callable, Sequence, Union

from src.export import csv_encoder, json_encoder, text_encoder
from src.export.models import (
    CourtDefensibleExportRecord,
    ExportFormat,
    ExportJobMeta,
    ExportResult,
)

Encoder = Callable[[Sequence[CourtDefensibleExportRecord], ExportJobMeta], ExportResult]

ENCODERS: dict[ExportFormat, Encoder] = {
    ExportFormat.JSON: json_encoder.encode,
    ExportFormat.CSV: csv_encoder.encode,
    ExportFormat.TXT: text_encoder.encode,
}


def get_encoder(export_format: Union[ExportFormat, str]) -> Encoder:
    """Return the encoder for a format; raises ValueError for unknown formats."""
    return ENCODERS[ExportFormat(export_format)]
