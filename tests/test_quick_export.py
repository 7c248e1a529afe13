"""Tests for clipboard copy and single-citation export."""

import json

import pytest

from src.citations.models import CitationStyle
from src.export.builder import ExportRecordBuilder
from src.export.models import CitationAnnotations, ExportFormat, ExportOptions
from src.export.quick import copy_citation, quick_export, quick_export_filename


def test_copy_citation_matches_formatter(metadata):
    assert copy_citation(metadata, "mla") == copy_citation(metadata, CitationStyle.MLA)
    assert copy_citation(metadata, CitationStyle.PLAIN).startswith(
        "Constitution of the United States, Section Amend. I"
    )


def test_quick_export_filename(now):
    assert quick_export_filename("usc-42-1983", CitationStyle.COURT_FILING, now, "csv") == (
        "citation_usc-42-1983_court-filing_2026-10-17T14-30-00.csv"
    )


@pytest.mark.asyncio
async def test_quick_export_text(metadata):
    result = await quick_export(metadata, ExportOptions.default())

    assert result.filename == "citation_us-const-amend1_bluebook_2026-10-17T14-30-00.txt"
    assert result.mime_type == "text/plain"
    assert result.record_count == 1
    assert "Total Citations: 1" in result.text
    assert f"Citation: {copy_citation(metadata, 'bluebook')}" in result.text


@pytest.mark.asyncio
async def test_quick_export_json_with_provenance(statute_metadata, provenance_store):
    options = ExportOptions(
        citation_style=CitationStyle.COURT_FILING,
        format=ExportFormat.JSON,
        include_full_text=True,
        include_metadata=True,
    )
    result = await quick_export(
        statute_metadata,
        options,
        builder=ExportRecordBuilder(provenance_store),
        annotations=CitationAnnotations(notes="Key remedy", tags=["remedies"]),
    )

    assert result.filename.endswith("_court-filing_2026-10-17T14-30-00.json")
    document = json.loads(result.text)
    (citation,) = document["citations"]
    assert citation["userNotes"] == "Key remedy"
    assert citation["tags"] == ["remedies"]
    assert citation["fullText"] == statute_metadata.section.text
    # No registry entry for Title 42
    assert "publisher" not in citation["metadata"]
