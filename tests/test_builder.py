"""Tests for the court-defensible export record builder."""

from unittest.mock import patch

import pytest

from src.citations.formatter import CitationFormatter
from src.citations.models import CitationMetadata, CitationStyle
from src.core.errors import CorruptProvenance, InvalidMetadata
from src.export.builder import ExportRecordBuilder
from src.export.models import CitationAnnotations, ExportFormat, ExportOptions


def _options(**overrides) -> ExportOptions:
    return ExportOptions.default().model_copy(update=overrides)


class FailingStore:
    async def get_provenance(self, document_id):
        raise CorruptProvenance(f"chain for {document_id} is out of order")


class RecordingStore:
    def __init__(self):
        self.calls = []

    async def get_provenance(self, document_id):
        self.calls.append(document_id)
        return None


# ── Citation ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_formatter_called_once_with_selected_style(metadata):
    builder = ExportRecordBuilder()
    with patch.object(
        CitationFormatter, "format", wraps=CitationFormatter.format
    ) as spy:
        record = await builder.build(metadata, _options(citation_style=CitationStyle.APA))

    spy.assert_called_once_with(metadata, CitationStyle.APA)
    assert record.citation == CitationFormatter.format(metadata, CitationStyle.APA)


@pytest.mark.asyncio
async def test_invalid_metadata_propagates(metadata):
    section = metadata.section.model_copy(update={"id": ""})
    md = metadata.model_copy(update={"section": section})
    with pytest.raises(InvalidMetadata):
        await ExportRecordBuilder().build(md, ExportOptions.default())


# ── Full text ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_full_text_included_when_requested(metadata, first_amendment):
    record = await ExportRecordBuilder().build(metadata, _options(include_full_text=True))
    assert record.full_text == first_amendment.text
    assert record.to_wire()["fullText"] == first_amendment.text


@pytest.mark.asyncio
async def test_full_text_omitted_when_not_requested(metadata):
    record = await ExportRecordBuilder().build(metadata, _options(include_full_text=False))
    assert record.full_text is None
    assert "fullText" not in record.to_wire()


@pytest.mark.asyncio
async def test_full_text_omitted_when_section_has_no_text(
    ca_inalienable_rights, ca_constitution, california, now
):
    md = CitationMetadata.capture(
        ca_inalienable_rights, ca_constitution, california, "user-42", now=now
    )
    record = await ExportRecordBuilder().build(md, _options(include_full_text=True))
    assert record.full_text is None
    assert "fullText" not in record.to_wire()


# ── Metadata projection ──────────────────────────────────────────────


@pytest.mark.asyncio
async def test_metadata_with_provenance(metadata, provenance_store, nara_entry):
    record = await ExportRecordBuilder(provenance_store).build(metadata, ExportOptions.default())
    meta = record.metadata

    assert meta.section_reference == metadata.section.title
    assert meta.document_title == "Constitution of the United States"
    assert meta.jurisdiction == "United States (Federal)"
    assert meta.authority_level.value == "federal"
    assert meta.verification_status.value == "official"
    assert meta.canonical_citation == "U.S. Const. amend. I"
    assert meta.effective_date == "1789-03-04"
    assert meta.retrieval_date == "October 17, 2026"
    assert meta.exported_by == "user-42"
    assert meta.official_source is True
    assert meta.publisher == nara_entry.publisher
    assert meta.checksum == "nara-const-2025"
    assert meta.parsing_method == "manual"
    assert [s.verified_by for s in meta.verification_chain] == ["Curator"]


@pytest.mark.asyncio
async def test_metadata_without_provenance_store(metadata):
    record = await ExportRecordBuilder().build(metadata, ExportOptions.default())
    assert record.metadata.authority_level is not None
    assert record.metadata.publisher is None
    assert record.metadata.verification_chain is None


@pytest.mark.asyncio
async def test_metadata_opt_out_has_identity_only(metadata, provenance_store):
    record = await ExportRecordBuilder(provenance_store).build(
        metadata, _options(include_metadata=False)
    )
    wire = record.to_wire()
    assert set(wire["metadata"]) == {"sectionReference", "documentTitle", "jurisdiction"}
    assert wire["citation"] == record.citation


@pytest.mark.asyncio
async def test_metadata_opt_out_skips_provenance_lookup(metadata):
    store = RecordingStore()
    await ExportRecordBuilder(store).build(metadata, _options(include_metadata=False))
    assert store.calls == []


@pytest.mark.asyncio
async def test_provenance_looked_up_by_document_id(metadata):
    store = RecordingStore()
    await ExportRecordBuilder(store).build(metadata, ExportOptions.default())
    assert store.calls == ["us-constitution"]


@pytest.mark.asyncio
async def test_corrupt_provenance_propagates(metadata):
    with pytest.raises(CorruptProvenance):
        await ExportRecordBuilder(FailingStore()).build(metadata, ExportOptions.default())


# ── Annotations ──────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_annotations_attached(metadata):
    annotations = CitationAnnotations(
        notes="Cite in brief",
        tags=["speech", "press", "speech"],
        collections=["Moot court"],
        access_count=7,
    )
    record = await ExportRecordBuilder().build(metadata, ExportOptions.default(), annotations)

    assert record.user_notes == "Cite in brief"
    assert record.tags == ("speech", "press")
    assert record.collections == ("Moot court",)
    assert record.access_count == 7


@pytest.mark.asyncio
async def test_defaults_without_annotations(metadata):
    record = await ExportRecordBuilder().build(metadata, ExportOptions.default())
    assert record.user_notes == ""
    assert record.tags == ()
    assert record.access_count == 0


def test_negative_access_count_rejected():
    with pytest.raises(ValueError):
        CitationAnnotations(access_count=-1)


def test_style_and_format_are_independent():
    for style in CitationStyle:
        for fmt in ExportFormat:
            options = ExportOptions(
                citation_style=style, format=fmt, include_full_text=True, include_metadata=False
            )
            assert options.citation_style == style
            assert options.format == fmt


def test_export_options_have_no_implicit_defaults():
    with pytest.raises(ValueError):
        ExportOptions(citation_style="bluebook")
