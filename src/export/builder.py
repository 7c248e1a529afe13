"""
Court-defensible export record builder.

Combines a formatted citation, the document's provenance and the
caller's annotations into one CourtDefensibleExportRecord.
"""

import logging
from typing import Optional

from src.citations.formatter import CitationFormatter
from src.citations.models import CitationMetadata
from src.export.models import (
    CitationAnnotations,
    CourtDefensibleExportRecord,
    ExportOptions,
    ExportRecordMetadata,
)
from src.verification.models import ProvenancePanel
from src.verification.provenance import ProvenanceStore

logger = logging.getLogger(__name__)


class ExportRecordBuilder:
    """
    Builds one export record per citation request.

    The builder is stateless apart from its provenance store; provenance
    is only resolved when the caller asked for metadata.

    Example:
        builder = ExportRecordBuilder(provenance_store=store)
        record = await builder.build(metadata, ExportOptions.default())
        print(record.citation)
    """

    def __init__(self, provenance_store: Optional[ProvenanceStore] = None):
        """
        Initialize the builder.

        Args:
            provenance_store: Optional store resolving ProvenancePanel by
                document id. Without one, records carry document metadata only.
        """
        self.provenance_store = provenance_store

    async def build(
        self,
        metadata: CitationMetadata,
        options: ExportOptions,
        annotations: Optional[CitationAnnotations] = None,
    ) -> CourtDefensibleExportRecord:
        """
        Build a court-defensible export record.

        Args:
            metadata: Citation input bundle captured at request time
            options: Export options; citation_style selects the formatter rule
            annotations: Saved-citation notes, tags, collections, access count

        Returns:
            CourtDefensibleExportRecord

        Raises:
            InvalidMetadata: section or document id is missing
            CorruptProvenance: the store returned invalid provenance
        """
        annotations = annotations or CitationAnnotations()
        citation = CitationFormatter.format(metadata, options.citation_style)

        provenance = None
        if options.include_metadata and self.provenance_store is not None:
            provenance = await self.provenance_store.get_provenance(metadata.document.id)

        record_kwargs = {}
        text = metadata.section.text
        if options.include_full_text and text and text.strip():
            record_kwargs["full_text"] = text

        return CourtDefensibleExportRecord(
            citation=citation,
            metadata=self._project_metadata(metadata, options, provenance),
            user_notes=annotations.notes,
            tags=annotations.tags,
            collections=annotations.collections,
            access_count=annotations.access_count,
            **record_kwargs,
        )

    @staticmethod
    def _project_metadata(
        metadata: CitationMetadata,
        options: ExportOptions,
        provenance: Optional[ProvenancePanel],
    ) -> ExportRecordMetadata:
        section, document = metadata.section, metadata.document
        identity = {
            "section_reference": section.title or section.number,
            "document_title": document.title,
            "jurisdiction": metadata.jurisdiction.name,
        }
        if not options.include_metadata:
            return ExportRecordMetadata(**identity)

        fields = dict(
            identity,
            authority_level=document.authority_level,
            verification_status=metadata.verification_status,
            document_type=document.type,
            canonical_citation=section.canonical_citation,
            effective_date=document.effective_date.isoformat() if document.effective_date else None,
            source_url=metadata.source_url,
            last_verified=metadata.last_verified,
            retrieval_date=metadata.retrieval_date,
            export_date=metadata.export_date,
            exported_by=metadata.user_id,
        )

        if provenance is not None:
            entry = provenance.source_registry_entry
            retrieval = provenance.retrieval_metadata
            fields.update(
                official_source=entry.is_official_source,
                publisher=entry.publisher,
                official_url=entry.official_url,
                curator_justification=entry.curator_justification,
                retrieval_method=entry.retrieval_method,
                retrieved_at=retrieval.retrieved_at,
                checksum=retrieval.checksum,
                parsing_method=retrieval.parsing_method,
                verification_chain=provenance.verification_chain,
                version_snapshot=provenance.version_snapshot,
            )
        else:
            logger.debug("No provenance resolved for document %s", document.id)

        return ExportRecordMetadata(**fields)
