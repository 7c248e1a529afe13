"""
Batch export pipeline for the citation library.

Runs the record builder over an ordered list of citation requests, one
at a time, and encodes the result into a single file.

Failure policy:
- A request whose section, document or jurisdiction id does not resolve
  is skipped (logged, excluded from the output) and the batch continues.
- Any other error while building an item aborts the whole batch with
  BatchExportFailed; no records and no file are produced.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Sequence

from src.citations.models import CitationMetadata, Document, Jurisdiction, Section
from src.core.errors import BatchExportFailed, MissingReference
from src.export.builder import ExportRecordBuilder
from src.export.encoders import get_encoder
from src.export.models import (
    BatchExportJob,
    CitationRequest,
    CourtDefensibleExportRecord,
    ExportJobMeta,
    ExportOptions,
    ExportResult,
)
from src.verification.audit import ExportAuditEvent, get_audit_logger, log_export_event

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


class ReferenceCollections:
    """Caller-supplied sections, documents and jurisdictions, indexed by id."""

    def __init__(
        self,
        sections: Iterable[Section] = (),
        documents: Iterable[Document] = (),
        jurisdictions: Iterable[Jurisdiction] = (),
    ):
        self.sections = {s.id: s for s in sections}
        self.documents = {d.id: d for d in documents}
        self.jurisdictions = {j.id: j for j in jurisdictions}

    def resolve(self, request: CitationRequest) -> tuple[Section, Document, Jurisdiction]:
        """
        Join a request's ids against the collections.

        Raises:
            MissingReference: naming the first id that did not resolve
        """
        section = self.sections.get(request.section_id)
        if section is None:
            raise MissingReference("section", request.section_id)
        document = self.documents.get(request.document_id)
        if document is None:
            raise MissingReference("document", request.document_id)
        jurisdiction = self.jurisdictions.get(request.jurisdiction_id)
        if jurisdiction is None:
            raise MissingReference("jurisdiction", request.jurisdiction_id)
        return section, document, jurisdiction


class BatchExportPipeline:
    """
    Sequential batch exporter.

    Items are processed strictly in input order so repeated exports of
    the same set produce identical files.

    Example:
        pipeline = BatchExportPipeline(builder, references)
        result = await pipeline.export(requests, options, user_id="u-1",
                                       on_progress=lambda f: print(f"{f:.0%}"))
        with open(result.filename, "wb") as f:
            f.write(result.content_bytes)
    """

    def __init__(self, builder: ExportRecordBuilder, references: ReferenceCollections):
        self.builder = builder
        self.references = references
        self.audit_logger = get_audit_logger("batch_export")

    async def run_batch(
        self,
        requests: Sequence[CitationRequest],
        options: ExportOptions,
        user_id: str,
        on_progress: Optional[ProgressCallback] = None,
        now: Optional[datetime] = None,
    ) -> list[CourtDefensibleExportRecord]:
        """
        Build one record per resolvable request.

        Args:
            requests: Ordered citation requests
            options: Export options shared by every record
            user_id: Exporting user, stamped into each record
            on_progress: Called after every item with completed/total;
                the last call reports exactly 1.0
            now: Export time; defaults to the current UTC time

        Returns:
            Records for the requests that resolved, in input order

        Raises:
            BatchExportFailed: an item failed for any reason other than a
                missing reference
        """
        records, _ = await self._build_all(requests, options, user_id, on_progress, now)
        return records

    async def _build_all(
        self,
        requests: Sequence[CitationRequest],
        options: ExportOptions,
        user_id: str,
        on_progress: Optional[ProgressCallback],
        now: Optional[datetime],
    ) -> tuple[list[CourtDefensibleExportRecord], int]:
        job = BatchExportJob(items=tuple(requests))
        records: list[CourtDefensibleExportRecord] = []
        skipped = 0

        for index, request in enumerate(job.items):
            try:
                section, document, jurisdiction = self.references.resolve(request)
            except MissingReference as e:
                skipped += 1
                logger.info("Skipping citation request %d: %s", index + 1, e)
            else:
                metadata = CitationMetadata.capture(
                    section, document, jurisdiction, user_id, now=now
                )
                try:
                    record = await self.builder.build(metadata, options, request.annotations)
                except Exception as e:
                    logger.error("Batch export aborted at item %d: %s", index + 1, e)
                    raise BatchExportFailed(index, e) from e
                records.append(record)

            fraction = job.advance()
            if on_progress is not None:
                on_progress(fraction)

        logger.info(
            "Batch built %d of %d citations (%d skipped)",
            len(records), job.total_count, skipped,
        )
        return records, skipped

    async def export(
        self,
        requests: Sequence[CitationRequest],
        options: ExportOptions,
        user_id: str,
        on_progress: Optional[ProgressCallback] = None,
        now: Optional[datetime] = None,
    ) -> ExportResult:
        """
        Run the batch and encode it with the encoder for options.format.

        Returns:
            ExportResult with content bytes, filename and mime type

        Raises:
            BatchExportFailed: building an item failed
            EncodingFailure: the records could not be encoded
        """
        now = now or datetime.now(timezone.utc)
        start = time.perf_counter()
        batch_id = f"batch-{now.strftime('%Y-%m-%dT%H-%M-%S')}"

        try:
            records, skipped = await self._build_all(requests, options, user_id, on_progress, now)
            job_meta = ExportJobMeta(
                exported_at=now,
                exported_by=user_id,
                citation_style=options.citation_style,
            )
            result = get_encoder(options.format)(records, job_meta)
        except Exception as e:
            self._audit(batch_id, user_id, options, 0, 0, "FAILED", start, reason=str(e))
            raise

        self._audit(batch_id, user_id, options, len(records), skipped, "SUCCESS", start)
        return result

    def _audit(
        self,
        batch_id: str,
        user_id: str,
        options: ExportOptions,
        item_count: int,
        skipped_count: int,
        result: str,
        start: float,
        reason: Optional[str] = None,
    ) -> None:
        log_export_event(
            self.audit_logger,
            ExportAuditEvent(
                entity_type="batch-citation",
                entity_id=batch_id,
                user_id=user_id,
                format=options.format.value,
                citation_style=options.citation_style.value,
                item_count=item_count,
                skipped_count=skipped_count,
                result=result,
                duration_ms=int((time.perf_counter() - start) * 1000),
                reason=reason,
            ),
        )
