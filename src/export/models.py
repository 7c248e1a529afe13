"""
Export models for court-defensible citation export.

Provides data structures for:
- Export format enumeration (TXT, JSON, CSV) and user-chosen ExportOptions
- Caller-attached annotations and batch citation requests
- The CourtDefensibleExportRecord produced per citation
- Batch job progress and encoder job metadata
- Export result with bytes, filename, and content type
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, computed_field

from src.citations.models import AuthorityLevel, CitationStyle, DocumentVerificationStatus
from src.core.models import CamelModel
from src.verification.models import VerificationChain, VersionSnapshot


class ExportFormat(str, Enum):
    """Supported export file encodings."""
    TXT = "txt"
    JSON = "json"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]


_MIME_TYPES = {
    ExportFormat.TXT: "text/plain",
    ExportFormat.JSON: "application/json",
    ExportFormat.CSV: "text/csv",
}


class ExportOptions(CamelModel):
    """
    User-chosen export configuration.

    Style and format are independent: any style pairs with any format.
    Every field is required; default() is the only source of defaults.
    """

    citation_style: CitationStyle
    format: ExportFormat
    include_full_text: bool
    include_metadata: bool

    @classmethod
    def default(cls) -> "ExportOptions":
        return cls(
            citation_style=CitationStyle.BLUEBOOK,
            format=ExportFormat.TXT,
            include_full_text=False,
            include_metadata=True,
        )


def _ordered_set(values: tuple[str, ...]) -> tuple[str, ...]:
    # First occurrence wins
    return tuple(dict.fromkeys(values))


OrderedSet = Annotated[tuple[str, ...], AfterValidator(_ordered_set)]


class CitationAnnotations(CamelModel):
    """User annotations from the saved-citation store."""

    notes: str = ""
    tags: OrderedSet = ()
    collections: OrderedSet = ()
    access_count: int = Field(default=0, ge=0)


class CitationRequest(CamelModel):
    """One batch item: ids to join plus the saved citation's annotations."""

    id: Optional[str] = Field(default=None, description="Saved citation id, if any")
    section_id: str
    document_id: str
    jurisdiction_id: str
    annotations: CitationAnnotations = Field(default_factory=CitationAnnotations)


class ExportRecordMetadata(CamelModel):
    """
    Flattened, display-ready projection of citation metadata.

    The identity fields are always present. Everything else is filled
    only when the caller asked for metadata, and provenance fields only
    when a provenance panel was resolved.
    """

    model_config = ConfigDict(frozen=True)

    # Identity
    section_reference: str
    document_title: str
    jurisdiction: str

    # Document metadata
    authority_level: Optional[AuthorityLevel] = None
    verification_status: Optional[DocumentVerificationStatus] = None
    document_type: Optional[str] = None
    canonical_citation: Optional[str] = None
    effective_date: Optional[str] = None
    source_url: Optional[str] = None
    last_verified: Optional[datetime] = None
    retrieval_date: Optional[str] = None
    export_date: Optional[datetime] = None
    exported_by: Optional[str] = None

    # Provenance
    official_source: Optional[bool] = None
    publisher: Optional[str] = None
    official_url: Optional[str] = None
    curator_justification: Optional[str] = None
    retrieval_method: Optional[str] = None
    retrieved_at: Optional[datetime] = None
    checksum: Optional[str] = None
    parsing_method: Optional[str] = None
    verification_chain: Optional[VerificationChain] = None
    version_snapshot: Optional[VersionSnapshot] = None


class CourtDefensibleExportRecord(CamelModel):
    """One exported citation with its provenance and annotations."""

    model_config = ConfigDict(frozen=True)

    citation: str
    metadata: ExportRecordMetadata
    full_text: Optional[str] = Field(
        default=None,
        description="Section text; absent unless requested and available"
    )
    user_notes: str = ""
    tags: OrderedSet = ()
    collections: OrderedSet = ()
    access_count: int = Field(default=0, ge=0)

    def to_wire(self) -> dict:
        """JSON-ready dict with camelCase keys; absent optionals are dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BatchExportJob(BaseModel):
    """Progress of one batch run. Lives only for the duration of the batch."""

    items: tuple[CitationRequest, ...]
    completed_count: int = Field(default=0, ge=0)

    @computed_field
    @property
    def total_count(self) -> int:
        return len(self.items)

    @property
    def progress(self) -> float:
        if self.total_count == 0:
            return 1.0
        return self.completed_count / self.total_count

    def advance(self) -> float:
        """Mark one more item processed and return the new progress fraction."""
        self.completed_count += 1
        return self.progress


class ExportJobMeta(CamelModel):
    """Batch-level metadata written into every encoding."""

    exported_at: datetime
    exported_by: str
    citation_style: CitationStyle


class ExportResult(BaseModel):
    """Result of an export operation."""

    format: ExportFormat = Field(
        description="Export format used"
    )
    content_bytes: bytes = Field(
        description="Raw UTF-8 bytes of the exported file"
    )
    filename: str = Field(
        description="Suggested filename for the exported file"
    )
    mime_type: str = Field(
        description="Content type for the download"
    )
    record_count: int = Field(
        default=0,
        ge=0,
        description="Number of citation records in the file"
    )

    @property
    def text(self) -> str:
        return self.content_bytes.decode("utf-8")
