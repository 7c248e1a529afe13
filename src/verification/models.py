"""
Pydantic models for document provenance.

Provides data structures for:
- Source registry entries (where a document was obtained)
- Retrieval metadata recorded at ingestion time
- The append-only verification chain (audit trail of authenticity checks)
- Version snapshots describing the validity window of a cited text
- The ProvenancePanel combining all of the above

Validation failures raise CorruptProvenance directly rather than a
pydantic ValidationError, so callers can tell a falsified audit trail
apart from malformed input.
"""

from datetime import date, datetime, timezone
from typing import Annotated, Iterator, Literal, Optional

from pydantic import AfterValidator, ConfigDict, Field, RootModel, model_validator

from src.core.errors import CorruptProvenance
from src.core.models import CamelModel


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class SourceRegistryEntry(CamelModel):
    """Static record of the official (or curated) source of a document."""

    id: str = Field(description="Registry entry identifier (e.g., 'src-us-constitution')")
    official_url: str = Field(description="URL of the official publication")
    publisher: str = Field(description="Publishing authority")
    retrieval_method: Literal["manual", "api", "scrape", "certified-copy"] = Field(
        description="How the text was obtained"
    )
    retrieved_at: UtcDatetime = Field(description="When the text was retrieved")
    checksum: Optional[str] = Field(default=None, description="Content hash at retrieval")
    is_official_source: bool = Field(
        description="True when the publisher is the official government source"
    )
    mirror_url: Optional[str] = None
    curator_justification: Optional[str] = Field(
        default=None,
        description="Why a curator accepted this source; required for non-official sources"
    )
    last_verified: Optional[UtcDatetime] = None


class RetrievalMetadata(CamelModel):
    """Metadata recorded when the document was ingested."""

    retrieved_at: UtcDatetime
    source_url: str
    checksum: str = Field(description="Content hash string, or 'N/A' when unknown")
    parsing_method: str


class VerificationStep(CamelModel):
    """One immutable entry in a verification chain."""

    model_config = ConfigDict(frozen=True)

    verified_by: str
    verified_at: UtcDatetime
    method: str
    notes: Optional[str] = None


class VerificationChain(RootModel[tuple[VerificationStep, ...]]):
    """
    Append-only, chronologically ordered audit trail.

    The chain never reorders or edits history: appending returns a new
    chain, and a step older than its predecessor is rejected.
    """

    model_config = ConfigDict(frozen=True)

    root: tuple[VerificationStep, ...] = ()

    @model_validator(mode="after")
    def _check_chronology(self) -> "VerificationChain":
        for index in range(1, len(self.root)):
            previous, current = self.root[index - 1], self.root[index]
            if current.verified_at < previous.verified_at:
                raise CorruptProvenance(
                    f"verification step {index + 1} ({current.verified_at.isoformat()}) "
                    f"precedes step {index} ({previous.verified_at.isoformat()})"
                )
        return self

    def append(self, step: VerificationStep) -> "VerificationChain":
        """Return a new chain with step appended; the receiver is unchanged."""
        return VerificationChain(self.root + (step,))

    @property
    def latest(self) -> Optional[VerificationStep]:
        return self.root[-1] if self.root else None

    def __iter__(self) -> Iterator[VerificationStep]:
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> VerificationStep:
        return self.root[index]


class VersionSnapshot(CamelModel):
    """Validity window of the specific text version being cited."""

    id: Optional[str] = None
    effective_start: date
    effective_end: Optional[date] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _check_window(self) -> "VersionSnapshot":
        if self.effective_end is not None and self.effective_end < self.effective_start:
            raise CorruptProvenance(
                f"version snapshot ends ({self.effective_end}) before it starts "
                f"({self.effective_start})"
            )
        return self


class ProvenancePanel(CamelModel):
    """
    Authenticity record for one document.

    Rejects a non-official source without a curator justification, and
    (through VerificationChain) an out-of-order verification chain.
    """

    model_config = ConfigDict(frozen=True)

    source_registry_entry: SourceRegistryEntry
    retrieval_metadata: RetrievalMetadata
    verification_chain: VerificationChain = Field(default_factory=VerificationChain)
    version_snapshot: Optional[VersionSnapshot] = None

    @model_validator(mode="after")
    def _check_justification(self) -> "ProvenancePanel":
        entry = self.source_registry_entry
        if not entry.is_official_source and not (entry.curator_justification or "").strip():
            raise CorruptProvenance(
                f"source '{entry.id}' is not official and has no curator justification"
            )
        return self

    @property
    def curator_justification(self) -> Optional[str]:
        return self.source_registry_entry.curator_justification

    def with_verification(self, step: VerificationStep) -> "ProvenancePanel":
        """Return a new panel whose chain has step appended."""
        return self.model_copy(
            update={"verification_chain": self.verification_chain.append(step)}
        )
