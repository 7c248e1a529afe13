"""
Provenance store and reporting helpers.

Provides:
- ProvenanceStore protocol for lazily resolving a document's ProvenancePanel
- InMemoryProvenanceStore backed by a source registry and recorded chains
- Markdown provenance reports, stale-source checks, content checksums
"""

import hashlib
import logging
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional, Protocol

from src.core.config import get_settings
from src.verification.models import (
    ProvenancePanel,
    RetrievalMetadata,
    SourceRegistryEntry,
    VerificationChain,
    VerificationStep,
    VersionSnapshot,
)

logger = logging.getLogger(__name__)


class ProvenanceStore(Protocol):
    """Anything that can resolve provenance for a document id."""

    async def get_provenance(self, document_id: str) -> Optional[ProvenancePanel]:
        ...


class InMemoryProvenanceStore:
    """
    Provenance store over an in-memory source registry.

    For each document the first registered source is primary. When a
    verification chain has been recorded for the document it is used as
    is; otherwise a single curator step is derived from the registry
    entry.

    Usage:
        store = InMemoryProvenanceStore(
            registry=[entry],
            document_sources={"us-constitution": ["src-us-constitution"]},
        )
        panel = await store.get_provenance("us-constitution")
    """

    def __init__(
        self,
        registry: Iterable[SourceRegistryEntry] = (),
        document_sources: Optional[Mapping[str, list[str]]] = None,
        snapshots: Optional[Mapping[str, list[VersionSnapshot]]] = None,
        chains: Optional[Mapping[str, VerificationChain]] = None,
    ):
        self._registry: dict[str, SourceRegistryEntry] = {e.id: e for e in registry}
        self._document_sources = dict(document_sources or {})
        self._snapshots = {k: list(v) for k, v in (snapshots or {}).items()}
        self._chains: dict[str, VerificationChain] = dict(chains or {})

    def primary_source(self, document_id: str) -> Optional[SourceRegistryEntry]:
        for source_id in self._document_sources.get(document_id, []):
            entry = self._registry.get(source_id)
            if entry is not None:
                return entry
        return None

    def record_verification(self, document_id: str, step: VerificationStep) -> VerificationChain:
        """
        Append a verification step to a document's chain.

        The stored chain is replaced by a new chain; an out-of-order step
        raises CorruptProvenance and leaves the stored chain untouched.
        """
        current = self._chains.get(document_id)
        if current is None:
            entry = self.primary_source(document_id)
            current = _derived_chain(entry) if entry else VerificationChain()
        updated = current.append(step)
        self._chains[document_id] = updated
        return updated

    async def get_provenance(self, document_id: str) -> Optional[ProvenancePanel]:
        entry = self.primary_source(document_id)
        if entry is None:
            logger.debug("No registered source for document %s", document_id)
            return None

        snapshots = self._snapshots.get(document_id) or []
        chain = self._chains.get(document_id) or _derived_chain(entry)

        return ProvenancePanel(
            source_registry_entry=entry,
            version_snapshot=snapshots[0] if snapshots else None,
            retrieval_metadata=RetrievalMetadata(
                retrieved_at=entry.retrieved_at,
                source_url=entry.official_url,
                checksum=entry.checksum or "N/A",
                parsing_method=entry.retrieval_method,
            ),
            verification_chain=chain,
        )


def _derived_chain(entry: SourceRegistryEntry) -> VerificationChain:
    return VerificationChain((
        VerificationStep(
            verified_by="Curator",
            verified_at=entry.last_verified or entry.retrieved_at,
            method=entry.retrieval_method,
            notes=entry.curator_justification or "Curated from official source",
        ),
    ))


def generate_checksum(content: str) -> str:
    """SHA-256 hex digest of the UTF-8 encoded content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def is_stale_source(
    last_checked: datetime,
    threshold_days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> bool:
    """
    True when more than threshold_days whole days passed since last_checked.

    threshold_days defaults to the configured CITATION_EXPORT_STALE_DAYS.
    """
    if threshold_days is None:
        threshold_days = get_settings().stale_threshold_days
    now = now or datetime.now(timezone.utc)
    if last_checked.tzinfo is None:
        last_checked = last_checked.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - last_checked).days > threshold_days


def format_provenance_report(provenance: ProvenancePanel) -> str:
    """Render a Markdown provenance report for court or academic review."""
    entry = provenance.source_registry_entry
    retrieval = provenance.retrieval_metadata
    source_type = (
        "Official Government Source" if entry.is_official_source else "Non-official Mirror"
    )

    lines = [
        "# Provenance Report",
        "",
        "## Source Information",
        f"- **Official URL**: {entry.official_url}",
        f"- **Publisher**: {entry.publisher}",
        f"- **Source Type**: {source_type}",
        f"- **Retrieval Method**: {entry.retrieval_method}",
    ]
    if not entry.is_official_source:
        lines.append(f"- **Curator Justification**: {entry.curator_justification}")

    lines += [
        "",
        "## Verification Metadata",
        f"- **Retrieved At**: {retrieval.retrieved_at.isoformat()}",
        f"- **Checksum**: {retrieval.checksum}",
        f"- **Parsing Method**: {retrieval.parsing_method}",
        "",
    ]

    snapshot = provenance.version_snapshot
    if snapshot is not None:
        effective_end = snapshot.effective_end.isoformat() if snapshot.effective_end else "present"
        lines += [
            "## Version",
            f"- **Effective**: {snapshot.effective_start.isoformat()} to {effective_end}",
        ]
        if snapshot.notes:
            lines.append(f"- **Notes**: {snapshot.notes}")
        lines.append("")

    if len(provenance.verification_chain) > 0:
        lines.append("## Verification Chain")
        for index, step in enumerate(provenance.verification_chain, start=1):
            lines += [
                f"### Verification {index}",
                f"- **Verified By**: {step.verified_by}",
                f"- **Verified At**: {step.verified_at.isoformat()}",
                f"- **Method**: {step.method}",
                f"- **Notes**: {step.notes or ''}",
                "",
            ]

    lines += [
        "---",
        "*This provenance report documents the source, retrieval, and verification "
        "of legal content for court-defensible usage.*",
    ]
    return "\n".join(lines) + "\n"
