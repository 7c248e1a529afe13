"""
Verification module for the citation export engine.

Provides document provenance models, the provenance store, and
export audit logging.
"""

from src.verification.models import (
    SourceRegistryEntry,
    RetrievalMetadata,
    VerificationStep,
    VerificationChain,
    VersionSnapshot,
    ProvenancePanel,
)
from src.verification.provenance import (
    ProvenanceStore,
    InMemoryProvenanceStore,
    format_provenance_report,
    generate_checksum,
    is_stale_source,
)
from src.verification.audit import (
    get_audit_logger,
    configure_audit_logging,
    ExportAuditEvent,
    log_export_event,
)

__all__ = [
    # Provenance models
    "SourceRegistryEntry",
    "RetrievalMetadata",
    "VerificationStep",
    "VerificationChain",
    "VersionSnapshot",
    "ProvenancePanel",
    # Provenance store and reports
    "ProvenanceStore",
    "InMemoryProvenanceStore",
    "format_provenance_report",
    "generate_checksum",
    "is_stale_source",
    # Audit logging
    "get_audit_logger",
    "configure_audit_logging",
    "ExportAuditEvent",
    "log_export_event",
]
