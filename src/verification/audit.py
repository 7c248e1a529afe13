"""
Audit logging infrastructure for citation exports.

Provides structured logging with structlog for:
- Batch and single-citation export attempts
- Export results (SUCCESS, FAILED) with item and skip counts
- Performance tracking (duration_ms)
"""

import logging
import structlog
from datetime import datetime, timezone
from typing import Literal, Optional
from pydantic import BaseModel, Field


def configure_audit_logging() -> None:
    """
    Configure structlog with JSON output for production audit logging.

    Uses stdout for container compatibility (no file configuration).
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_audit_logger(name: str) -> structlog.BoundLogger:
    """
    Get a bound logger with the specified module name.

    Args:
        name: Module name for log attribution (e.g., "batch_export")

    Returns:
        BoundLogger instance with module context
    """
    return structlog.get_logger(module=name)


class ExportAuditEvent(BaseModel):
    """Audit event model for export logging."""

    action: Literal["export"] = Field(
        default="export",
        description="Audited action; exports are the only action this engine performs"
    )
    entity_type: Literal["citation", "batch-citation"] = Field(
        description="Whether a single citation or a batch was exported"
    )
    entity_id: str = Field(
        description="Identifier of the exported entity (section id or batch id)"
    )
    user_id: str = Field(
        description="User who requested the export"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC timestamp of the event"
    )
    format: str = Field(
        description="File encoding of the export (txt, json, csv)"
    )
    citation_style: str = Field(
        description="Citation style used for every record"
    )
    item_count: int = Field(
        ge=0,
        description="Number of records written to the export"
    )
    skipped_count: int = Field(
        default=0,
        ge=0,
        description="Number of requests skipped for missing references"
    )
    result: Literal["SUCCESS", "FAILED"] = Field(
        description="Outcome of the export"
    )
    duration_ms: int = Field(
        ge=0,
        description="Time taken for the export in milliseconds"
    )
    reason: Optional[str] = Field(
        default=None,
        description="Failure reason when result is FAILED"
    )


def log_export_event(
    logger: structlog.BoundLogger,
    event: ExportAuditEvent
) -> None:
    """
    Log an export event with appropriate log level.

    Args:
        logger: The structlog bound logger
        event: The audit event to log

    Logs at INFO level for SUCCESS, WARNING for FAILED.
    """
    event_dict = event.model_dump()
    # Convert datetime to ISO string for JSON serialization
    event_dict["timestamp"] = event.timestamp.isoformat()

    if event.result == "SUCCESS":
        logger.info("citation_export", **event_dict)
    else:
        logger.warning("citation_export", **event_dict)
