"""
Pydantic models for citation handling.

Provides data structures for:
- Reference records supplied by the document repository
  (Jurisdiction, Document, Section)
- Citation styles supported by the formatter
- CitationMetadata, the per-request input bundle for formatting and export
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import Field

from src.core.models import CamelModel


class CitationStyle(str, Enum):
    """Supported citation styles."""
    BLUEBOOK = "bluebook"
    ALWD = "alwd"
    APA = "apa"
    MLA = "mla"
    CHICAGO = "chicago"
    PLAIN = "plain"
    COURT_FILING = "court-filing"


class AuthorityLevel(str, Enum):
    """Authority level of a document, in hierarchy order."""
    FEDERAL = "federal"
    STATE = "state"
    TERRITORY = "territory"
    LOCAL = "local"


class DocumentVerificationStatus(str, Enum):
    """How far a document's text has been verified."""
    UNVERIFIED = "unverified"
    VERIFIED = "verified"
    OFFICIAL = "official"


DocumentType = Literal[
    "constitution",
    "amendment",
    "treaty",
    "statute",
    "regulation",
    "code",
    "ordinance",
    "organic-act",
    "executive-order",
    "case-law",
]


class Jurisdiction(CamelModel):
    """A governing jurisdiction (federal, state, territory, county, municipality)."""

    id: str
    name: str = Field(description="Display name (e.g., 'United States (Federal)', 'California')")
    type: Literal["federal", "state", "territory", "county", "municipality"]
    abbreviation: Optional[str] = Field(
        default=None,
        description="Short form used in citations (e.g., 'U.S.', 'CA')"
    )
    parent_id: Optional[str] = None


class Document(CamelModel):
    """
    A legal document: constitution, statute, regulation, case, etc.

    reporter_volume and reporter_abbreviation are only known for documents
    published in an official reporter or code (e.g., '42 U.S.C.').
    """

    id: str
    title: str
    type: DocumentType
    authority_level: AuthorityLevel
    jurisdiction_id: str
    effective_date: Optional[date] = None
    verification_status: DocumentVerificationStatus = DocumentVerificationStatus.UNVERIFIED
    source_url: Optional[str] = None
    last_checked: Optional[datetime] = None
    description: Optional[str] = None
    reporter_volume: Optional[str] = Field(
        default=None,
        description="Official reporter/code volume or title number (e.g., '42')"
    )
    reporter_abbreviation: Optional[str] = Field(
        default=None,
        description="Official reporter/code abbreviation (e.g., 'U.S.C.')"
    )


class Section(CamelModel):
    """A citable subdivision of a document (article, section, amendment)."""

    id: str
    document_id: str
    title: str
    number: str = Field(description="Section identifier within the document (e.g., 'Amend. I', '1983')")
    text: str = ""
    canonical_citation: Optional[str] = Field(
        default=None,
        description="Canonical short citation (e.g., 'U.S. Const. amend. I')"
    )
    subsection: Optional[str] = Field(
        default=None,
        description="Pinpoint subdivision within the section (e.g., 'a')"
    )
    parent_section_id: Optional[str] = None
    order: int = 0


def format_retrieval_date(moment: datetime) -> str:
    """Human-readable date, e.g. 'October 17, 2026'."""
    return f"{moment:%B} {moment.day}, {moment.year}"


class CitationMetadata(CamelModel):
    """
    Input bundle for one citation request.

    Built fresh per request; use capture() so that retrieval_date and
    export_date reflect the moment of export.
    """

    section: Section
    document: Document
    jurisdiction: Jurisdiction
    retrieval_date: str = Field(description="Human-readable rendering of the request time")
    user_id: str
    export_date: datetime = Field(description="Request time as an ISO-8601 timestamp")
    verification_status: DocumentVerificationStatus
    last_verified: Optional[datetime] = None
    source_url: Optional[str] = None

    @classmethod
    def capture(
        cls,
        section: Section,
        document: Document,
        jurisdiction: Jurisdiction,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> "CitationMetadata":
        """Snapshot the given records and stamp them with the current time."""
        now = now or datetime.now(timezone.utc)
        return cls(
            section=section,
            document=document,
            jurisdiction=jurisdiction,
            retrieval_date=format_retrieval_date(now),
            user_id=user_id,
            export_date=now,
            verification_status=document.verification_status,
            last_verified=document.last_checked,
            source_url=document.source_url,
        )
