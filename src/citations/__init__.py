"""
Citation engine for the Civics Stack export core.

Provides the reference records consumed from the document repository and
citation formatting in legal and academic styles (Bluebook, ALWD, APA,
MLA, Chicago, plain, court filing).
"""

from src.citations.models import (
    CitationStyle,
    AuthorityLevel,
    DocumentVerificationStatus,
    Jurisdiction,
    Document,
    Section,
    CitationMetadata,
    format_retrieval_date,
)
from src.citations.formatter import CitationFormatter, format_citation

__all__ = [
    # Models
    "CitationStyle",
    "AuthorityLevel",
    "DocumentVerificationStatus",
    "Jurisdiction",
    "Document",
    "Section",
    "CitationMetadata",
    "format_retrieval_date",
    # Formatter
    "CitationFormatter",
    "format_citation",
]
