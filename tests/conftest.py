"""Shared fixtures: seed jurisdictions, documents, sections and provenance."""

from datetime import date, datetime, timezone

import pytest

from src.citations.models import CitationMetadata, Document, Jurisdiction, Section
from src.export.models import CitationAnnotations, CitationRequest
from src.verification.models import SourceRegistryEntry
from src.verification.provenance import InMemoryProvenanceStore

EXPORT_TIME = datetime(2026, 10, 17, 14, 30, 0, tzinfo=timezone.utc)


@pytest.fixture()
def now():
    return EXPORT_TIME


@pytest.fixture()
def federal():
    return Jurisdiction(
        id="us-federal", name="United States (Federal)", type="federal", abbreviation="U.S."
    )


@pytest.fixture()
def california():
    return Jurisdiction(
        id="us-ca", name="California", type="state", abbreviation="CA", parent_id="us-federal"
    )


@pytest.fixture()
def constitution():
    return Document(
        id="us-constitution",
        title="Constitution of the United States",
        type="constitution",
        authority_level="federal",
        jurisdiction_id="us-federal",
        effective_date=date(1789, 3, 4),
        verification_status="official",
        source_url="https://www.archives.gov/founding-docs/constitution",
        last_checked=datetime(2025, 1, 15, tzinfo=timezone.utc),
    )


@pytest.fixture()
def civil_rights_code():
    return Document(
        id="usc-title-42",
        title="Civil Rights Act",
        type="statute",
        authority_level="federal",
        jurisdiction_id="us-federal",
        effective_date=date(1871, 4, 20),
        verification_status="verified",
        source_url="https://uscode.house.gov/view.xhtml?path=/prelim@title42",
        reporter_volume="42",
        reporter_abbreviation="U.S.C.",
    )


@pytest.fixture()
def ca_constitution():
    return Document(
        id="ca-constitution",
        title="Constitution of California",
        type="constitution",
        authority_level="state",
        jurisdiction_id="us-ca",
        verification_status="unverified",
    )


@pytest.fixture()
def first_amendment():
    return Section(
        id="us-const-amend1",
        document_id="us-constitution",
        title="First Amendment - Freedom of Religion, Speech, Press, Assembly, Petition",
        number="Amend. I",
        text=(
            "Congress shall make no law respecting an establishment of religion, or "
            "prohibiting the free exercise thereof; or abridging the freedom of speech, "
            "or of the press; or the right of the people peaceably to assemble, and to "
            "petition the Government for a redress of grievances."
        ),
        canonical_citation="U.S. Const. amend. I",
        order=101,
    )


@pytest.fixture()
def section_1983():
    return Section(
        id="usc-42-1983",
        document_id="usc-title-42",
        title="Civil action for deprivation of rights",
        number="1983",
        subsection="a",
        text="Every person who, under color of any statute...",
        canonical_citation="42 U.S.C. § 1983",
    )


@pytest.fixture()
def ca_inalienable_rights():
    return Section(
        id="ca-const-art1-s1",
        document_id="ca-constitution",
        title="Article I, Section 1 - Inalienable Rights",
        number="I.1",
        text="",
        order=1,
    )


@pytest.fixture()
def metadata(first_amendment, constitution, federal, now):
    return CitationMetadata.capture(first_amendment, constitution, federal, "user-42", now=now)


@pytest.fixture()
def statute_metadata(section_1983, civil_rights_code, federal, now):
    return CitationMetadata.capture(section_1983, civil_rights_code, federal, "user-42", now=now)


@pytest.fixture()
def nara_entry():
    return SourceRegistryEntry(
        id="src-us-constitution",
        official_url="https://www.archives.gov/founding-docs/constitution-transcript",
        publisher="National Archives and Records Administration (NARA)",
        retrieval_method="manual",
        retrieved_at="2025-01-15T00:00:00Z",
        checksum="nara-const-2025",
        is_official_source=True,
        curator_justification="Official transcript maintained by NARA.",
        last_verified="2025-02-01T00:00:00Z",
    )


@pytest.fixture()
def provenance_store(nara_entry):
    return InMemoryProvenanceStore(
        registry=[nara_entry],
        document_sources={"us-constitution": ["src-us-constitution"]},
    )


@pytest.fixture()
def saved_requests():
    """Three saved citations; the second points at an unknown jurisdiction."""
    return [
        CitationRequest(
            id="cit-1",
            section_id="us-const-amend1",
            document_id="us-constitution",
            jurisdiction_id="us-federal",
            annotations=CitationAnnotations(
                notes="Speech clause", tags=["A", "B"], access_count=3
            ),
        ),
        CitationRequest(
            id="cit-2",
            section_id="us-const-amend1",
            document_id="us-constitution",
            jurisdiction_id="us-nowhere",
        ),
        CitationRequest(
            id="cit-3",
            section_id="ca-const-art1-s1",
            document_id="ca-constitution",
            jurisdiction_id="us-ca",
            annotations=CitationAnnotations(tags=[], access_count=0),
        ),
    ]
