"""
Citation formatter for legal and academic citation styles.

Each style is one renderer function in a dispatch table keyed by
CitationStyle:
- bluebook / court-filing: include a pinpoint ("42 U.S.C. § 1983(a)")
- alwd, apa, mla, chicago: academic forms with an access date
- plain: no style punctuation; the fallback for unknown styles

Optional fragments (reporter volume, year, URL, subsection, last-verified
date) are dropped when absent. Only a missing section or document id is
an error.
"""

import logging
from typing import Callable, Union

from src.citations.models import CitationMetadata, CitationStyle, Section
from src.core.errors import InvalidMetadata

logger = logging.getLogger(__name__)

Renderer = Callable[[CitationMetadata], str]


# ── Fragments ────────────────────────────────────────────────────────


def _year(metadata: CitationMetadata) -> str:
    effective = metadata.document.effective_date
    return str(effective.year) if effective else ""


def _section_ref(section: Section) -> str:
    """'§ 1983(a)' for numbered sections, the number as-is otherwise ('Amend. I')."""
    number = section.number.strip()
    ref = f"§ {number}" if number[:1].isdigit() else number
    if section.subsection:
        ref += f"({section.subsection})"
    return ref


def _pinpoint(metadata: CitationMetadata) -> str:
    """Volume/reporter/section/subsection notation for legal filings."""
    document = metadata.document
    parts = [
        document.reporter_volume or "",
        document.reporter_abbreviation or "",
        _section_ref(metadata.section),
    ]
    return " ".join(p for p in parts if p)


def _parenthetical(*parts: str) -> str:
    inner = " ".join(p for p in parts if p)
    return f" ({inner})" if inner else ""


def _join(*parts: str, sep: str = ", ") -> str:
    return sep.join(p for p in parts if p)


# ── Renderers ────────────────────────────────────────────────────────


def _render_bluebook(md: CitationMetadata) -> str:
    head = _join(md.document.title, _pinpoint(md))
    head += _parenthetical(md.jurisdiction.name, _year(md))
    return _join(head, md.source_url or "") + f" (last visited {md.retrieval_date})."


def _render_alwd(md: CitationMetadata) -> str:
    head = _join(md.document.title, _section_ref(md.section), sep=" ")
    head += _parenthetical(md.jurisdiction.name, _year(md))
    return _join(head, md.source_url or "") + f" (accessed {md.retrieval_date})."


def _render_apa(md: CitationMetadata) -> str:
    year = _year(md)
    head = _join(md.document.title, _section_ref(md.section))
    if year:
        head += f" ({year})"
    text = f"{head}. {md.jurisdiction.name}. Retrieved {md.retrieval_date}"
    if md.source_url:
        text += f", from {md.source_url}"
    return text


def _render_mla(md: CitationMetadata) -> str:
    title = md.section.title.strip()
    lead = f"\"{title}.\" " if title else ""
    body = _join(
        md.document.title,
        md.jurisdiction.name,
        _year(md),
        _section_ref(md.section),
        md.source_url or "",
    )
    return f"{lead}{body}. Accessed {md.retrieval_date}."


def _render_chicago(md: CitationMetadata) -> str:
    title = md.section.title.strip()
    head = _join(md.document.title, _section_ref(md.section), f"\"{title}\"" if title else "")
    head += f" ({_join(md.jurisdiction.name, _year(md))})"
    return _join(head, f"accessed {md.retrieval_date}", md.source_url or "") + "."


def _render_plain(md: CitationMetadata) -> str:
    section = md.section
    number = section.number.strip()
    section_part = _join(
        f"Section {number}" if number else "",
        f"subsection {section.subsection}" if section.subsection else "",
        sep=" ",
    )
    text = _join(md.document.title, section_part, section.title.strip(), md.jurisdiction.name)
    text += f". Retrieved {md.retrieval_date}."
    if md.source_url:
        text += f" {md.source_url}"
    return text


def _render_court_filing(md: CitationMetadata) -> str:
    canonical = md.section.canonical_citation
    head = _join(md.document.title, _pinpoint(md))
    if canonical:
        head += f" ({canonical})"
    text = f"{head}, {md.jurisdiction.name}."
    if md.source_url:
        text += f" Official source: {md.source_url}."
    text += f" Verification status: {md.verification_status.value}"
    if md.last_verified:
        text += f", last verified {md.last_verified.date().isoformat()}"
    return text + f". Retrieved {md.retrieval_date}."


# ── Formatter ────────────────────────────────────────────────────────


class CitationFormatter:
    """
    Formatter for legal citations.

    Dispatches on CitationStyle through RENDERERS; a new style is one
    more renderer entry.

    Example:
        >>> CitationFormatter.format(metadata, CitationStyle.BLUEBOOK)
        'Constitution of the United States, Amend. I (United States (Federal) 1789) ...'
    """

    RENDERERS: dict[CitationStyle, Renderer] = {
        CitationStyle.BLUEBOOK: _render_bluebook,
        CitationStyle.ALWD: _render_alwd,
        CitationStyle.APA: _render_apa,
        CitationStyle.MLA: _render_mla,
        CitationStyle.CHICAGO: _render_chicago,
        CitationStyle.PLAIN: _render_plain,
        CitationStyle.COURT_FILING: _render_court_filing,
    }

    # Menu order
    STYLE_ORDER: tuple[CitationStyle, ...] = (
        CitationStyle.BLUEBOOK,
        CitationStyle.ALWD,
        CitationStyle.APA,
        CitationStyle.MLA,
        CitationStyle.CHICAGO,
        CitationStyle.PLAIN,
        CitationStyle.COURT_FILING,
    )

    @staticmethod
    def validate(metadata: CitationMetadata) -> None:
        """Raise InvalidMetadata when a required identity field is blank."""
        if not (metadata.section.id or "").strip():
            raise InvalidMetadata("section.id")
        if not (metadata.document.id or "").strip():
            raise InvalidMetadata("document.id")

    @classmethod
    def format(
        cls,
        metadata: CitationMetadata,
        style: Union[CitationStyle, str],
    ) -> str:
        """
        Render a citation for metadata in the given style.

        Args:
            metadata: Citation input bundle
            style: CitationStyle or its string value

        Returns:
            Formatted citation string

        Raises:
            InvalidMetadata: section id or document id is missing
        """
        cls.validate(metadata)
        try:
            style = CitationStyle(style)
        except ValueError:
            logger.debug("Unknown citation style %r, falling back to plain", style)
            style = CitationStyle.PLAIN
        renderer = cls.RENDERERS.get(style, _render_plain)
        return renderer(metadata)

    @classmethod
    def available_styles(cls) -> list[CitationStyle]:
        return [s for s in cls.STYLE_ORDER if s in cls.RENDERERS]


def format_citation(metadata: CitationMetadata, style: Union[CitationStyle, str]) -> str:
    """Module-level shortcut for CitationFormatter.format."""
    return CitationFormatter.format(metadata, style)
