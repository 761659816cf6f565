#File: services/data_normalization_service.py
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from services.schemas import AuthorRef, NormalizedPublication, PublicationSource
from utils.sanitization import clean_text

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"
UNKNOWN_AUTHOR = "Unknown Author"
UNKNOWN_VENUE = "Unknown Venue"
DOI_PREFIX_RE = re.compile(r"^(https?://(dx\.)?doi\.org/|doi:)", re.IGNORECASE)


def current_year() -> int:
    return datetime.now().year


def normalize_year(value: Any) -> Optional[int]:
    """
    Extracts a 4-digit year from ints, 'YYYY', 'YYYY-MM-DD' or ISO strings.
    Returns None when nothing year-like is found.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value if 1000 <= value <= 9999 else None

    text = str(value).strip()
    if not text:
        return None

    if re.match(r"^\d{4}$", text):
        return int(text)

    match = re.search(r"(\d{4})-\d{2}-\d{2}", text)
    if match:
        return int(match.group(1))

    matches = re.findall(r"\b((?:19|20)\d{2})\b", text)
    if matches:
        return int(matches[0])

    return None


def normalize_citations(value: Any) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 0
    return max(count, 0)


def normalize_doi(value: Any) -> Optional[str]:
    """Bare, lower-cased DOI so the same paper keys identically across providers."""
    if not value or not isinstance(value, str):
        return None
    doi = DOI_PREFIX_RE.sub("", value.strip()).strip().lower()
    return doi or None


def doi_url(doi: Optional[str]) -> Optional[str]:
    return f"https://doi.org/{doi}" if doi else None


def reconstruct_abstract(inverted_index: Any) -> str:
    """
    Rebuilds plain text from OpenAlex's {word: [positions]} abstract index.
    """
    if not inverted_index or not isinstance(inverted_index, dict):
        return ""

    positioned: Dict[int, str] = {}
    for word, positions in inverted_index.items():
        if not isinstance(positions, list):
            continue
        for pos in positions:
            if isinstance(pos, int) and pos >= 0:
                positioned[pos] = word

    return " ".join(positioned[pos] for pos in sorted(positioned) if positioned[pos])


def _text(value: Any, default: str) -> str:
    text = clean_text(value) if isinstance(value, str) else ""
    return text or default


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _str_list(values: Any) -> List[str]:
    if not isinstance(values, list):
        return []
    return [clean_text(v) for v in values if isinstance(v, str) and clean_text(v)]


# ------------------------------------------------------------
# OpenAlex
# ------------------------------------------------------------
def normalize_openalex_work(work: Dict[str, Any], fallback_institution: Optional[str] = None) -> NormalizedPublication:
    """
    Reads: id, title, authorships[].author.{display_name,id},
    authorships[].institutions[].display_name, publication_year,
    cited_by_count, primary_location.source.display_name, doi,
    landing_page_url, abstract_inverted_index, concepts[].display_name
    """
    authors = []
    for authorship in work.get("authorships") or []:
        if not isinstance(authorship, dict):
            continue
        author = _dict(authorship.get("author"))
        institutions = [
            clean_text(inst.get("display_name"))
            for inst in authorship.get("institutions") or []
            if isinstance(inst, dict) and inst.get("display_name")
        ]
        if not institutions and fallback_institution:
            institutions = [fallback_institution]
        authors.append(AuthorRef(
            name=_text(author.get("display_name"), UNKNOWN_AUTHOR),
            external_id=author.get("id"),
            institutions=institutions,
        ))

    location = _dict(work.get("primary_location"))
    source = _dict(location.get("source"))
    doi = normalize_doi(work.get("doi"))

    return NormalizedPublication(
        source_id=work.get("id"),
        title=_text(work.get("title"), UNTITLED),
        authors=authors,
        year=normalize_year(work.get("publication_year")) or current_year(),
        citations=normalize_citations(work.get("cited_by_count")),
        venue=_text(source.get("display_name"), UNKNOWN_VENUE),
        doi=doi,
        url=work.get("landing_page_url") or doi_url(doi),
        abstract=reconstruct_abstract(work.get("abstract_inverted_index")),
        concepts=_str_list([c.get("display_name") for c in work.get("concepts") or [] if isinstance(c, dict)]),
        source=PublicationSource.OPENALEX,
    )


# ------------------------------------------------------------
# Semantic Scholar
# ------------------------------------------------------------
def normalize_semantic_scholar_paper(paper: Dict[str, Any], fallback_institution: Optional[str] = None) -> NormalizedPublication:
    """
    Reads: paperId, title, authors[].{name,authorId}, year, citationCount,
    venue, externalIds.DOI, abstract
    """
    institutions = [fallback_institution] if fallback_institution else []
    authors = [
        AuthorRef(
            name=_text(a.get("name"), UNKNOWN_AUTHOR),
            external_id=a.get("authorId"),
            institutions=institutions,
        )
        for a in paper.get("authors") or []
        if isinstance(a, dict)
    ]

    paper_id = paper.get("paperId")
    external_ids = _dict(paper.get("externalIds"))
    doi = normalize_doi(external_ids.get("DOI"))
    url = doi_url(doi) or (f"https://semanticscholar.org/paper/{paper_id}" if paper_id else None)

    return NormalizedPublication(
        source_id=paper_id,
        title=_text(paper.get("title"), UNTITLED),
        authors=authors,
        year=normalize_year(paper.get("year")) or current_year(),
        citations=normalize_citations(paper.get("citationCount")),
        venue=_text(paper.get("venue"), UNKNOWN_VENUE),
        doi=doi,
        url=url,
        abstract=clean_text(paper.get("abstract")) if isinstance(paper.get("abstract"), str) else "",
        concepts=[],
        source=PublicationSource.SEMANTIC_SCHOLAR,
    )


# ------------------------------------------------------------
# CrossRef
# ------------------------------------------------------------
def _crossref_year(item: Dict[str, Any]) -> Optional[int]:
    for field in ("published", "created"):
        parts = _dict(item.get(field)).get("date-parts")
        if isinstance(parts, list) and parts and isinstance(parts[0], list) and parts[0]:
            year = normalize_year(parts[0][0])
            if year:
                return year
    return None


def _first(values: Any) -> Optional[str]:
    if isinstance(values, list) and values and isinstance(values[0], str):
        return values[0]
    return None


def normalize_crossref_item(item: Dict[str, Any]) -> NormalizedPublication:
    """
    Reads: DOI, title[0], author[].{given,family}, published/created
    date-parts, is-referenced-by-count, container-title[0], URL, abstract
    """
    authors = []
    for a in item.get("author") or []:
        if not isinstance(a, dict):
            continue
        name = f"{a.get('given') or ''} {a.get('family') or ''}".strip()
        authors.append(AuthorRef(name=_text(name, UNKNOWN_AUTHOR)))

    doi = normalize_doi(item.get("DOI"))
    abstract = item.get("abstract")

    return NormalizedPublication(
        source_id=doi,
        title=_text(_first(item.get("title")), UNTITLED),
        authors=authors,
        year=_crossref_year(item) or current_year(),
        citations=normalize_citations(item.get("is-referenced-by-count")),
        venue=_text(_first(item.get("container-title")), UNKNOWN_VENUE),
        doi=doi,
        url=item.get("URL") or doi_url(doi),
        # CrossRef abstracts arrive as JATS XML fragments
        abstract=clean_text(re.sub(r"<[^>]+>", " ", abstract)) if isinstance(abstract, str) else "",
        concepts=[],
        source=PublicationSource.CROSSREF,
    )


def normalize_many(items: Any, normalizer, **kwargs) -> List[NormalizedPublication]:
    """
    Applies a provider normalizer to a raw result list, dropping items that
    are not objects or that fail validation.
    """
    if not isinstance(items, list):
        return []

    normalized = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            normalized.append(normalizer(item, **kwargs))
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"⚠️ Dropping malformed record from {normalizer.__name__}: {e}")
    return normalized
