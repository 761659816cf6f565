# clients/openalex_client.py
import logging
from typing import Dict, List, Optional

from clients.http_client import DEFAULT_TIMEOUT, OPENALEX_MAILTO, get_json
from utils.errors import SourceFetchError

logger = logging.getLogger(__name__)

SOURCE = "openalex"
OPENALEX_API_URL = "https://api.openalex.org"


def _results(data) -> List[Dict]:
    if not isinstance(data, dict):
        raise SourceFetchError(SOURCE, f"unexpected response shape: {type(data).__name__}")
    results = data.get("results") or []
    if not isinstance(results, list):
        raise SourceFetchError(SOURCE, "'results' is not a list")
    return results


def lookup_institution_id(name: str, timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """
    Resolves an institution name to its short OpenAlex ID (e.g. 'I97018004').
    Returns None when OpenAlex knows no such institution.
    """
    data = get_json(
        SOURCE,
        f"{OPENALEX_API_URL}/institutions",
        params={"search": name, "per-page": 1, "mailto": OPENALEX_MAILTO},
        timeout=timeout,
    )
    results = _results(data)
    if not results:
        return None

    first = results[0] if isinstance(results[0], dict) else {}
    raw_id = first.get("id")
    if not isinstance(raw_id, str):
        return None
    return raw_id.rstrip("/").split("/")[-1] or None


def _search_works(params: Dict, timeout: float) -> List[Dict]:
    params = {**params, "mailto": OPENALEX_MAILTO}
    return _results(get_json(SOURCE, f"{OPENALEX_API_URL}/works", params=params, timeout=timeout))


def search_institution_works(
    institution_id: str,
    min_citations: int,
    year_from: int,
    year_to: int,
    per_page: int = 100,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[Dict]:
    filters = ",".join([
        f"institutions.id:{institution_id}",
        f"publication_year:{year_from}-{year_to}",
        f"cited_by_count:>{min_citations}",
    ])
    return _search_works(
        {"filter": filters, "per-page": per_page, "sort": "cited_by_count:desc"},
        timeout,
    )


def search_works_text(
    query: str,
    min_citations: int,
    year_from: int,
    year_to: int,
    per_page: int = 50,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[Dict]:
    filters = f"publication_year:{year_from}-{year_to},cited_by_count:>{min_citations}"
    return _search_works(
        {"search": query, "filter": filters, "per-page": per_page, "sort": "cited_by_count:desc"},
        timeout,
    )


def search_author_works(author_name: str, per_page: int = 50, timeout: float = DEFAULT_TIMEOUT) -> List[Dict]:
    return _search_works(
        {"filter": f"author.display_name:{author_name}", "per-page": per_page, "sort": "cited_by_count:desc"},
        timeout,
    )
