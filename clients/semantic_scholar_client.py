# clients/semantic_scholar_client.py
import logging
import os
from typing import Dict, List, Optional

from clients.http_client import DEFAULT_TIMEOUT, get_json
from utils.errors import SourceFetchError

logger = logging.getLogger(__name__)

SOURCE = "semantic_scholar"
S2_API_URL = "https://api.semanticscholar.org/graph/v1"
S2_FIELDS = [
    "title",
    "year",
    "citationCount",
    "venue",
    "externalIds",
    "abstract",
    "authors",
]


def get_api_key() -> Optional[str]:
    key = os.getenv("SEMANTIC_SCHOLAR_API_KEY")
    # Unexpanded placeholders like '${...}' count as missing
    if key and key.strip() and not key.startswith("${"):
        return key.strip()
    return None


def _headers(api_key: Optional[str]) -> Dict[str, str]:
    return {"x-api-key": api_key} if api_key else {}


def _data(payload) -> List[Dict]:
    if not isinstance(payload, dict):
        raise SourceFetchError(SOURCE, f"unexpected response shape: {type(payload).__name__}")
    data = payload.get("data") or []
    if not isinstance(data, list):
        raise SourceFetchError(SOURCE, "'data' is not a list")
    return data


def search_papers(
    query: str,
    year_from: int,
    year_to: int,
    min_citations: int,
    limit: int = 50,
    api_key: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[Dict]:
    params = {
        "query": query,
        "year": f"{year_from}-{year_to}",
        "minCitationCount": str(max(1, min_citations)),
        "limit": str(limit),
        "fields": ",".join(S2_FIELDS),
    }
    payload = get_json(SOURCE, f"{S2_API_URL}/paper/search", params=params, headers=_headers(api_key), timeout=timeout)
    return _data(payload)


def search_author(name: str, api_key: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """Returns the authorId of the best match, or None."""
    payload = get_json(
        SOURCE,
        f"{S2_API_URL}/author/search",
        params={"query": name, "limit": 1},
        headers=_headers(api_key),
        timeout=timeout,
    )
    matches = _data(payload)
    if not matches:
        return None
    first = matches[0] if isinstance(matches[0], dict) else {}
    author_id = first.get("authorId")
    return str(author_id) if author_id else None


def get_author_papers(
    author_id: str,
    limit: int = 50,
    api_key: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[Dict]:
    payload = get_json(
        SOURCE,
        f"{S2_API_URL}/author/{author_id}/papers",
        params={"fields": ",".join(S2_FIELDS), "limit": limit},
        headers=_headers(api_key),
        timeout=timeout,
    )
    return _data(payload)
