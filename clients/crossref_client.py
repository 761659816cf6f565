# clients/crossref_client.py
from typing import Dict, List

from clients.http_client import DEFAULT_TIMEOUT, get_json
from utils.errors import SourceFetchError

SOURCE = "crossref"
CROSSREF_API_URL = "https://api.crossref.org/works"


def search_author_works(author_name: str, rows: int = 50, timeout: float = DEFAULT_TIMEOUT) -> List[Dict]:
    payload = get_json(
        SOURCE,
        CROSSREF_API_URL,
        params={"query.author": author_name, "rows": rows, "sort": "score", "order": "desc"},
        timeout=timeout,
    )
    if not isinstance(payload, dict) or not isinstance(payload.get("message"), dict):
        raise SourceFetchError(SOURCE, "response has no 'message' object")

    items = payload["message"].get("items") or []
    if not isinstance(items, list):
        raise SourceFetchError(SOURCE, "'message.items' is not a list")
    return items
