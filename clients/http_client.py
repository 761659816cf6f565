# clients/http_client.py
import logging
import os
from typing import Any, Dict, Optional

import requests

from utils.errors import SourceFetchError

logger = logging.getLogger(__name__)

OPENALEX_MAILTO = os.getenv("OPENALEX_MAILTO", "recruiting@example.com")
USER_AGENT = f"PhD-Recruiting-DB (mailto:{OPENALEX_MAILTO})"
DEFAULT_TIMEOUT = 15

BASE_HEADERS = {"User-Agent": USER_AGENT}


def get_json(
    source: str,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """
    GETs a JSON document. Any transport error, non-2xx status or non-JSON
    body is raised as SourceFetchError so fetchers have one thing to catch.
    """
    try:
        resp = requests.get(url, params=params, headers={**BASE_HEADERS, **(headers or {})}, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise SourceFetchError(source, f"request failed: {e}") from e

    if not resp.ok:
        raise SourceFetchError(source, f"HTTP {resp.status_code} – {resp.text[:120]}")

    try:
        return resp.json()
    except ValueError as e:
        raise SourceFetchError(source, f"invalid JSON from {resp.url}") from e
