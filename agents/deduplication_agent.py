# agents/deduplication_agent.py
import logging
import uuid
from typing import Dict, List

from services.data_normalization_service import UNTITLED
from services.schemas import NormalizedPublication
from utils.sanitization import normalize_title

logger = logging.getLogger(__name__)

PLACEHOLDER_TITLE_KEY = normalize_title(UNTITLED)


def dedupe_key(publication: NormalizedPublication) -> str:
    """
    DOI when present, else the normalized title. Records with neither get a
    random key so they never collapse into each other.
    """
    if publication.doi:
        return f"doi:{publication.doi}"

    title_key = normalize_title(publication.title)
    if title_key and title_key != PLACEHOLDER_TITLE_KEY:
        return f"title:{title_key}"

    return f"random:{uuid.uuid4().hex}"


class DeduplicationAgent:
    """
    Collapses publications describing the same paper.
    First-seen record wins; later duplicates are dropped without merging.
    """

    def deduplicate(self, publications: List[NormalizedPublication]) -> List[NormalizedPublication]:
        index: Dict[str, NormalizedPublication] = {}

        for publication in publications:
            key = dedupe_key(publication)
            if key not in index:
                index[key] = publication

        unique = list(index.values())
        logger.info(f"🔄 Deduplicated {len(publications)} → {len(unique)} unique papers")
        return unique


deduplication_agent = DeduplicationAgent()
