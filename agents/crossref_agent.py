# agents/crossref_agent.py
import asyncio
import logging
from typing import List

from clients import crossref_client
from services.data_normalization_service import normalize_crossref_item, normalize_many
from services.pipeline_config import PipelineConfig
from services.schemas import NormalizedPublication
from utils.errors import SourceFetchError

logger = logging.getLogger(__name__)


class CrossRefAgent:
    async def search_author(self, author_name: str, config: PipelineConfig) -> List[NormalizedPublication]:
        logger.info(f"🔎 CrossRef: searching works by '{author_name}'")
        try:
            items = await asyncio.to_thread(
                crossref_client.search_author_works, author_name, config.author_page_size, config.request_timeout
            )
        except SourceFetchError as e:
            logger.error(f"❌ CrossRef author search failed: {e}")
            return []

        papers = normalize_many(items, normalize_crossref_item)
        logger.info(f"📙 CrossRef returned {len(papers)} papers")
        return papers


crossref_agent = CrossRefAgent()
