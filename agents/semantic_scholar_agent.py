# agents/semantic_scholar_agent.py
import asyncio
import logging
from typing import List

from clients import semantic_scholar_client
from services.data_normalization_service import (
    current_year,
    normalize_many,
    normalize_semantic_scholar_paper,
)
from services.pipeline_config import PipelineConfig
from services.schemas import NormalizedPublication
from utils.errors import SourceFetchError

logger = logging.getLogger(__name__)


class SemanticScholarAgent:
    async def search_university(
        self, university: str, min_citations: int, config: PipelineConfig
    ) -> List[NormalizedPublication]:
        logger.info(f"🔍 Searching Semantic Scholar for {university} (min citations: {min_citations})")

        api_key = semantic_scholar_client.get_api_key()
        if not api_key:
            logger.warning(f"⚠️ Semantic Scholar: no API key found, skipping search for \"{university}\"")
            return []

        year = current_year()
        try:
            results = await asyncio.to_thread(
                semantic_scholar_client.search_papers,
                university,
                year - config.semantic_scholar_year_window,
                year,
                min_citations,
                config.semantic_scholar_page_size,
                api_key,
                config.request_timeout,
            )
        except SourceFetchError as e:
            logger.error(f"❌ Semantic Scholar search failed: {e}")
            return []

        papers = normalize_many(results, normalize_semantic_scholar_paper, fallback_institution=university)
        logger.info(f"✅ Semantic Scholar found {len(papers)} papers for {university}")
        return papers

    async def search_author(self, author_name: str, config: PipelineConfig) -> List[NormalizedPublication]:
        """Author lookup then that author's papers; the API key is optional here."""
        logger.info(f"🔎 Semantic Scholar Agent: searching author '{author_name}'")
        api_key = semantic_scholar_client.get_api_key()

        try:
            author_id = await asyncio.to_thread(
                semantic_scholar_client.search_author, author_name, api_key, config.request_timeout
            )
            if not author_id:
                logger.info(f"⚠️ Semantic Scholar has no author matching '{author_name}'")
                return []

            results = await asyncio.to_thread(
                semantic_scholar_client.get_author_papers,
                author_id,
                config.author_page_size,
                api_key,
                config.request_timeout,
            )
        except SourceFetchError as e:
            logger.error(f"❌ Semantic Scholar author search failed: {e}")
            return []

        papers = normalize_many(results, normalize_semantic_scholar_paper)
        logger.info(f"📘 Semantic Scholar Agent returned {len(papers)} papers")
        return papers


semantic_scholar_agent = SemanticScholarAgent()
