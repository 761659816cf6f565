# agents/openalex_agent.py
import asyncio
import logging
from typing import List, Optional

from agents.institution_cache import InstitutionCache, institution_cache
from agents.strategy import first_non_empty
from clients import openalex_client
from services.data_normalization_service import current_year, normalize_many, normalize_openalex_work
from services.pipeline_config import PipelineConfig
from services.schemas import NormalizedPublication
from utils.errors import SourceFetchError

logger = logging.getLogger(__name__)


class OpenAlexAgent:
    def __init__(self, cache: Optional[InstitutionCache] = None):
        self.cache = cache or institution_cache

    async def resolve_institution(self, university: str, config: PipelineConfig) -> Optional[str]:
        return await asyncio.to_thread(
            self.cache.get_or_lookup,
            university,
            lambda name: openalex_client.lookup_institution_id(name, timeout=config.request_timeout),
        )

    async def search_university(
        self, university: str, min_citations: int, config: PipelineConfig
    ) -> List[NormalizedPublication]:
        """
        Institution-scoped works search, falling back to a free-text search
        when the institution cannot be resolved or yields nothing.
        """
        logger.info(f"🔍 Searching OpenAlex for {university} (min citations: {min_citations})")
        year = current_year()

        async def by_institution():
            inst_id = await self.resolve_institution(university, config)
            if not inst_id:
                return []
            return await asyncio.to_thread(
                openalex_client.search_institution_works,
                inst_id,
                min_citations,
                year - config.openalex_year_window,
                year,
                config.openalex_page_size,
                config.request_timeout,
            )

        async def by_text():
            return await asyncio.to_thread(
                openalex_client.search_works_text,
                university,
                min_citations,
                year - config.openalex_text_year_window,
                year,
                config.openalex_text_page_size,
                config.request_timeout,
            )

        outcome = await first_non_empty([
            ("institution", by_institution),
            ("text", by_text),
        ])
        for failure in outcome.failures:
            logger.warning(f"⚠️ OpenAlex strategy failed for {university}: {failure}")

        papers = normalize_many(outcome.results, normalize_openalex_work, fallback_institution=university)
        logger.info(f"📊 OpenAlex final result: {len(papers)} papers for {university}")
        return papers

    async def search_author(self, author_name: str, config: PipelineConfig) -> List[NormalizedPublication]:
        logger.info(f"🔎 OpenAlex: searching works by '{author_name}'")
        try:
            works = await asyncio.to_thread(
                openalex_client.search_author_works, author_name, config.author_page_size, config.request_timeout
            )
        except SourceFetchError as e:
            logger.error(f"❌ OpenAlex author search failed: {e}")
            return []

        return normalize_many(works, normalize_openalex_work)


openalex_agent = OpenAlexAgent()
