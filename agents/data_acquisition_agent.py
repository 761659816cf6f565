# agents/data_acquisition_agent.py
import logging
from typing import List
import asyncio

from agents.crossref_agent import crossref_agent
from agents.deduplication_agent import deduplication_agent
from agents.openalex_agent import openalex_agent
from agents.semantic_scholar_agent import semantic_scholar_agent
from services.pipeline_config import PipelineConfig
from services.schemas import NormalizedPublication

logger = logging.getLogger(__name__)


class DataAcquisitionAgent:
    def __init__(
        self,
        openalex=openalex_agent,
        semantic_scholar=semantic_scholar_agent,
        crossref=crossref_agent,
        deduplicator=deduplication_agent,
    ):
        self.openalex = openalex
        self.semantic_scholar = semantic_scholar
        self.crossref = crossref
        self.deduplicator = deduplicator

    async def search_university(
        self, university: str, min_citations: int, config: PipelineConfig
    ) -> List[NormalizedPublication]:
        """
        Papers affiliated with one institution. Sources are queried one after
        another to keep the request rate low.
        """
        logger.info(f"🌐 DataAcquisitionAgent → searching papers for {university}")
        papers: List[NormalizedPublication] = []

        for source, fetcher in (("OpenAlex", self.openalex), ("Semantic Scholar", self.semantic_scholar)):
            try:
                found = await fetcher.search_university(university, min_citations, config)
            except Exception as e:
                logger.error(f"❌ {source} search failed for {university}: {e}", exc_info=True)
                continue
            papers.extend(found)
            logger.info(f"📚 {source} contributed {len(found)} papers for {university}")

        unique = self.deduplicator.deduplicate(papers)
        logger.info(f"📦 After deduplication: {len(unique)} unique papers for {university}")
        return unique

    async def search_author(self, author_name: str, config: PipelineConfig) -> List[NormalizedPublication]:
        """
        Publications of one named author from all three sources, queried
        concurrently. A failing source contributes nothing.
        """
        logger.info(f"🌐 DataAcquisitionAgent → starting author search for '{author_name}'")

        outcomes = await asyncio.gather(
            self.openalex.search_author(author_name, config),
            self.semantic_scholar.search_author(author_name, config),
            self.crossref.search_author(author_name, config),
            return_exceptions=True,
        )

        combined: List[NormalizedPublication] = []
        for source, outcome in zip(("OpenAlex", "Semantic Scholar", "CrossRef"), outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"❌ {source} author search crashed: {outcome}")
                continue
            combined.extend(outcome)

        logger.info(f"📥 Total papers fetched (before dedupe): {len(combined)}")
        return self.deduplicator.deduplicate(combined)


data_acquisition_agent = DataAcquisitionAgent()
