# File: services/author_aggregation_service.py
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from services.data_normalization_service import UNKNOWN_AUTHOR, current_year
from services.pipeline_config import PipelineConfig
from services.schemas import NormalizedPublication
from utils.sanitization import clean_text, normalize_name_key

logger = logging.getLogger(__name__)


@dataclass
class AuthorAggregate:
    key: str
    display_name: str
    first_paper_year: int
    last_paper_year: int
    external_id: Optional[str] = None
    papers: List[NormalizedPublication] = field(default_factory=list)
    total_citations: int = 0
    institutions: Set[str] = field(default_factory=set)

    def add_paper(self, paper: NormalizedPublication, institutions: List[str]) -> None:
        year = paper.year or current_year()
        self.papers.append(paper)
        self.total_citations += paper.citations or 0
        self.institutions.update(i for i in institutions if i)
        self.first_paper_year = min(self.first_paper_year, year)
        self.last_paper_year = max(self.last_paper_year, year)


def aggregate_authors(
    publications: List[NormalizedPublication],
    config: Optional[PipelineConfig] = None,
) -> List[AuthorAggregate]:
    """
    Groups publications by normalized author name.
    Every paper counts once per distinct author key listed on it.
    """
    config = config or PipelineConfig()
    authors: Dict[str, AuthorAggregate] = {}

    for paper in publications:
        if not paper.authors:
            logger.warning(f"⚠️ Paper has no authors: {paper.title}")
            continue

        seen_on_paper = set()
        for author in paper.authors:
            name = clean_text(author.name)
            if len(name) < config.min_author_name_length or name == UNKNOWN_AUTHOR:
                continue

            key = normalize_name_key(name)
            if key in seen_on_paper:
                continue
            seen_on_paper.add(key)

            year = paper.year or current_year()
            if key not in authors:
                authors[key] = AuthorAggregate(
                    key=key,
                    display_name=name,
                    external_id=author.external_id,
                    first_paper_year=year,
                    last_paper_year=year,
                )
            authors[key].add_paper(paper, author.institutions)

    logger.info(f"👥 Found {len(authors)} unique authors in {len(publications)} papers")
    return list(authors.values())
