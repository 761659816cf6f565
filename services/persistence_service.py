# File: services/persistence_service.py
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.models.candidate_model import (
    Candidate,
    CandidateResearchArea,
    CandidateSkill,
    Publication,
    ResearchArea,
    Skill,
    VenueType,
)
from services.candidate_heuristic_service import CandidateDecision, build_candidate_payload
from services.pipeline_config import PipelineConfig
from services.schemas import NormalizedPublication
from services.skill_extraction_service import (
    extract_research_areas,
    extract_skills_from_publications,
    get_venue_rank,
    get_venue_type,
    skill_category,
)
from utils.errors import PersistenceError
from utils.sanitization import truncate

logger = logging.getLogger(__name__)


@dataclass
class PersistResult:
    candidate_id: int
    publications_added: int
    skills_extracted: int


def top_publications(papers: List[NormalizedPublication], limit: int) -> List[NormalizedPublication]:
    return sorted(papers, key=lambda p: p.citations, reverse=True)[:max(limit, 0)]


def build_publication_row(candidate_id: int, paper: NormalizedPublication, abstract_max_length: int) -> Dict:
    venue_type = get_venue_type(paper.venue)
    is_journal = venue_type == VenueType.JOURNAL
    return {
        "candidate_id": candidate_id,
        "title": paper.title,
        "conference": None if is_journal else paper.venue,
        "journal": paper.venue if is_journal else None,
        "year": paper.year,
        "citations": paper.citations,
        "url": paper.url,
        "abstract": truncate(paper.abstract, abstract_max_length),
        "doi": paper.doi,
        "venue_type": venue_type,
        "venue_rank": get_venue_rank(paper.venue),
        "source": paper.source,
    }


class CandidateWriter:
    """
    Writes candidates and their publications. Each step commits on its own:
    a candidate may end up without publications if the later insert fails.
    """

    def __init__(self, db: Session, config: Optional[PipelineConfig] = None):
        self.db = db
        self.config = config or PipelineConfig()

    # ------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------
    def find_candidate_by_name(self, name: str) -> Optional[Candidate]:
        return self.db.execute(select(Candidate).where(Candidate.name == name).limit(1)).scalars().first()

    def find_candidate_by_email(self, email: str) -> Optional[Candidate]:
        return self.db.execute(select(Candidate).where(Candidate.email == email).limit(1)).scalars().first()

    # ------------------------------------------------------------
    # Inserts
    # ------------------------------------------------------------
    def insert_candidate(self, payload: Dict) -> Candidate:
        try:
            candidate = Candidate(**payload)
            self.db.add(candidate)
            self.db.commit()
            self.db.refresh(candidate)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to insert candidate {payload.get('name')}: {e}") from e

        logger.info(f"✅ Created candidate: {candidate.name} (ID: {candidate.id})")
        return candidate

    def insert_publications(self, rows: List[Dict]) -> int:
        """Inserts publication rows in chunks of `publication_batch_size`."""
        batch_size = max(self.config.publication_batch_size, 1)
        inserted = 0

        for start in range(0, len(rows), batch_size):
            chunk = rows[start:start + batch_size]
            try:
                self.db.execute(insert(Publication), chunk)
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                raise PersistenceError(f"Failed to insert publications batch at offset {start}: {e}") from e
            inserted += len(chunk)

        return inserted

    def _get_or_create(self, model, name: str, **extra):
        row = self.db.execute(select(model).where(model.name == name)).scalars().first()
        if row is None:
            row = model(name=name, **extra)
            self.db.add(row)
            self.db.flush()
        return row

    def attach_skills(self, candidate_id: int, skills: List[str]) -> int:
        try:
            for skill_name in skills:
                skill = self._get_or_create(Skill, skill_name, category=skill_category(skill_name))
                self.db.add(CandidateSkill(candidate_id=candidate_id, skill_id=skill.id))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to attach skills to candidate {candidate_id}: {e}") from e
        return len(skills)

    def attach_research_areas(self, candidate_id: int, areas: List[str]) -> int:
        try:
            for area_name in areas:
                area = self._get_or_create(ResearchArea, area_name)
                self.db.add(CandidateResearchArea(candidate_id=candidate_id, research_area_id=area.id))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to attach research areas to candidate {candidate_id}: {e}") from e
        return len(areas)

    # ------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------
    def persist_decision(self, decision: CandidateDecision, university: str) -> Optional[PersistResult]:
        """
        Returns None when a candidate with the same name already exists.
        Raises PersistenceError when the candidate or its publications are rejected.
        """
        author = decision.author
        logger.info(f"👤 Processing candidate: {author.display_name}")

        if self.find_candidate_by_name(author.display_name):
            logger.info(f"⚠️ Candidate {author.display_name} already exists, skipping...")
            return None

        candidate = self.insert_candidate(build_candidate_payload(decision, university))

        papers = top_publications(author.papers, self.config.publications_per_candidate)
        rows = [build_publication_row(candidate.id, p, self.config.abstract_max_length) for p in papers]
        added = self.insert_publications(rows)
        if added:
            logger.info(f"✅ Added {added} publications for {author.display_name}")

        skills = extract_skills_from_publications(author.papers)
        try:
            self.attach_skills(candidate.id, skills)
            self.attach_research_areas(candidate.id, extract_research_areas(author.papers))
        except PersistenceError as e:
            logger.warning(f"⚠️ Skill tagging skipped for {author.display_name}: {e}")

        return PersistResult(candidate_id=candidate.id, publications_added=added, skills_extracted=len(skills))
