# File: services/candidate_service.py
import logging
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from database.models.candidate_model import Candidate, CandidateResearchArea, CandidateSkill
from services.persistence_service import CandidateWriter

logger = logging.getLogger(__name__)

CANDIDATE_FIELDS = [
    "id",
    "name",
    "email",
    "phone",
    "university",
    "department",
    "graduation_year",
    "years_experience",
    "phd_university",
    "phd_graduation_year",
    "phd_department",
    "created_at",
    "updated_at",
]

PUBLICATION_FIELDS = [
    "id",
    "candidate_id",
    "title",
    "conference",
    "journal",
    "year",
    "citations",
    "url",
    "abstract",
    "doi",
    "venue_type",
    "venue_rank",
    "source",
    "created_at",
]

INTERNSHIP_FIELDS = [
    "id",
    "candidate_id",
    "company",
    "role",
    "duration",
    "start_date",
    "end_date",
    "year",
    "description",
    "created_at",
]


def _row_to_dict(row, fields: List[str]) -> Dict:
    return {f: getattr(row, f) for f in fields}


def serialize_candidate(candidate: Candidate) -> Dict:
    data = _row_to_dict(candidate, CANDIDATE_FIELDS)
    data["publications"] = [_row_to_dict(p, PUBLICATION_FIELDS) for p in candidate.publications]
    data["candidate_skills"] = [
        {
            "skill_id": cs.skill_id,
            "proficiency_level": cs.proficiency_level,
            "skills": {"name": cs.skill.name, "category": cs.skill.category} if cs.skill else None,
        }
        for cs in candidate.skills
    ]
    data["internships"] = [_row_to_dict(i, INTERNSHIP_FIELDS) for i in candidate.internships]
    data["candidate_research_areas"] = [
        {"research_areas": {"name": ra.research_area.name} if ra.research_area else None}
        for ra in candidate.research_areas
    ]
    return data


def list_candidates(db: Session) -> List[Dict]:
    """All candidates with nested publications, skills, internships and research areas, newest first."""
    candidates = db.execute(
        select(Candidate)
        .options(
            selectinload(Candidate.publications),
            selectinload(Candidate.skills).selectinload(CandidateSkill.skill),
            selectinload(Candidate.internships),
            selectinload(Candidate.research_areas).selectinload(CandidateResearchArea.research_area),
        )
        .order_by(Candidate.created_at.desc(), Candidate.id.desc())
    ).scalars().all()
    return [serialize_candidate(c) for c in candidates]


def create_candidate(db: Session, payload: Dict) -> Dict:
    candidate = CandidateWriter(db).insert_candidate(payload)
    return _row_to_dict(candidate, CANDIDATE_FIELDS)
