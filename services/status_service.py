# File: services/status_service.py
import logging
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from database.models.candidate_model import Candidate, CandidateSkill, Publication

logger = logging.getLogger(__name__)

RECENT_CANDIDATES_LIMIT = 10


def _count(db: Session, model) -> int:
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def get_population_status(db: Session) -> Dict:
    recent = db.execute(
        select(Candidate.name, Candidate.university, Candidate.created_at)
        .order_by(Candidate.created_at.desc(), Candidate.id.desc())
        .limit(RECENT_CANDIDATES_LIMIT)
    ).all()

    distribution = db.execute(
        select(Candidate.university, func.count(Candidate.id))
        .group_by(Candidate.university)
        .order_by(func.count(Candidate.id).desc(), Candidate.university)
    ).all()

    return {
        "statistics": {
            "totalCandidates": _count(db, Candidate),
            "totalPublications": _count(db, Publication),
            "totalSkillAssignments": _count(db, CandidateSkill),
        },
        "recentCandidates": [
            {
                "name": row.name,
                "university": row.university,
                "created_at": row.created_at.isoformat() if row.created_at else None,
            }
            for row in recent
        ],
        "universityDistribution": [
            {"university": university, "count": count} for university, count in distribution
        ],
    }
