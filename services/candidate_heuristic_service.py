# File: services/candidate_heuristic_service.py
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from services.author_aggregation_service import AuthorAggregate
from services.data_normalization_service import current_year as _current_year
from services.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)

DEFAULT_DEPARTMENT = "Computer Science"
FALLBACK_EMAIL_DOMAIN = "university.edu"
EMAIL_DOMAINS = {
    "Stanford University": "stanford.edu",
    "MIT": "mit.edu",
    "Carnegie Mellon University": "cmu.edu",
    "UC Berkeley": "berkeley.edu",
    "Caltech": "caltech.edu",
}


@dataclass
class CandidateDecision:
    author: AuthorAggregate
    is_likely_phd: bool
    estimated_graduation_year: int


def evaluate_author(
    author: AuthorAggregate,
    config: Optional[PipelineConfig] = None,
    current_year: Optional[int] = None,
) -> CandidateDecision:
    """
    An author is a plausible PhD candidate when all three hold:
    enough papers, a recent paper, and a total citation count in range.
    """
    config = config or PipelineConfig()
    year = current_year or _current_year()

    has_publications = len(author.papers) >= config.min_papers
    has_recent_work = author.last_paper_year >= year - config.recent_years_window
    has_reasonable_citations = config.min_total_citations <= author.total_citations <= config.max_total_citations

    return CandidateDecision(
        author=author,
        is_likely_phd=has_publications and has_recent_work and has_reasonable_citations,
        estimated_graduation_year=max(author.last_paper_year + 1, year),
    )


def identify_candidates(
    authors: List[AuthorAggregate],
    config: Optional[PipelineConfig] = None,
    current_year: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[CandidateDecision]:
    """
    Accepted decisions ranked by total citations (descending), capped at
    `limit` or config.candidate_cap, whichever is smaller.
    """
    config = config or PipelineConfig()
    logger.info(f"🎓 Identifying PhD candidates among {len(authors)} authors")

    accepted = [d for d in (evaluate_author(a, config, current_year) for a in authors) if d.is_likely_phd]
    accepted.sort(key=lambda d: d.author.total_citations, reverse=True)

    cap = config.candidate_cap if limit is None else min(limit, config.candidate_cap)
    ranked = accepted[:max(cap, 0)]
    logger.info(f"🎯 Identified {len(ranked)} potential PhD candidates")

    for i, decision in enumerate(ranked[:3], start=1):
        a = decision.author
        logger.info(f"📋 Candidate {i}: {a.display_name} ({len(a.papers)} papers, {a.total_citations} citations)")

    return ranked


# ------------------------------------------------------------
# Candidate row helpers
# ------------------------------------------------------------
def generate_estimated_email(name: str, university: str) -> str:
    parts = [re.sub(r"[^a-z0-9]", "", p) for p in name.lower().split()]
    parts = [p for p in parts if p] or ["candidate"]
    domain = EMAIL_DOMAINS.get(university, FALLBACK_EMAIL_DOMAIN)
    return f"{parts[0]}.{parts[-1]}@{domain}"


def infer_department(author: AuthorAggregate) -> str:
    return DEFAULT_DEPARTMENT


def extract_phd_information(decision: CandidateDecision, university: str) -> Dict:
    return {
        "university": university,
        "graduation_year": decision.estimated_graduation_year,
        "department": infer_department(decision.author),
    }


def build_candidate_payload(
    decision: CandidateDecision,
    university: str,
    current_year: Optional[int] = None,
) -> Dict:
    year = current_year or _current_year()
    author = decision.author
    phd = extract_phd_information(decision, university)

    return {
        "name": author.display_name,
        "email": generate_estimated_email(author.display_name, university),
        "university": university,
        "department": infer_department(author),
        "graduation_year": decision.estimated_graduation_year,
        "years_experience": max(1, year - author.first_paper_year),
        "phd_university": phd["university"],
        "phd_graduation_year": phd["graduation_year"],
        "phd_department": phd["department"],
    }
