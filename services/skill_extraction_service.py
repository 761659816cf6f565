# File: services/skill_extraction_service.py
import logging
from typing import Dict, Iterable, List, Set

from database.models.candidate_model import VenueRank, VenueType
from services.schemas import NormalizedPublication

logger = logging.getLogger(__name__)

SKILL_KEYWORDS: Dict[str, List[str]] = {
    "Machine Learning": ["machine learning", "ml", "neural network", "deep learning"],
    "Deep Learning": ["deep learning", "neural network", "cnn", "rnn", "transformer"],
    "Computer Vision": ["computer vision", "image processing", "object detection", "segmentation"],
    "Natural Language Processing": ["nlp", "natural language", "text processing", "language model"],
    "Reinforcement Learning": ["reinforcement learning", "rl", "policy gradient", "q-learning"],
    "Distributed Systems": ["distributed", "cluster", "parallel computing", "scalability"],
    "Quantum Computing": ["quantum", "qubit", "quantum algorithm", "quantum machine learning"],
    "Robotics": ["robot", "robotics", "autonomous", "control system"],
    "Cybersecurity": ["security", "cryptography", "encryption", "privacy"],
    "PyTorch": ["pytorch", "torch"],
    "TensorFlow": ["tensorflow", "tf"],
    "Python": ["python"],
    "CUDA": ["cuda", "gpu computing"],
}

SKILL_CATEGORIES: Dict[str, str] = {
    "PyTorch": "Framework",
    "TensorFlow": "Framework",
    "Python": "Programming Language",
    "CUDA": "Programming Language",
}
DEFAULT_SKILL_CATEGORY = "Research Area"

# Skills that also name a research area
RESEARCH_AREA_SKILLS = {
    "Machine Learning",
    "Deep Learning",
    "Computer Vision",
    "Natural Language Processing",
    "Reinforcement Learning",
    "Distributed Systems",
    "Quantum Computing",
    "Robotics",
    "Cybersecurity",
}
DEFAULT_RESEARCH_AREA = "Artificial Intelligence"

TOP_TIER_VENUES = [
    "NeurIPS",
    "ICML",
    "ICLR",
    "Nature",
    "Science",
    "ASPLOS",
    "OSDI",
    "SOSP",
    "SIGCOMM",
    "STOC",
    "FOCS",
    "CRYPTO",
    "USENIX Security",
    "CCS",
    "ICRA",
    "RSS",
    "IROS",
]


def publication_text(publication: NormalizedPublication) -> str:
    return f"{publication.title} {publication.abstract} {publication.venue}".lower()


def extract_skills(text: str) -> Set[str]:
    """Skill labels whose trigger substrings occur anywhere in the text."""
    text = (text or "").lower()
    return {
        skill
        for skill, keywords in SKILL_KEYWORDS.items()
        if any(keyword in text for keyword in keywords)
    }


def extract_skills_from_publications(publications: Iterable[NormalizedPublication]) -> List[str]:
    skills: List[str] = []
    for publication in publications:
        matched = extract_skills(publication_text(publication))
        skills.extend(s for s in SKILL_KEYWORDS if s in matched and s not in skills)
    return skills


def skill_category(skill: str) -> str:
    return SKILL_CATEGORIES.get(skill, DEFAULT_SKILL_CATEGORY)


def extract_research_areas(publications: Iterable[NormalizedPublication]) -> List[str]:
    areas = [s for s in extract_skills_from_publications(publications) if s in RESEARCH_AREA_SKILLS]
    return areas or [DEFAULT_RESEARCH_AREA]


def get_venue_rank(venue: str) -> VenueRank:
    # MID_TIER exists in the schema but no rule assigns it yet
    if any(top in (venue or "") for top in TOP_TIER_VENUES):
        return VenueRank.TOP_TIER
    return VenueRank.OTHER


def get_venue_type(venue: str) -> VenueType:
    return VenueType.JOURNAL if "Journal" in (venue or "") else VenueType.CONFERENCE
