# database/models/candidate_model.py
import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from database.db import Base


class VenueType(str, enum.Enum):
    CONFERENCE = "conference"
    JOURNAL = "journal"


class VenueRank(str, enum.Enum):
    TOP_TIER = "top-tier"
    MID_TIER = "mid-tier"
    OTHER = "other"


class ProficiencyLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


def _enum_values(enum_cls):
    return [e.value for e in enum_cls]


class Candidate(Base):
    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Name is the de-facto uniqueness key for scraped candidates
    name = Column(String(255), index=True, nullable=False)
    email = Column(String(255), index=True, nullable=False)
    phone = Column(String(64), nullable=True)
    university = Column(String(255), nullable=False)
    department = Column(String(255), nullable=True)
    graduation_year = Column(Integer, nullable=False)
    years_experience = Column(Integer, nullable=False, default=0)

    phd_university = Column(String(255), nullable=True)
    phd_graduation_year = Column(Integer, nullable=True)
    phd_department = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    publications = relationship("Publication", back_populates="candidate", cascade="all, delete-orphan")
    skills = relationship("CandidateSkill", back_populates="candidate", cascade="all, delete-orphan")
    internships = relationship("Internship", back_populates="candidate", cascade="all, delete-orphan")
    research_areas = relationship("CandidateResearchArea", back_populates="candidate", cascade="all, delete-orphan")


class Publication(Base):
    __tablename__ = "publications"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(1024), nullable=False)
    conference = Column(String(512), nullable=True)
    journal = Column(String(512), nullable=True)
    year = Column(Integer, nullable=False)
    citations = Column(Integer, nullable=False, default=0)
    url = Column(String(1024), nullable=True)
    abstract = Column(Text, nullable=True)
    doi = Column(String(255), nullable=True)

    venue_type = Column(Enum(VenueType, values_callable=_enum_values), nullable=False, default=VenueType.CONFERENCE)
    venue_rank = Column(Enum(VenueRank, values_callable=_enum_values), nullable=False, default=VenueRank.OTHER)
    source = Column(String(64), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    candidate = relationship("Candidate", back_populates="publications")


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(128), unique=True, nullable=False)
    category = Column(String(128), nullable=True)


class CandidateSkill(Base):
    __tablename__ = "candidate_skills"

    candidate_id = Column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), primary_key=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True)
    proficiency_level = Column(
        Enum(ProficiencyLevel, values_callable=_enum_values),
        nullable=False,
        default=ProficiencyLevel.INTERMEDIATE,
    )

    candidate = relationship("Candidate", back_populates="skills")
    skill = relationship("Skill")


class ResearchArea(Base):
    __tablename__ = "research_areas"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(128), unique=True, nullable=False)


class CandidateResearchArea(Base):
    __tablename__ = "candidate_research_areas"

    candidate_id = Column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), primary_key=True)
    research_area_id = Column(Integer, ForeignKey("research_areas.id", ondelete="CASCADE"), primary_key=True)

    candidate = relationship("Candidate", back_populates="research_areas")
    research_area = relationship("ResearchArea")


class Internship(Base):
    __tablename__ = "internships"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True)
    company = Column(String(255), nullable=False)
    role = Column(String(255), nullable=False)
    duration = Column(String(64), nullable=True)
    start_date = Column(String(32), nullable=True)
    end_date = Column(String(32), nullable=True)
    year = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    candidate = relationship("Candidate", back_populates="internships")
