# File: api/models/candidate_models.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class CandidateCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    university: str = Field(..., min_length=1)
    department: Optional[str] = None
    graduation_year: int
    years_experience: int = Field(0, ge=0)
    phd_university: Optional[str] = None
    phd_graduation_year: Optional[int] = None
    phd_department: Optional[str] = None


class ScrapeRequest(BaseModel):
    authorName: str = Field(..., min_length=1)
    university: Optional[str] = None
    email: Optional[str] = None
