# File: api/models/population_models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List


class PopulationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    universities: List[str] = Field(default_factory=lambda: ["Stanford University", "MIT"])
    min_citations: int = Field(5, alias="minCitations", ge=0)
    max_candidates: int = Field(20, alias="maxCandidates", ge=0)
    graduation_years: List[int] = Field(default_factory=lambda: [2024, 2025, 2026], alias="graduationYears")
    test_mode: bool = Field(False, alias="testMode")


class UniversitySearchResult(BaseModel):
    university: str
    papersFound: int
    candidatesIdentified: int


class PopulationResults(BaseModel):
    candidatesAdded: int = 0
    publicationsAdded: int = 0
    skillsExtracted: int = 0
    errors: List[str] = Field(default_factory=list)
    searchResults: List[UniversitySearchResult] = Field(default_factory=list)


class PopulationResponse(BaseModel):
    success: bool
    message: str
    results: PopulationResults
