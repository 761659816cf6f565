# services/schemas.py
import enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PublicationSource(str, enum.Enum):
    OPENALEX = "OpenAlex"
    SEMANTIC_SCHOLAR = "Semantic Scholar"
    CROSSREF = "CrossRef"


class AuthorRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    external_id: Optional[str] = None
    institutions: List[str] = Field(default_factory=list)


class NormalizedPublication(BaseModel):
    """Provider-independent publication record produced by the source fetchers."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    source_id: Optional[str] = None
    title: str = Field("Untitled", min_length=1)
    authors: List[AuthorRef] = Field(default_factory=list)
    year: int
    citations: int = Field(0, ge=0)
    venue: str = "Unknown Venue"
    doi: Optional[str] = None
    url: Optional[str] = None
    abstract: str = ""
    concepts: List[str] = Field(default_factory=list)
    source: PublicationSource
