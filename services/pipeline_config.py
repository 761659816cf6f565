# File: services/pipeline_config.py
import logging
import os

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "PIPELINE_"


class PipelineConfig(BaseModel):
    """
    Tunable thresholds of the population pipeline.
    Every limit the fetchers, heuristic and writer apply lives here.
    """

    # Population loop
    max_universities: int = Field(2, description="Institutions processed per population run")
    candidates_per_university: int = Field(5, description="Candidates persisted per institution")
    inter_university_delay: float = Field(1.0, description="Seconds to pause between institutions")

    # Author aggregation
    min_author_name_length: int = Field(3, description="Shorter author names are ignored")

    # Candidate heuristic
    candidate_cap: int = Field(20, description="Ranked candidates kept per institution")
    min_papers: int = Field(1, description="Minimum papers for an author to qualify")
    recent_years_window: int = Field(5, description="Latest paper must be at most this many years old")
    min_total_citations: int = Field(1, description="Inclusive lower citation bound")
    max_total_citations: int = Field(10000, description="Inclusive upper citation bound")

    # Persistence
    publications_per_candidate: int = Field(5, description="Top papers written per candidate")
    publication_batch_size: int = Field(500, description="Rows per publication insert")
    abstract_max_length: int = Field(500, description="Stored abstracts are truncated to this length")

    # Source fetchers
    openalex_year_window: int = Field(4, description="Years covered by the institution works search")
    openalex_text_year_window: int = Field(2, description="Years covered by the free-text works search")
    semantic_scholar_year_window: int = Field(3, description="Years covered by the Semantic Scholar search")
    openalex_page_size: int = Field(100, le=100)
    openalex_text_page_size: int = Field(50, le=100)
    semantic_scholar_page_size: int = Field(50, le=100)
    author_page_size: int = Field(50, le=100)
    request_timeout: float = Field(15.0, description="Per-request HTTP timeout in seconds")


def load_pipeline_config() -> PipelineConfig:
    """
    Builds a PipelineConfig, overriding defaults from PIPELINE_<FIELD> env vars.
    """
    overrides = {}
    for name in PipelineConfig.model_fields:
        raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip():
            overrides[name] = raw.strip()

    if overrides:
        logger.info(f"🔧 Pipeline config overrides: {sorted(overrides)}")

    return PipelineConfig(**overrides)
