# File: services/scrape_service.py
import logging
from typing import Dict, Optional

from agents.data_acquisition_agent import DataAcquisitionAgent, data_acquisition_agent
from services.pipeline_config import PipelineConfig, load_pipeline_config
from services.skill_extraction_service import extract_skills_from_publications

logger = logging.getLogger(__name__)


async def scrape_author_publications(
    author_name: str,
    config: Optional[PipelineConfig] = None,
    acquisition: Optional[DataAcquisitionAgent] = None,
) -> Dict:
    config = config or load_pipeline_config()
    acquisition = acquisition or data_acquisition_agent

    publications = await acquisition.search_author(author_name, config)
    skills = extract_skills_from_publications(publications)
    logger.info(f"🧾 Scraped {len(publications)} publications and {len(skills)} skills for '{author_name}'")

    return {
        "publications": [p.model_dump(mode="json") for p in publications],
        "extractedSkills": skills,
        "totalFound": len(publications),
    }
