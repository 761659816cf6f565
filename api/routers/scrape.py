# api/routers/scrape.py
from fastapi import APIRouter, HTTPException
import logging

from api.models.candidate_models import ScrapeRequest
from services.scrape_service import scrape_author_publications

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/publications")
async def scrape_publications_endpoint(payload: ScrapeRequest) -> dict:
    try:
        return await scrape_author_publications(payload.authorName.strip())
    except Exception:
        logger.error("Error scraping publications", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to scrape publications")
