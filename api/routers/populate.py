# api/routers/populate.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from api.dependencies.database import get_db
from api.models.population_models import PopulationRequest, PopulationResponse
from services.population_service import run_population
from services.status_service import get_population_status

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/candidates", response_model=PopulationResponse)
async def populate_candidates_endpoint(
    payload: PopulationRequest,
    db: Session = Depends(get_db),
) -> PopulationResponse:
    # Fatal pipeline errors come back as success=False with a 200
    result = await run_population(
        db,
        universities=payload.universities,
        min_citations=payload.min_citations,
        max_candidates=payload.max_candidates,
        graduation_years=payload.graduation_years,
        test_mode=payload.test_mode,
    )
    return PopulationResponse(**result)


@router.get("/status")
async def population_status_endpoint(db: Session = Depends(get_db)) -> dict:
    try:
        return get_population_status(db)
    except Exception:
        logger.error("Error getting population status", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to get status")
