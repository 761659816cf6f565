# api/routers/candidates.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from api.dependencies.database import get_db
from api.models.candidate_models import CandidateCreateRequest
from services.candidate_service import create_candidate, list_candidates
from utils.errors import PersistenceError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def list_candidates_endpoint(db: Session = Depends(get_db)) -> list:
    try:
        return list_candidates(db)
    except Exception:
        logger.error("Error fetching candidates", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch candidates")


@router.post("", status_code=201)
async def create_candidate_endpoint(
    payload: CandidateCreateRequest,
    db: Session = Depends(get_db),
) -> dict:
    try:
        return create_candidate(db, payload.model_dump())
    except PersistenceError:
        logger.error("Error creating candidate", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create candidate")
