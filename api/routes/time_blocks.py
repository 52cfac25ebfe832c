"""Time block routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from datetime import date
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.models import AppUser
from domain.schemas.goal_schemas import TimeBlockCreate, TimeBlockResponse
from services.goal_service import GoalService

router = APIRouter(prefix="/time", tags=["Time"])
logger = logging.getLogger("lyfe.api.time")


@router.get("/blocks", response_model=List[TimeBlockResponse])
def list_blocks(
    day: Optional[date] = Query(None, alias="date"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return GoalService.list_blocks(db, user.user_id, day, start_date, end_date)


@router.post("/blocks", response_model=TimeBlockResponse, status_code=status.HTTP_201_CREATED)
def create_block(
    payload: TimeBlockCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Give either ``duration`` or both ``start_time`` and ``end_time``"""
    return GoalService.create_block(db, user.user_id, payload)


@router.delete("/blocks/{block_id}")
def delete_block(
    block_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    GoalService.delete_block(db, user.user_id, block_id)
    return success_response(message="Time block deleted")
