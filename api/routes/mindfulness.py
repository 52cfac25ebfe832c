"""Daily mindfulness check-in routes"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from datetime import date
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.models import AppUser
from domain.schemas.mindfulness_schemas import (
    MindfulnessCheckinCreate,
    MindfulnessCheckinUpdate,
    MindfulnessCheckinResponse,
    MindfulnessUpsertResponse,
    MindfulnessStatsResponse,
)
from services.mindfulness_service import MindfulnessService

router = APIRouter(prefix="/mindfulness", tags=["Mindfulness"])
logger = logging.getLogger("lyfe.api.mindfulness")


@router.get("", response_model=List[MindfulnessCheckinResponse])
def list_checkins(
    day: Optional[date] = Query(None, alias="date", description="A single local day"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    limit: int = Query(30, ge=1, le=366),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MindfulnessService.list_checkins(db, user.user_id, day, start_date, end_date, limit)


@router.get("/stats", response_model=MindfulnessStatsResponse)
def checkin_stats(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Averages over an inclusive range; both bounds are required (400)"""
    return MindfulnessService.get_stats(db, user.user_id, start_date, end_date)


@router.get("/date/{day}", response_model=MindfulnessCheckinResponse)
def checkin_for_date(
    day: date,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MindfulnessService.get_by_date(db, user.user_id, day)


@router.post("", response_model=MindfulnessUpsertResponse)
def upsert_checkin(
    payload: MindfulnessCheckinCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create the day's check-in (201) or overwrite the existing one (200)"""
    checkin, was_update = MindfulnessService.upsert_checkin(db, user.user_id, payload)
    body = MindfulnessUpsertResponse(
        checkin=MindfulnessCheckinResponse.model_validate(checkin), was_update=was_update
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if was_update else status.HTTP_201_CREATED,
        content=jsonable_encoder(body),
    )


@router.put("/{checkin_id}", response_model=MindfulnessCheckinResponse)
def update_checkin(
    checkin_id: UUID,
    payload: MindfulnessCheckinUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MindfulnessService.update_checkin(db, user.user_id, checkin_id, payload)


@router.delete("/{checkin_id}")
def delete_checkin(
    checkin_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    MindfulnessService.delete_checkin(db, user.user_id, checkin_id)
    return success_response(message="Check-in deleted")
