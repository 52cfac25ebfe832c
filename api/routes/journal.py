"""Journal routes, including AI analysis of entries"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from datetime import datetime
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.enums import JournalEntryType, Mood
from domain.models import AppUser
from domain.schemas.journal_schemas import (
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalEntryResponse,
    JournalSettingsUpdate,
    JournalResponse,
    JournalEntryListResponse,
    JournalStatsResponse,
    JournalTrends,
)
from services.journal_service import JournalService
from services.journal_analysis_service import JournalAnalysisService

router = APIRouter(prefix="/journal", tags=["Journal"])
logger = logging.getLogger("lyfe.api.journal")


@router.get("", response_model=JournalResponse)
def get_journal(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """The user's journal with entries newest first; created on first access"""
    return JournalService.get_journal(db, user.user_id)


@router.post(
    "/entries", response_model=JournalEntryResponse, status_code=status.HTTP_201_CREATED
)
def add_entry(
    payload: JournalEntryCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return JournalService.add_entry(db, user.user_id, payload)


@router.get("/entries", response_model=JournalEntryListResponse)
def list_entries(
    entry_type: Optional[JournalEntryType] = Query(None, alias="type"),
    mood: Optional[Mood] = Query(None),
    tags: Optional[List[str]] = Query(None, description="Entries carrying any of these tags"),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return JournalService.list_entries(
        db, user.user_id, entry_type, mood, tags, start_date, end_date, page, limit
    )


@router.put("/settings", response_model=JournalResponse)
def update_settings(
    payload: JournalSettingsUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return JournalService.update_settings(db, user.user_id, payload)


@router.get("/stats", response_model=JournalStatsResponse)
def journal_stats(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return JournalService.get_stats(db, user.user_id)


@router.get("/trends", response_model=JournalTrends)
def journal_trends(
    limit: int = Query(10, ge=2, le=50),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Emotion trend over the most recent analysed entries"""
    return JournalAnalysisService.get_trends(db, user.user_id, limit)


@router.get("/entries/{entry_id}", response_model=JournalEntryResponse)
def get_entry(
    entry_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return JournalService.get_entry(db, user.user_id, entry_id)


@router.put("/entries/{entry_id}", response_model=JournalEntryResponse)
def update_entry(
    entry_id: UUID,
    payload: JournalEntryUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return JournalService.update_entry(db, user.user_id, entry_id, payload)


@router.delete("/entries/{entry_id}")
def delete_entry(
    entry_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    JournalService.delete_entry(db, user.user_id, entry_id)
    return success_response(message="Journal entry deleted")


@router.post("/entries/{entry_id}/analyze", response_model=JournalEntryResponse)
def analyze_entry(
    entry_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Run emotion, topic and belief analysis and store it on the entry.

    Without an OpenAI key, or when the call fails, a word-list heuristic
    is used and the stored analysis has ``source: "fallback"``.
    """
    return JournalAnalysisService.analyze_entry(db, user.user_id, entry_id)
