# history.py
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import AppError, NotFoundError, UnexpectedError
from app.crud.history import history_crud
from app.database.engine import get_db
from app.schemas.common import ApiResponse, ErrorResponse
from app.schemas.history import (
    HistoryEntryCreate, HistoryEntryUpdate, HistoryCompletion,
    HistoryEntry, EnrichedHistoryEntry,
    VolunteerStatsResponse, RankedVolunteer
)
from app.services.stats_service import StatsService
from app.services.volunteer_lookup import (
    VolunteerLookup, get_volunteer_lookup, safe_lookup,
    enrich_history_entries, enrich_rankings
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["history"],
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Not found"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
)

ENTRY_NOT_FOUND = "History entry not found"

# ========================================
# HISTORY ENTRY ENDPOINTS
# ========================================

@router.get("/volunteers/{volunteer_id}/history", response_model=ApiResponse[List[HistoryEntry]])
def get_volunteer_history(
    volunteer_id: int,
    db: Session = Depends(get_db)
):
    """Get a volunteer's participation history, most recent event first."""
    try:
        entries = history_crud.get_history_by_volunteer(db, volunteer_id)
        return ApiResponse(data=[HistoryEntry.model_validate(e) for e in entries])

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error getting volunteer history: {e}")
        raise UnexpectedError("Failed to get volunteer history", error=str(e))

@router.get("/history/{history_id}", response_model=ApiResponse[HistoryEntry])
def get_history_entry(
    history_id: int,
    db: Session = Depends(get_db)
):
    """Get a single history entry."""
    try:
        entry = history_crud.get_history_entry(db, history_id)
        if not entry:
            raise NotFoundError(ENTRY_NOT_FOUND)

        return ApiResponse(data=HistoryEntry.model_validate(entry))

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error getting history entry: {e}")
        raise UnexpectedError("Failed to get history entry", error=str(e))

@router.post(
    "/history",
    response_model=ApiResponse[HistoryEntry],
    status_code=status.HTTP_201_CREATED
)
def create_history_entry(
    entry_data: HistoryEntryCreate,
    db: Session = Depends(get_db)
):
    """Record that a volunteer is signed up for an event."""
    try:
        entry = history_crud.create_history_entry(db, entry_data)
        return ApiResponse(
            data=HistoryEntry.model_validate(entry),
            message="History entry created successfully"
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error creating history entry: {e}")
        raise UnexpectedError("Failed to create history entry", error=str(e))

@router.put("/history/{history_id}", response_model=ApiResponse[HistoryEntry])
def update_history_entry(
    history_id: int,
    update_data: HistoryEntryUpdate,
    db: Session = Depends(get_db)
):
    """Partially update a history entry. Fields left out of the body are kept."""
    try:
        entry = history_crud.update_history_entry(db, history_id, update_data)
        if not entry:
            raise NotFoundError(ENTRY_NOT_FOUND)

        return ApiResponse(
            data=HistoryEntry.model_validate(entry),
            message="History entry updated successfully"
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error updating history entry: {e}")
        raise UnexpectedError("Failed to update history entry", error=str(e))

@router.post("/history/{history_id}/complete", response_model=ApiResponse[HistoryEntry])
def complete_event(
    history_id: int,
    completion: HistoryCompletion,
    db: Session = Depends(get_db)
):
    """Mark an entry as completed, recording hours worked and optional feedback."""
    try:
        entry = history_crud.complete_event(db, history_id, completion)
        if not entry:
            raise NotFoundError(ENTRY_NOT_FOUND)

        return ApiResponse(
            data=HistoryEntry.model_validate(entry),
            message="Event completed successfully"
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error completing event: {e}")
        raise UnexpectedError("Failed to complete event", error=str(e))

@router.delete("/history/{history_id}", response_model=ApiResponse[HistoryEntry])
def delete_history_entry(
    history_id: int,
    db: Session = Depends(get_db)
):
    """Delete a history entry."""
    try:
        entry = history_crud.delete_history_entry(db, history_id)
        if not entry:
            raise NotFoundError(ENTRY_NOT_FOUND)

        return ApiResponse(
            data=HistoryEntry.model_validate(entry),
            message="History entry deleted successfully"
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error deleting history entry: {e}")
        raise UnexpectedError("Failed to delete history entry", error=str(e))

@router.get("/history", response_model=ApiResponse[List[HistoryEntry]])
def get_all_history(db: Session = Depends(get_db)):
    """Get every history entry (admin view)."""
    try:
        entries = history_crud.get_all_history(db)
        return ApiResponse(data=[HistoryEntry.model_validate(e) for e in entries])

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error getting all history: {e}")
        raise UnexpectedError("Failed to get all history", error=str(e))

# ========================================
# STATISTICS ENDPOINTS
# ========================================

@router.get("/volunteers/{volunteer_id}/stats", response_model=ApiResponse[VolunteerStatsResponse])
def get_volunteer_stats(
    volunteer_id: int,
    db: Session = Depends(get_db),
    lookup: VolunteerLookup = Depends(get_volunteer_lookup)
):
    """Get participation statistics for a volunteer."""
    try:
        stats = StatsService.get_volunteer_stats(db, volunteer_id)
        volunteer = safe_lookup(lookup, volunteer_id)

        return ApiResponse(data=VolunteerStatsResponse(volunteer=volunteer, stats=stats))

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error getting volunteer stats: {e}")
        raise UnexpectedError("Failed to get volunteer stats", error=str(e))

@router.get("/top-volunteers", response_model=ApiResponse[List[RankedVolunteer]])
def get_top_volunteers(
    limit: Optional[int] = Query(None, ge=1, le=settings.TOP_VOLUNTEERS_MAX_LIMIT),
    db: Session = Depends(get_db),
    lookup: VolunteerLookup = Depends(get_volunteer_lookup)
):
    """Get volunteers ranked by hours worked, then by completed events."""
    try:
        top_volunteers = StatsService.get_top_volunteers(db, limit)
        return ApiResponse(data=enrich_rankings(top_volunteers, lookup))

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error getting top volunteers: {e}")
        raise UnexpectedError("Failed to get top volunteers", error=str(e))

@router.get("/events/{event_id}/history", response_model=ApiResponse[List[EnrichedHistoryEntry]])
def get_event_history(
    event_id: int,
    db: Session = Depends(get_db),
    lookup: VolunteerLookup = Depends(get_volunteer_lookup)
):
    """Get every volunteer's entry for an event."""
    try:
        entries = StatsService.get_event_history(db, event_id)
        return ApiResponse(data=enrich_history_entries(entries, lookup))

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error getting event history: {e}")
        raise UnexpectedError("Failed to get event history", error=str(e))
