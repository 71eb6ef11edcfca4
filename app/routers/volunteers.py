# volunteers.py
import logging
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from app.core.exceptions import AppError, NotFoundError, UnexpectedError
from app.crud.volunteer import volunteer_crud
from app.database.engine import get_db
from app.schemas.common import ApiResponse, ErrorResponse
from app.schemas.volunteer import VolunteerCreate, VolunteerUpdate, Volunteer

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/volunteers",
    tags=["volunteers"],
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Not found"},
    },
)

VOLUNTEER_NOT_FOUND = "Volunteer not found"

# ========================================
# VOLUNTEER PROFILE ENDPOINTS
# ========================================

@router.post("", response_model=ApiResponse[Volunteer], status_code=status.HTTP_201_CREATED)
def create_volunteer(
    volunteer_data: VolunteerCreate,
    db: Session = Depends(get_db)
):
    """Save a volunteer profile submitted from the profile form."""
    try:
        volunteer = volunteer_crud.create_volunteer(db, volunteer_data)
        return ApiResponse(
            data=Volunteer.model_validate(volunteer),
            message="Volunteer profile created successfully"
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error creating volunteer profile: {e}")
        raise UnexpectedError("Failed to create volunteer profile", error=str(e))

@router.get("", response_model=ApiResponse[List[Volunteer]])
def get_volunteers(db: Session = Depends(get_db)):
    """List volunteer profiles."""
    try:
        volunteers = volunteer_crud.get_volunteers(db)
        return ApiResponse(data=[Volunteer.model_validate(v) for v in volunteers])

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error listing volunteers: {e}")
        raise UnexpectedError("Failed to list volunteers", error=str(e))

@router.get("/{volunteer_id}", response_model=ApiResponse[Volunteer])
def get_volunteer(
    volunteer_id: int,
    db: Session = Depends(get_db)
):
    """Get a volunteer profile."""
    try:
        volunteer = volunteer_crud.get_volunteer(db, volunteer_id)
        if not volunteer:
            raise NotFoundError(VOLUNTEER_NOT_FOUND)

        return ApiResponse(data=Volunteer.model_validate(volunteer))

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error getting volunteer profile: {e}")
        raise UnexpectedError("Failed to get volunteer profile", error=str(e))

@router.put("/{volunteer_id}", response_model=ApiResponse[Volunteer])
def update_volunteer(
    volunteer_id: int,
    update_data: VolunteerUpdate,
    db: Session = Depends(get_db)
):
    """Update a volunteer profile. Fields left out of the body are kept."""
    try:
        volunteer = volunteer_crud.update_volunteer(db, volunteer_id, update_data)
        if not volunteer:
            raise NotFoundError(VOLUNTEER_NOT_FOUND)

        return ApiResponse(
            data=Volunteer.model_validate(volunteer),
            message="Volunteer profile updated successfully"
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error updating volunteer profile: {e}")
        raise UnexpectedError("Failed to update volunteer profile", error=str(e))

@router.delete("/{volunteer_id}", response_model=ApiResponse[None])
def delete_volunteer(
    volunteer_id: int,
    db: Session = Depends(get_db)
):
    """Delete a volunteer profile. Their history entries are kept."""
    try:
        if not volunteer_crud.delete_volunteer(db, volunteer_id):
            raise NotFoundError(VOLUNTEER_NOT_FOUND)

        return ApiResponse(message="Volunteer profile deleted successfully")

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error deleting volunteer profile: {e}")
        raise UnexpectedError("Failed to delete volunteer profile", error=str(e))
