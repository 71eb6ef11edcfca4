# app/crud/history.py
from sqlmodel import Session, select
from typing import List, Optional
from datetime import datetime
import logging

from app.core.exceptions import InvalidStatusTransition, ValidationError
from app.models.history import VolunteerHistory
from app.schemas.history import (
    HistoryEntryCreate, HistoryEntryUpdate, HistoryCompletion,
    HistoryStatus, can_update_status, can_complete
)

logger = logging.getLogger(__name__)

class HistoryCRUD:

    def create_history_entry(self, db: Session, entry_data: HistoryEntryCreate) -> VolunteerHistory:
        """Create a new history entry."""
        entry = VolunteerHistory(**entry_data.model_dump())
        entry.status = entry_data.status.value
        db.add(entry)
        db.commit()
        db.refresh(entry)
        logger.info(f"Created history entry {entry.id} for volunteer {entry.volunteer_id}")
        return entry

    def get_history_entry(self, db: Session, entry_id: int) -> Optional[VolunteerHistory]:
        """Get history entry by ID."""
        return db.get(VolunteerHistory, entry_id)

    def get_history_by_volunteer(self, db: Session, volunteer_id: int) -> List[VolunteerHistory]:
        """Get a volunteer's history, most recent event first."""
        query = (
            select(VolunteerHistory)
            .where(VolunteerHistory.volunteer_id == volunteer_id)
            .order_by(VolunteerHistory.event_date.desc(), VolunteerHistory.id)
        )
        return db.exec(query).all()

    def get_history_by_event(self, db: Session, event_id: int) -> List[VolunteerHistory]:
        """Get every volunteer's entry for one event."""
        query = (
            select(VolunteerHistory)
            .where(VolunteerHistory.event_id == event_id)
            .order_by(VolunteerHistory.id)
        )
        return db.exec(query).all()

    def get_all_history(self, db: Session) -> List[VolunteerHistory]:
        """Get all history entries."""
        return db.exec(select(VolunteerHistory).order_by(VolunteerHistory.id)).all()

    def update_history_entry(
        self, db: Session, entry_id: int, update_data: HistoryEntryUpdate
    ) -> Optional[VolunteerHistory]:
        """Merge the fields the client sent into an existing entry."""
        entry = self.get_history_entry(db, entry_id)
        if not entry:
            return None

        update_dict = update_data.model_dump(exclude_unset=True)
        if not update_dict:
            return entry

        current_status = HistoryStatus(entry.status)
        new_status = update_dict.get("status", current_status)
        if not can_update_status(current_status, new_status):
            raise InvalidStatusTransition(current_status.value, new_status.value)

        if update_dict.get("hours_worked") is not None and new_status != HistoryStatus.completed:
            raise ValidationError("hoursWorked can only be set on completed entries")
        if update_dict.get("rating") is not None and new_status != HistoryStatus.completed:
            raise ValidationError("rating can only be set on completed entries")

        if "status" in update_dict:
            update_dict["status"] = new_status.value
        for key, value in update_dict.items():
            setattr(entry, key, value)
        entry.updated_at = datetime.utcnow()

        db.add(entry)
        db.commit()
        db.refresh(entry)
        logger.info(f"Updated history entry {entry_id}: {sorted(update_dict)}")
        return entry

    def complete_event(
        self, db: Session, entry_id: int, completion: HistoryCompletion
    ) -> Optional[VolunteerHistory]:
        """Mark an entry as completed and record hours, skills, feedback and rating."""
        entry = self.get_history_entry(db, entry_id)
        if not entry:
            return None

        current_status = HistoryStatus(entry.status)
        if not can_complete(current_status):
            raise InvalidStatusTransition(current_status.value, HistoryStatus.completed.value)

        now = datetime.utcnow()
        entry.status = HistoryStatus.completed.value
        entry.hours_worked = completion.hours_worked
        entry.skills_used = list(completion.skills_used)
        entry.feedback = completion.feedback
        entry.rating = completion.rating
        entry.completed_at = now
        entry.updated_at = now

        db.add(entry)
        db.commit()
        db.refresh(entry)
        logger.info(f"Completed history entry {entry_id} with {entry.hours_worked} hours")
        return entry

    def delete_history_entry(self, db: Session, entry_id: int) -> Optional[VolunteerHistory]:
        """Delete a history entry, returning what was removed."""
        entry = self.get_history_entry(db, entry_id)
        if not entry:
            return None

        db.delete(entry)
        db.commit()
        logger.info(f"Deleted history entry {entry_id}")
        return entry

# Create instances
history_crud = HistoryCRUD()
