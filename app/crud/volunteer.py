# app/crud/volunteer.py
from sqlmodel import Session, select
from typing import List, Optional, Dict, Any
from datetime import datetime
import logging

from app.models.volunteer import Volunteer
from app.schemas.volunteer import VolunteerCreate, VolunteerUpdate

logger = logging.getLogger(__name__)

def _serialize_availability(data: Dict[str, Any]) -> Dict[str, Any]:
    # The JSON column stores ISO strings
    if data.get("availability") is not None:
        data["availability"] = [day.isoformat() for day in data["availability"]]
    return data

class VolunteerCRUD:

    def create_volunteer(self, db: Session, volunteer_data: VolunteerCreate) -> Volunteer:
        """Create a new volunteer profile."""
        volunteer = Volunteer(**_serialize_availability(volunteer_data.model_dump()))
        db.add(volunteer)
        db.commit()
        db.refresh(volunteer)
        logger.info(f"Created volunteer profile {volunteer.id}")
        return volunteer

    def get_volunteer(self, db: Session, volunteer_id: int) -> Optional[Volunteer]:
        """Get volunteer by ID."""
        return db.get(Volunteer, volunteer_id)

    def get_volunteers(self, db: Session) -> List[Volunteer]:
        """Get all volunteer profiles."""
        return db.exec(select(Volunteer).order_by(Volunteer.id)).all()

    def update_volunteer(
        self, db: Session, volunteer_id: int, update_data: VolunteerUpdate
    ) -> Optional[Volunteer]:
        """Update volunteer profile."""
        volunteer = self.get_volunteer(db, volunteer_id)
        if not volunteer:
            return None

        update_dict = _serialize_availability(update_data.model_dump(exclude_unset=True))
        if update_dict:
            update_dict["updated_at"] = datetime.utcnow()
            for key, value in update_dict.items():
                setattr(volunteer, key, value)

            db.add(volunteer)
            db.commit()
            db.refresh(volunteer)

        return volunteer

    def delete_volunteer(self, db: Session, volunteer_id: int) -> bool:
        """Delete volunteer profile."""
        volunteer = self.get_volunteer(db, volunteer_id)
        if not volunteer:
            return False

        db.delete(volunteer)
        db.commit()
        logger.info(f"Deleted volunteer profile {volunteer_id}")
        return True

# Create instances
volunteer_crud = VolunteerCRUD()
