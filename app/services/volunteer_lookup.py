# app/services/volunteer_lookup.py
"""
Volunteer lookup used to decorate history data with volunteer details.

History entries only carry a volunteer id. The lookup resolves that id to a
``VolunteerSummary``; enrichment helpers substitute ``"Unknown"`` and an empty
skill list whenever the lookup misses or raises, so a broken lookup never
fails the response that is being enriched.
"""
import logging
from typing import Dict, Iterable, List, Optional

from fastapi import Depends
from sqlmodel import Session

from app.crud.volunteer import volunteer_crud
from app.database.engine import get_db
from app.models.history import VolunteerHistory
from app.schemas.history import EnrichedHistoryEntry, RankedVolunteer, TopVolunteer
from app.schemas.volunteer import VolunteerSummary

logger = logging.getLogger(__name__)

UNKNOWN_VOLUNTEER_NAME = "Unknown"


class VolunteerLookup:
    """Resolves volunteer ids against the volunteer profile table."""

    def __init__(self, db: Session):
        self.db = db

    def find_volunteer(self, volunteer_id: int) -> Optional[VolunteerSummary]:
        volunteer = volunteer_crud.get_volunteer(self.db, volunteer_id)
        if not volunteer:
            return None
        return VolunteerSummary(
            id=volunteer.id,
            name=volunteer.full_name,
            skills=list(volunteer.skills or []),
            location=volunteer.location
        )


def get_volunteer_lookup(db: Session = Depends(get_db)) -> VolunteerLookup:
    return VolunteerLookup(db)


def safe_lookup(lookup: VolunteerLookup, volunteer_id: int) -> Optional[VolunteerSummary]:
    """Look a volunteer up, treating any lookup failure as a miss."""
    try:
        return lookup.find_volunteer(volunteer_id)
    except Exception as e:
        logger.warning(f"Volunteer lookup failed for volunteer {volunteer_id}: {e}")
        return None


class _CachedLookup:
    # One lookup per distinct volunteer within a single response
    def __init__(self, lookup: VolunteerLookup):
        self.lookup = lookup
        self.cache: Dict[int, Optional[VolunteerSummary]] = {}

    def get(self, volunteer_id: int) -> Optional[VolunteerSummary]:
        if volunteer_id not in self.cache:
            self.cache[volunteer_id] = safe_lookup(self.lookup, volunteer_id)
        return self.cache[volunteer_id]


def enrich_history_entries(
    entries: Iterable[VolunteerHistory],
    lookup: VolunteerLookup
) -> List[EnrichedHistoryEntry]:
    cached = _CachedLookup(lookup)
    enriched = []
    for entry in entries:
        volunteer = cached.get(entry.volunteer_id)
        enriched.append(EnrichedHistoryEntry(
            **entry.model_dump(),
            volunteer_name=volunteer.name if volunteer else UNKNOWN_VOLUNTEER_NAME,
            volunteer_skills=volunteer.skills if volunteer else []
        ))
    return enriched


def enrich_rankings(
    rankings: Iterable[TopVolunteer],
    lookup: VolunteerLookup
) -> List[RankedVolunteer]:
    cached = _CachedLookup(lookup)
    enriched = []
    for row in rankings:
        volunteer = cached.get(row.volunteer_id)
        enriched.append(RankedVolunteer(
            **row.model_dump(),
            volunteer_name=volunteer.name if volunteer else UNKNOWN_VOLUNTEER_NAME,
            volunteer_skills=volunteer.skills if volunteer else []
        ))
    return enriched
