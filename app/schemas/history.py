# app/schemas/history.py
from pydantic import Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict
from datetime import datetime, date
from enum import Enum

from app.schemas.common import CamelModel, not_blank, unique_skills
from app.schemas.volunteer import VolunteerSummary

# Enums
class HistoryStatus(str, Enum):
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"
    no_show = "no_show"

# Statuses a generic update may move to, keyed by the current status.
# "completed" is only reachable through the completion operation.
UPDATE_TRANSITIONS: Dict[HistoryStatus, frozenset] = {
    HistoryStatus.scheduled: frozenset({
        HistoryStatus.scheduled, HistoryStatus.cancelled, HistoryStatus.no_show
    }),
    HistoryStatus.cancelled: frozenset({HistoryStatus.cancelled, HistoryStatus.scheduled}),
    HistoryStatus.no_show: frozenset({HistoryStatus.no_show, HistoryStatus.scheduled}),
    HistoryStatus.completed: frozenset({HistoryStatus.completed}),
}

# Statuses the completion operation may start from
COMPLETABLE_STATUSES = frozenset({
    HistoryStatus.scheduled, HistoryStatus.no_show, HistoryStatus.completed
})

def can_update_status(current: HistoryStatus, new: HistoryStatus) -> bool:
    return new in UPDATE_TRANSITIONS[current]

def can_complete(current: HistoryStatus) -> bool:
    return current in COMPLETABLE_STATUSES

REQUIRED_ENTRY_FIELDS = ("volunteer_id", "event_id", "event_name", "event_date", "event_location")

# Fields that may be left out of an update but never sent as null
NON_NULLABLE_UPDATE_FIELDS = ("status", "skills_used")

# History Entry Schemas
class HistoryEntryBase(CamelModel):
    volunteer_id: int
    event_id: int
    event_name: str = Field(..., max_length=200)
    event_date: date
    event_location: str = Field(..., max_length=255)

    @field_validator('event_name', 'event_location')
    def validate_not_blank(cls, v):
        return not_blank(v)

class HistoryEntryCreate(HistoryEntryBase):
    status: HistoryStatus = HistoryStatus.scheduled

    @field_validator('status')
    def validate_initial_status(cls, v):
        if v == HistoryStatus.completed:
            raise ValueError('Entries cannot be created as completed; use the complete endpoint')
        return v

class HistoryEntryUpdate(CamelModel):
    volunteer_id: Optional[int] = None
    event_id: Optional[int] = None
    event_name: Optional[str] = Field(None, max_length=200)
    event_date: Optional[date] = None
    event_location: Optional[str] = Field(None, max_length=255)
    status: Optional[HistoryStatus] = None
    hours_worked: Optional[int] = Field(None, ge=0)
    skills_used: Optional[List[str]] = None
    feedback: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)

    @field_validator('event_name', 'event_location')
    def validate_not_blank(cls, v):
        return not_blank(v)

    @field_validator('skills_used')
    def validate_skills(cls, v):
        if v is None:
            return v
        return unique_skills(v)

    @model_validator(mode='after')
    def validate_required_not_null(self):
        nulled = [
            to_camel(name) for name in REQUIRED_ENTRY_FIELDS + NON_NULLABLE_UPDATE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"Required fields cannot be null: {', '.join(nulled)}")
        return self

class HistoryCompletion(CamelModel):
    hours_worked: int = Field(..., ge=0)
    skills_used: List[str] = []
    feedback: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)

    @field_validator('skills_used')
    def validate_skills(cls, v):
        return unique_skills(v)

class HistoryEntry(HistoryEntryBase):
    id: int
    status: HistoryStatus
    hours_worked: Optional[int] = None
    skills_used: List[str] = []
    feedback: Optional[str] = None
    rating: Optional[int] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

class EnrichedHistoryEntry(HistoryEntry):
    volunteer_name: str
    volunteer_skills: List[str] = []

# Statistics Schemas
class VolunteerStats(CamelModel):
    total_entries: int = 0
    completed_entries: int = 0
    total_hours: int = 0
    average_rating: float = 0.0
    status_breakdown: Dict[str, int] = {}
    skills_used: List[str] = []
    rank: Optional[int] = None

class VolunteerStatsResponse(CamelModel):
    volunteer: Optional[VolunteerSummary] = None
    stats: VolunteerStats

class TopVolunteer(CamelModel):
    rank: int
    volunteer_id: int
    total_hours: int
    completed_events: int

class RankedVolunteer(TopVolunteer):
    volunteer_name: str
    volunteer_skills: List[str] = []
