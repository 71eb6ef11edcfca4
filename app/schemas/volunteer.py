# app/schemas/volunteer.py
from pydantic import Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime, date

from app.schemas.common import CamelModel, not_blank, unique_skills

STATE_PATTERN = r"^[A-Z]{2}$"
ZIP_PATTERN = r"^\d{5,9}$"

REQUIRED_PROFILE_FIELDS = ("full_name", "address1", "city", "state", "zip_code", "skills")

# Lists that may be left out of an update but never sent as null
NON_NULLABLE_UPDATE_FIELDS = ("availability",)

# Volunteer Profile Schemas
class VolunteerBase(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=50)
    address1: str = Field(..., min_length=1, max_length=100)
    address2: Optional[str] = Field(None, max_length=100)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., pattern=STATE_PATTERN)
    zip_code: str = Field(..., pattern=ZIP_PATTERN)
    skills: List[str] = Field(..., min_length=1)
    preferences: Optional[str] = None
    availability: List[date] = []

    @field_validator('full_name', 'address1', 'city')
    def validate_not_blank(cls, v):
        return not_blank(v)

class VolunteerCreate(VolunteerBase):

    @field_validator('skills')
    def validate_skills(cls, v):
        v = unique_skills(v)
        if not v:
            raise ValueError('At least one skill is required')
        return v

class VolunteerUpdate(CamelModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=50)
    address1: Optional[str] = Field(None, min_length=1, max_length=100)
    address2: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, pattern=STATE_PATTERN)
    zip_code: Optional[str] = Field(None, pattern=ZIP_PATTERN)
    skills: Optional[List[str]] = None
    preferences: Optional[str] = None
    availability: Optional[List[date]] = None

    @field_validator('full_name', 'address1', 'city')
    def validate_not_blank(cls, v):
        return not_blank(v)

    @field_validator('skills')
    def validate_skills(cls, v):
        if v is None:
            return v
        v = unique_skills(v)
        if not v:
            raise ValueError('At least one skill is required')
        return v

    @model_validator(mode='after')
    def validate_required_not_null(self):
        nulled = [
            to_camel(name) for name in REQUIRED_PROFILE_FIELDS + NON_NULLABLE_UPDATE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"Required fields cannot be null: {', '.join(nulled)}")
        return self

class Volunteer(VolunteerBase):
    id: int
    location: str
    created_at: datetime
    updated_at: datetime

class VolunteerSummary(CamelModel):
    """What the volunteer lookup exposes to history enrichment."""
    id: int
    name: str
    skills: List[str] = []
    location: Optional[str] = None
