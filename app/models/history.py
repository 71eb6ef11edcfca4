# app/models/history.py
from sqlmodel import SQLModel, Field, Column, Text, JSON
from typing import Optional, List
from datetime import datetime
import datetime as dt

class VolunteerHistory(SQLModel, table=True):
    __tablename__ = "volunteer_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    volunteer_id: int = Field(..., index=True)
    event_id: int = Field(..., index=True)
    event_name: str = Field(max_length=200)
    event_date: dt.date = Field(..., index=True)
    event_location: str = Field(max_length=255)
    status: str = Field(default="scheduled", max_length=20, index=True)

    # Filled in when the event is completed
    hours_worked: Optional[int] = Field(default=None, ge=0)
    skills_used: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    feedback: Optional[str] = Field(default=None, sa_column=Column(Text))
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    completed_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
