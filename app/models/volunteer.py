# app/models/volunteer.py
from sqlmodel import SQLModel, Field, Column, Text, JSON
from typing import Optional, List
from datetime import datetime

class Volunteer(SQLModel, table=True):
    __tablename__ = "volunteers"

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=50, index=True)
    address1: str = Field(max_length=100)
    address2: Optional[str] = Field(default=None, max_length=100)
    city: str = Field(max_length=100)
    state: str = Field(max_length=2)
    zip_code: str = Field(max_length=9)
    skills: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    preferences: Optional[str] = Field(default=None, sa_column=Column(Text))
    # ISO date strings the volunteer is available on
    availability: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def location(self) -> str:
        return f"{self.city}, {self.state}"
