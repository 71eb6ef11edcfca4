# app/schemas/common.py
"""Common schemas used across multiple modules."""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Generic, TypeVar, Optional, Iterable, List

T = TypeVar('T')

def unique_skills(skills: Iterable[str]) -> List[str]:
    """Strip, drop blanks and de-duplicate while keeping first-seen order."""
    seen: List[str] = []
    for skill in skills:
        skill = skill.strip()
        if skill and skill not in seen:
            seen.append(skill)
    return seen

def not_blank(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError('Value must not be blank')
    return v

class CamelModel(BaseModel):
    """
    Base for API schemas.

    Fields are declared in snake_case and exchanged as camelCase JSON
    (``volunteer_id`` <-> ``volunteerId``). Either spelling is accepted on input.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope for every successful response.

    Usage:
        ApiResponse[HistoryEntry](
            data=entry,
            message="History entry created successfully"
        )
    """
    success: bool = Field(True, description="Operation success status")
    data: Optional[T] = Field(None, description="Response payload")
    message: Optional[str] = Field(None, description="Human-readable result message")

class ErrorResponse(BaseModel):
    """Standard error response format."""
    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human-readable error message")
    error: Optional[str] = Field(None, description="Underlying error detail")
