# app/services/__init__.py
"""
Shared services layer: statistics and volunteer lookup.
"""

from app.services.stats_service import StatsService
from app.services.volunteer_lookup import VolunteerLookup, get_volunteer_lookup

__all__ = [
    "StatsService",
    "VolunteerLookup",
    "get_volunteer_lookup",
]
