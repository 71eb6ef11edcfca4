# app/services/stats_service.py
"""
Statistics derived from volunteer history.

Everything here is computed from the history table at read time; nothing is
cached, so results always reflect the current contents of the store.

Ranking key: total hours worked on completed events (descending), then the
number of completed events (descending), then volunteer id (ascending) so
that ties have a stable order. Only volunteers with at least one completed
event are ranked.
"""
import logging
from typing import List, Optional

from sqlmodel import Session, select, func

from app.core.config import settings
from app.crud.history import history_crud
from app.models.history import VolunteerHistory
from app.schemas.history import HistoryStatus, TopVolunteer, VolunteerStats

logger = logging.getLogger(__name__)


class StatsService:
    """Read-time aggregation over volunteer history."""

    @staticmethod
    def rank_volunteers(db: Session) -> List[TopVolunteer]:
        """
        Rank every volunteer that has completed at least one event.

        Args:
            db: Database session

        Returns:
            Rows ordered by the ranking key, ``rank`` starting at 1
        """
        total_hours = func.coalesce(func.sum(VolunteerHistory.hours_worked), 0)
        completed_events = func.count(VolunteerHistory.id)

        query = (
            select(VolunteerHistory.volunteer_id, total_hours, completed_events)
            .where(VolunteerHistory.status == HistoryStatus.completed.value)
            .group_by(VolunteerHistory.volunteer_id)
            .order_by(total_hours.desc(), completed_events.desc(), VolunteerHistory.volunteer_id)
        )
        rows = db.exec(query).all()

        return [
            TopVolunteer(
                rank=position,
                volunteer_id=volunteer_id,
                total_hours=int(hours),
                completed_events=count
            )
            for position, (volunteer_id, hours, count) in enumerate(rows, start=1)
        ]

    @staticmethod
    def get_top_volunteers(db: Session, limit: Optional[int] = None) -> List[TopVolunteer]:
        """Top ``limit`` volunteers (default from settings)."""
        if limit is None:
            limit = settings.TOP_VOLUNTEERS_DEFAULT_LIMIT
        return StatsService.rank_volunteers(db)[:max(limit, 0)]

    @staticmethod
    def get_volunteer_stats(db: Session, volunteer_id: int) -> VolunteerStats:
        """
        Aggregate one volunteer's history.

        A volunteer without entries gets zero counts rather than an error.
        """
        entries = history_crud.get_history_by_volunteer(db, volunteer_id)

        completed = [e for e in entries if e.status == HistoryStatus.completed.value]
        ratings = [e.rating for e in completed if e.rating is not None]

        status_breakdown = {status.value: 0 for status in HistoryStatus}
        for entry in entries:
            status_breakdown[entry.status] = status_breakdown.get(entry.status, 0) + 1

        skills_used: List[str] = []
        for entry in completed:
            for skill in entry.skills_used or []:
                if skill not in skills_used:
                    skills_used.append(skill)

        rank = next(
            (row.rank for row in StatsService.rank_volunteers(db) if row.volunteer_id == volunteer_id),
            None
        )

        stats = VolunteerStats(
            total_entries=len(entries),
            completed_entries=len(completed),
            total_hours=sum(e.hours_worked or 0 for e in completed),
            average_rating=round(sum(ratings) / len(ratings), 2) if ratings else 0.0,
            status_breakdown=status_breakdown,
            skills_used=skills_used,
            rank=rank
        )
        logger.debug(f"Computed stats for volunteer {volunteer_id}: {stats.total_entries} entries")
        return stats

    @staticmethod
    def get_event_history(db: Session, event_id: int) -> List[VolunteerHistory]:
        """All history entries recorded for an event."""
        return history_crud.get_history_by_event(db, event_id)
