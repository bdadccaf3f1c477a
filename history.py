"""Grouping of finished workout sessions into per-day history buckets."""

from __future__ import annotations

from models import WorkoutHistory, WorkoutSession
from tools import TimeTools


def session_date(start_time: str) -> str:
    """Return the ``YYYY-MM-DD`` UTC date a session belongs to."""
    return TimeTools.date_only(start_time)


def fold_session(
    history: list[WorkoutHistory], session: WorkoutSession
) -> list[WorkoutHistory]:
    """Return a copy of ``history`` with ``session`` added to its day bucket.

    A session is appended to the bucket whose date matches the date of its
    start time. When no such bucket exists a new one is added at the end, so
    buckets stay in insertion order rather than chronological order.
    """
    date = session_date(session.start_time)
    result: list[WorkoutHistory] = []
    placed = False
    for bucket in history:
        if not placed and bucket.date == date:
            bucket = bucket.model_copy(
                update={"workout_sessions": [*bucket.workout_sessions, session]}
            )
            placed = True
        result.append(bucket)
    if not placed:
        result.append(WorkoutHistory(date=date, workout_sessions=[session]))
    return result


def replace_session(
    history: list[WorkoutHistory], session: WorkoutSession
) -> list[WorkoutHistory] | None:
    """Replace the stored session sharing ``session.id``; ``None`` if absent."""
    for idx, bucket in enumerate(history):
        for pos, existing in enumerate(bucket.workout_sessions):
            if existing.id != session.id:
                continue
            sessions = list(bucket.workout_sessions)
            sessions[pos] = session
            result = list(history)
            result[idx] = bucket.model_copy(update={"workout_sessions": sessions})
            return result
    return None


def iter_sessions(history: list[WorkoutHistory]):
    """Yield ``(date, session)`` pairs across all buckets."""
    for bucket in history:
        for session in bucket.workout_sessions:
            yield bucket.date, session
