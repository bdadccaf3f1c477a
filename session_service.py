from __future__ import annotations

import logging
import math
import re

from data_store import DataStore
from exceptions import PlanNotFoundError
from models import (
    ExerciseSet,
    SessionDraft,
    SessionExerciseData,
    TrainingPlan,
    WorkoutSession,
)
from tools import Clock, MathTools, SystemClock

logger = logging.getLogger(__name__)


def build_session(plan: TrainingPlan, clock: Clock | None = None) -> WorkoutSession:
    """Materialise an unstarted session with one set per planned set.

    The session is built from fresh objects so later edits to ``plan`` never
    reach it.
    """
    now = (clock or SystemClock())()
    exercises_data = [
        SessionExerciseData(
            exercise_id=pe.exercise_id,
            sets=[
                ExerciseSet(weight=0.0, reps=pe.reps, completed=False)
                for _ in range(pe.sets)
            ],
        )
        for pe in plan.exercises
    ]
    return WorkoutSession(
        plan_id=plan.id,
        start_time=now,
        exercises_data=exercises_data,
    )


_LEADING_FLOAT = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_LEADING_INT = re.compile(r"\s*([-+]?\d+)")


def _parse_float(value) -> float:
    """Read the leading number of ``value`` ("10kg" -> 10.0), else 0."""
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_FLOAT.match(str(value)) if value is not None else None
        if match is None:
            return 0.0
        number = float(match.group(1))
    if not math.isfinite(number):
        return 0.0
    return number


def _parse_int(value) -> int | None:
    """Read the leading integer of ``value`` ("12 reps" -> 12, "7.8" -> 7)."""
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value)) if value is not None else None
    if match is None:
        return None
    return int(match.group(1))


def _check_set_index(draft: SessionDraft, set_index: int) -> None:
    exercises = draft.session.exercises_data
    if not 0 <= draft.current_exercise_index < len(exercises):
        raise IndexError(
            f"set index {set_index} out of range: no exercise at "
            f"position {draft.current_exercise_index}"
        )
    if not 0 <= set_index < len(exercises[draft.current_exercise_index].sets):
        raise IndexError(f"set index {set_index} out of range")


def _edit_set(draft: SessionDraft, set_index: int, **changes) -> SessionDraft:
    _check_set_index(draft, set_index)
    new = draft.model_copy(deep=True)
    data = new.session.exercises_data[new.current_exercise_index]
    data.sets[set_index] = data.sets[set_index].model_copy(update=changes)
    return new


def current_exercise(draft: SessionDraft) -> SessionExerciseData:
    return draft.session.exercises_data[draft.current_exercise_index]


def is_last_exercise(draft: SessionDraft) -> bool:
    return draft.current_exercise_index >= len(draft.session.exercises_data) - 1


def set_weight(draft: SessionDraft, set_index: int, value) -> SessionDraft:
    """Set the weight of one set; unparsable input becomes 0."""
    return _edit_set(draft, set_index, weight=_parse_float(value))


def set_reps(draft: SessionDraft, set_index: int, value) -> SessionDraft:
    """Set the reps of one set; unparsable input becomes 0, negatives floor at 0."""
    reps = _parse_int(value)
    return _edit_set(draft, set_index, reps=max(reps or 0, 0))


def set_rpe(draft: SessionDraft, set_index: int, value) -> SessionDraft:
    """Set perceived exertion (1-10); empty or unparsable input clears it."""
    rpe = _parse_int(value)
    if rpe is not None:
        rpe = int(MathTools.clamp(rpe, 1, 10))
    return _edit_set(draft, set_index, rpe=rpe)


def toggle_completed(draft: SessionDraft, set_index: int) -> SessionDraft:
    _check_set_index(draft, set_index)
    data = current_exercise(draft)
    return _edit_set(draft, set_index, completed=not data.sets[set_index].completed)


def advance(draft: SessionDraft) -> SessionDraft:
    if is_last_exercise(draft):
        return draft
    return draft.model_copy(
        update={"current_exercise_index": draft.current_exercise_index + 1}
    )


def retreat(draft: SessionDraft) -> SessionDraft:
    if draft.current_exercise_index <= 0:
        return draft
    return draft.model_copy(
        update={"current_exercise_index": draft.current_exercise_index - 1}
    )


def finish_session(draft: SessionDraft, clock: Clock | None = None) -> WorkoutSession:
    """Return the drafted session stamped with its end time."""
    now = (clock or SystemClock())()
    return draft.session.model_copy(update={"end_time": now}, deep=True)


class SessionService:
    """Starts sessions from stored plans and files finished ones into history."""

    def __init__(self, store: DataStore, clock: Clock | None = None) -> None:
        self.store = store
        self.clock = clock or SystemClock()

    def start_session(self, plan_id: str) -> SessionDraft:
        plan = self.store.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        session = build_session(plan, self.clock)
        logger.info("started session for plan %s", plan_id)
        return SessionDraft(session=session)

    def finish(self, draft: SessionDraft) -> WorkoutSession:
        session = finish_session(draft, self.clock)
        stored = self.store.add_workout_session(session)
        logger.info(
            "finished session %s for plan %s (%d completed sets)",
            stored.id,
            stored.plan_id,
            stored.completed_sets,
        )
        return stored
