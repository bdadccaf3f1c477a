from __future__ import annotations

import json
import logging
from typing import Iterable, Optional, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from db import BlobStore
from exceptions import StorageError
from history import fold_session, replace_session, iter_sessions
from models import (
    Exercise,
    ExerciseData,
    PlanData,
    TrainingPlan,
    WorkoutHistory,
    WorkoutSession,
)
from seed_sample_data import sample_exercises, sample_plans
from tools import Clock, IdGenerator, SystemClock, TimeTools, UuidIdGenerator

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

UNKNOWN_EXERCISE = "Unknown Exercise"
UNKNOWN_PLAN = "Unknown Plan"


class DataStore:
    """Owns the exercise, plan and history collections and persists them.

    Every mutation builds the new collection, writes the whole collection to
    the blob store and only then replaces the in-memory copy. If the write
    raises, the store keeps its previous state.
    """

    COLLECTIONS = ("exercises", "plans", "history")

    def __init__(
        self,
        blob_store: BlobStore,
        id_generator: IdGenerator | None = None,
        clock: Clock | None = None,
        key_prefix: str = "soturiyfit",
    ) -> None:
        self._blobs = blob_store
        self._new_id = id_generator or UuidIdGenerator()
        self._now = clock or SystemClock()
        self.key_prefix = key_prefix
        self._exercises: list[Exercise] = self._load(
            "exercises", Exercise, sample_exercises
        )
        self._plans: list[TrainingPlan] = self._load("plans", TrainingPlan, sample_plans)
        self._history: list[WorkoutHistory] = self._load("history", WorkoutHistory, list)

    @staticmethod
    def blob_key(key_prefix: str, collection: str) -> str:
        return f"{key_prefix}-{collection}"

    def _key(self, collection: str) -> str:
        return self.blob_key(self.key_prefix, collection)

    def _load(self, collection: str, model: type[M], fallback) -> list[M]:
        key = self._key(collection)
        raw = self._blobs.get(key)
        if raw is None:
            logger.debug("blob %s absent, using defaults", key)
            return fallback()
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise StorageError(f"blob {key} is not a JSON array", key=key)
            return [model.model_validate(item) for item in items]
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise StorageError(f"blob {key} is corrupt: {e}", key=key)

    def _persist(self, collection: str, items: Iterable[BaseModel]) -> None:
        key = self._key(collection)
        text = json.dumps([item.to_json_dict() for item in items])
        self._blobs.set(key, text)

    def save_all(self) -> None:
        """Write all three collections to the blob store."""
        self._persist("exercises", self._exercises)
        self._persist("plans", self._plans)
        self._persist("history", self._history)

    def _fresh_id(self, taken: set[str]) -> str:
        while True:
            new_id = self._new_id()
            if new_id and new_id not in taken:
                return new_id
            logger.debug("generated id %s already in use, retrying", new_id)

    # -- read access -------------------------------------------------
    # Readers get copies; changes only reach the store through the
    # mutation methods below.

    def _find_exercise(self, exercise_id: str) -> Optional[Exercise]:
        return next((e for e in self._exercises if e.id == exercise_id), None)

    def _find_plan(self, plan_id: str) -> Optional[TrainingPlan]:
        return next((p for p in self._plans if p.id == plan_id), None)

    @property
    def exercises(self) -> list[Exercise]:
        return [e.model_copy(deep=True) for e in self._exercises]

    @property
    def plans(self) -> list[TrainingPlan]:
        return [p.model_copy(deep=True) for p in self._plans]

    @property
    def workout_history(self) -> list[WorkoutHistory]:
        return [h.model_copy(deep=True) for h in self._history]

    def get_exercise(self, exercise_id: str) -> Optional[Exercise]:
        exercise = self._find_exercise(exercise_id)
        return exercise.model_copy(deep=True) if exercise else None

    def get_plan(self, plan_id: str) -> Optional[TrainingPlan]:
        plan = self._find_plan(plan_id)
        return plan.model_copy(deep=True) if plan else None

    def get_session(self, session_id: str) -> Optional[WorkoutSession]:
        for _date, session in iter_sessions(self._history):
            if session.id == session_id:
                return session.model_copy(deep=True)
        return None

    def exercise_title(self, exercise_id: str) -> str:
        exercise = self._find_exercise(exercise_id)
        return exercise.title if exercise else UNKNOWN_EXERCISE

    def plan_title(self, plan_id: str) -> str:
        plan = self._find_plan(plan_id)
        return plan.title if plan else UNKNOWN_PLAN

    def search_exercises(self, term: str) -> list[Exercise]:
        term = term.lower()
        return [
            e.model_copy(deep=True)
            for e in self._exercises
            if term in e.title.lower()
            or term in e.description.lower()
            or term in e.muscle_group.lower()
            or term in e.exercise_type.lower()
        ]

    def search_plans(self, term: str) -> list[TrainingPlan]:
        term = term.lower()
        return [
            p.model_copy(deep=True)
            for p in self._plans
            if term in p.title.lower() or term in p.description.lower()
        ]

    # -- exercises ----------------------------------------------------

    def add_exercise(self, data: ExerciseData | dict) -> Exercise:
        if isinstance(data, BaseModel):
            data = data.model_dump()
        fields = {k: v for k, v in dict(data).items() if k != "id"}
        exercise_id = self._fresh_id({e.id for e in self._exercises})
        exercise = Exercise.model_validate({**fields, "id": exercise_id})
        updated = [*self._exercises, exercise]
        self._persist("exercises", updated)
        self._exercises = updated
        logger.debug("added exercise %s", exercise_id)
        return exercise.model_copy(deep=True)

    def update_exercise(self, exercise: Exercise) -> None:
        if self._find_exercise(exercise.id) is None:
            logger.debug("update_exercise: %s not found", exercise.id)
            return
        stored = exercise.model_copy(deep=True)
        updated = [stored if e.id == exercise.id else e for e in self._exercises]
        self._persist("exercises", updated)
        self._exercises = updated
        logger.debug("updated exercise %s", exercise.id)

    def delete_exercise(self, exercise_id: str) -> None:
        if self._find_exercise(exercise_id) is None:
            logger.debug("delete_exercise: %s not found", exercise_id)
            return
        updated = [e for e in self._exercises if e.id != exercise_id]
        self._persist("exercises", updated)
        self._exercises = updated
        logger.debug("deleted exercise %s", exercise_id)

    # -- plans --------------------------------------------------------

    def add_plan(self, data: PlanData | dict) -> TrainingPlan:
        if isinstance(data, BaseModel):
            data = data.model_dump()
        fields = {
            k: v
            for k, v in dict(data).items()
            if k not in {"id", "created_at", "updated_at", "createdAt", "updatedAt"}
        }
        now = self._now()
        plan_id = self._fresh_id({p.id for p in self._plans})
        plan = TrainingPlan.model_validate(
            {**fields, "id": plan_id, "created_at": now, "updated_at": now}
        )
        updated = [*self._plans, plan]
        self._persist("plans", updated)
        self._plans = updated
        logger.debug("added plan %s", plan_id)
        return plan.model_copy(deep=True)

    def update_plan(self, plan: TrainingPlan) -> None:
        existing = self._find_plan(plan.id)
        if existing is None:
            logger.debug("update_plan: %s not found", plan.id)
            return
        now = self._now()
        if TimeTools.parse_timestamp(now) < TimeTools.parse_timestamp(existing.created_at):
            now = existing.created_at
        stored = plan.model_copy(
            update={"created_at": existing.created_at, "updated_at": now}, deep=True
        )
        updated = [stored if p.id == plan.id else p for p in self._plans]
        self._persist("plans", updated)
        self._plans = updated
        logger.debug("updated plan %s", plan.id)

    def delete_plan(self, plan_id: str) -> None:
        if self._find_plan(plan_id) is None:
            logger.debug("delete_plan: %s not found", plan_id)
            return
        updated = [p for p in self._plans if p.id != plan_id]
        self._persist("plans", updated)
        self._plans = updated
        logger.debug("deleted plan %s", plan_id)

    # -- workout sessions ----------------------------------------------

    def add_workout_session(self, session: WorkoutSession) -> WorkoutSession:
        taken = {s.id for _d, s in iter_sessions(self._history)}
        stored = session.model_copy(
            update={"id": self._fresh_id(taken)}, deep=True
        )
        updated = fold_session(self._history, stored)
        self._persist("history", updated)
        self._history = updated
        logger.debug("added workout session %s", stored.id)
        return stored.model_copy(deep=True)

    def update_workout_session(self, session: WorkoutSession) -> None:
        updated = replace_session(self._history, session.model_copy(deep=True))
        if updated is None:
            logger.debug("update_workout_session: %s not found", session.id)
            return
        self._persist("history", updated)
        self._history = updated
        logger.debug("updated workout session %s", session.id)
