"""Fitness tracker data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from exceptions import ValidationError
from tools import MathTools


class MuscleGroup(str, Enum):
    # Declaration order is the tie break for the most trained group.
    CHEST = "Chest"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    ARMS = "Arms"
    LEGS = "Legs"
    CORE = "Core"
    FULL_BODY = "Full Body"
    CARDIO = "Cardio"


class ExerciseType(str, Enum):
    STRENGTH = "Strength"
    CARDIO = "Cardio"
    FLEXIBILITY = "Flexibility"
    BALANCE = "Balance"


class DifficultyLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class TrackerModel(BaseModel):
    """Base model serialised with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ExerciseData(TrackerModel):
    """Exercise fields supplied by the caller; the store assigns the id."""
    title: str
    description: str = ""
    muscle_group: MuscleGroup
    exercise_type: ExerciseType
    difficulty: DifficultyLevel
    image_url: str | None = None


class Exercise(ExerciseData):
    """An exercise in the library."""
    id: str


class PlanExercise(TrackerModel):
    """A planned exercise entry: target sets, reps and rest."""
    exercise_id: str
    sets: int = Field(gt=0)
    reps: int = Field(gt=0)
    rest_time: int = Field(default=60, ge=0)


class PlanData(TrackerModel):
    title: str
    description: str = ""
    exercises: list[PlanExercise] = []


class TrainingPlan(PlanData):
    """An ordered template of exercises."""
    id: str
    created_at: str
    updated_at: str


class ExerciseSet(TrackerModel):
    """A single logged set."""
    weight: float = 0.0
    reps: int = 0
    rpe: int | None = Field(default=None, ge=1, le=10)
    completed: bool = False


class SessionExerciseData(TrackerModel):
    exercise_id: str
    sets: list[ExerciseSet] = []


class WorkoutSession(TrackerModel):
    """One timestamped execution of a plan."""
    id: str = ""
    plan_id: str
    start_time: str
    end_time: str | None = None
    exercises_data: list[SessionExerciseData] = []

    @property
    def in_progress(self) -> bool:
        return self.end_time is None

    @property
    def total_volume(self) -> float:
        return MathTools.volume(
            (s.reps, s.weight)
            for data in self.exercises_data
            for s in data.sets
            if s.completed
        )

    @property
    def completed_sets(self) -> int:
        return sum(1 for data in self.exercises_data for s in data.sets if s.completed)


class WorkoutHistory(TrackerModel):
    """All sessions started on one calendar date."""
    date: str
    workout_sessions: list[WorkoutSession] = []


class SessionDraft(BaseModel):
    """An in-progress session and the exercise currently shown."""
    session: WorkoutSession
    current_exercise_index: int = 0


def _form_value(data, key: str):
    if isinstance(data, BaseModel):
        return getattr(data, key, None)
    return data.get(key)


def validate_exercise_form(data) -> ExerciseData:
    """Check a submitted exercise form and return it as ``ExerciseData``."""
    title = _form_value(data, "title")
    if not title or not str(title).strip():
        raise ValidationError("Exercise title is required")
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    try:
        return ExerciseData.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(str(e))


def validate_plan_form(data) -> PlanData:
    """Check a submitted plan form and return it as ``PlanData``."""
    title = _form_value(data, "title")
    if not title or not str(title).strip():
        raise ValidationError("Plan title is required")
    if not _form_value(data, "exercises"):
        raise ValidationError("At least one exercise is required")
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    try:
        return PlanData.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(str(e))
