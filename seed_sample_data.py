import logging

from models import Exercise, TrainingPlan, PlanExercise

logger = logging.getLogger(__name__)


SAMPLE_EXERCISES: list[Exercise] = [
    Exercise(
        id="1",
        title="Bench Press",
        description="Press a barbell from chest level while lying on a flat bench",
        muscle_group="Chest",
        exercise_type="Strength",
        difficulty="Intermediate",
    ),
    Exercise(
        id="2",
        title="Squat",
        description="Lower the hips with a barbell on the upper back, then stand up",
        muscle_group="Legs",
        exercise_type="Strength",
        difficulty="Intermediate",
    ),
    Exercise(
        id="3",
        title="Deadlift",
        description="Lift a loaded barbell from the floor to hip level",
        muscle_group="Back",
        exercise_type="Strength",
        difficulty="Advanced",
    ),
    Exercise(
        id="4",
        title="Pull-Up",
        description="Pull the body up until the chin clears the bar",
        muscle_group="Back",
        exercise_type="Strength",
        difficulty="Intermediate",
    ),
    Exercise(
        id="5",
        title="Push-Up",
        description="Lower and raise the body using the arms in a plank position",
        muscle_group="Chest",
        exercise_type="Strength",
        difficulty="Beginner",
    ),
    Exercise(
        id="6",
        title="Plank",
        description="Hold a straight body position on forearms and toes",
        muscle_group="Core",
        exercise_type="Strength",
        difficulty="Beginner",
    ),
    Exercise(
        id="7",
        title="Overhead Press",
        description="Press a barbell from the shoulders to overhead while standing",
        muscle_group="Shoulders",
        exercise_type="Strength",
        difficulty="Intermediate",
    ),
]


SAMPLE_PLANS: list[TrainingPlan] = [
    TrainingPlan(
        id="1",
        title="Full Body Workout",
        description="A comprehensive workout plan targeting all major muscle groups",
        exercises=[
            PlanExercise(exercise_id="1", sets=3, reps=10, rest_time=90),
            PlanExercise(exercise_id="2", sets=3, reps=8, rest_time=120),
            PlanExercise(exercise_id="3", sets=3, reps=6, rest_time=120),
            # plank reps are seconds held
            PlanExercise(exercise_id="6", sets=3, reps=30, rest_time=60),
        ],
        created_at="2023-01-01T12:00:00Z",
        updated_at="2023-01-01T12:00:00Z",
    ),
    TrainingPlan(
        id="2",
        title="Upper Body Focus",
        description="Targets chest, back, shoulders, and arms",
        exercises=[
            PlanExercise(exercise_id="1", sets=4, reps=8, rest_time=90),
            PlanExercise(exercise_id="4", sets=3, reps=8, rest_time=90),
            PlanExercise(exercise_id="5", sets=3, reps=15, rest_time=60),
            PlanExercise(exercise_id="7", sets=3, reps=10, rest_time=90),
        ],
        created_at="2023-02-01T12:00:00Z",
        updated_at="2023-02-01T12:00:00Z",
    ),
    TrainingPlan(
        id="3",
        title="Lower Body Day",
        description="Focus on legs and core",
        exercises=[
            PlanExercise(exercise_id="2", sets=4, reps=10, rest_time=120),
            PlanExercise(exercise_id="3", sets=3, reps=8, rest_time=120),
            PlanExercise(exercise_id="6", sets=3, reps=45, rest_time=60),
        ],
        created_at="2023-03-01T12:00:00Z",
        updated_at="2023-03-01T12:00:00Z",
    ),
]


def sample_exercises() -> list[Exercise]:
    return [e.model_copy(deep=True) for e in SAMPLE_EXERCISES]


def sample_plans() -> list[TrainingPlan]:
    return [p.model_copy(deep=True) for p in SAMPLE_PLANS]


def seed(blob_store, key_prefix: str = "soturiyfit") -> bool:
    """Write the sample exercises and plans unless the store already has them."""
    from data_store import DataStore

    if blob_store.get(DataStore.blob_key(key_prefix, "exercises")) is not None:
        logger.info("store already contains exercises, not seeding")
        return False
    store = DataStore(blob_store, key_prefix=key_prefix)
    store.save_all()
    logger.info(
        "seeded %d exercises and %d plans", len(store.exercises), len(store.plans)
    )
    return True
