from __future__ import annotations
import datetime
from typing import Dict, List, Optional

from data_store import DataStore
from history import iter_sessions
from models import MuscleGroup, WorkoutSession
from tools import TimeTools, WeightConverter


WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


class StatisticsService:
    """Compute progress statistics from the workout history."""

    def __init__(self, store: DataStore, weight_unit: str = "kg") -> None:
        self.store = store
        self.weight_unit = weight_unit

    def _convert(self, kg: float) -> float:
        if self.weight_unit == "lb":
            return WeightConverter.kg_to_lb(kg)
        return kg

    @staticmethod
    def session_duration_minutes(session: WorkoutSession) -> float:
        if not session.start_time or not session.end_time:
            return 0.0
        return TimeTools.minutes_between(session.start_time, session.end_time)

    def total_workouts(self) -> int:
        return sum(len(b.workout_sessions) for b in self.store.workout_history)

    def total_duration_minutes(self) -> float:
        return sum(
            self.session_duration_minutes(s)
            for _date, s in iter_sessions(self.store.workout_history)
        )

    def most_trained_muscle_group(self) -> Dict[str, object]:
        """Return the muscle group planned most often across logged sessions.

        Each session counts every exercise of its plan once, regardless of
        which sets were completed. Sessions whose plan or exercises no longer
        exist are skipped.
        """
        counts = {group.value: 0 for group in MuscleGroup}
        exercises = {e.id: e for e in self.store.exercises}
        plans = {p.id: p for p in self.store.plans}
        for _date, session in iter_sessions(self.store.workout_history):
            plan = plans.get(session.plan_id)
            if plan is None:
                continue
            for pe in plan.exercises:
                exercise = exercises.get(pe.exercise_id)
                if exercise is not None:
                    counts[exercise.muscle_group] += 1
        best = MuscleGroup.CHEST.value
        best_count = 0
        for group, count in counts.items():
            if count > best_count:
                best = group
                best_count = count
        return {"muscle_group": best, "count": best_count}

    def volume_by_date(self) -> List[Dict[str, float]]:
        """Completed-set volume per history bucket, in bucket order."""
        result = []
        for bucket in self.store.workout_history:
            volume = sum(s.total_volume for s in bucket.workout_sessions)
            result.append({"date": bucket.date, "volume": self._convert(volume)})
        return result

    def frequency_by_weekday(self) -> List[Dict[str, object]]:
        counts = [0] * 7
        for bucket in self.store.workout_history:
            day = datetime.date.fromisoformat(bucket.date).isoweekday() % 7
            counts[day] += len(bucket.workout_sessions)
        return [
            {"weekday": idx, "day": WEEKDAY_NAMES[idx], "workouts": counts[idx]}
            for idx in range(7)
        ]

    def recent_sessions(self, n: int = 5) -> List[Dict[str, object]]:
        pairs = [
            {"date": date, "session": session}
            for date, session in iter_sessions(self.store.workout_history)
        ]
        pairs.sort(
            key=lambda p: TimeTools.parse_timestamp(p["session"].start_time),
            reverse=True,
        )
        return pairs[: max(n, 0)]

    def recent_sessions_summary(self, n: int = 5) -> List[Dict[str, object]]:
        result = []
        for item in self.recent_sessions(n):
            session = item["session"]
            result.append(
                {
                    "date": item["date"],
                    "session_id": session.id,
                    "plan": self.store.plan_title(session.plan_id),
                    "duration_minutes": round(self.session_duration_minutes(session), 2),
                    "completed_sets": session.completed_sets,
                    "volume": self._convert(session.total_volume),
                }
            )
        return result

    def last_workout_date(self) -> Optional[str]:
        recent = self.recent_sessions(1)
        return recent[0]["date"] if recent else None

    def overview(self) -> Dict[str, object]:
        minutes = self.total_duration_minutes()
        top = self.most_trained_muscle_group()
        return {
            "total_workouts": self.total_workouts(),
            "total_duration_minutes": round(minutes, 2),
            "total_duration": TimeTools.format_duration(minutes),
            "most_trained_muscle_group": top["muscle_group"],
            "most_trained_count": top["count"],
            "last_workout_date": self.last_workout_date(),
        }
