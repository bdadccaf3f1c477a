import datetime
import itertools
import uuid
from typing import Callable, Iterable


class MathTools:
    """Provides essential mathematical utilities for workout calculations."""

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @staticmethod
    def volume(sets: Iterable[tuple[int, float]]) -> float:
        """Compute training volume as the sum of reps times weight."""
        vol = 0.0
        for reps, weight in sets:
            vol += reps * weight
        return vol


class WeightConverter:
    """Utility for converting between kg and lb."""

    KG_TO_LB = 2.20462

    @staticmethod
    def kg_to_lb(kg: float) -> float:
        return round(kg * WeightConverter.KG_TO_LB, 2)

    @staticmethod
    def lb_to_kg(lb: float) -> float:
        return round(lb / WeightConverter.KG_TO_LB, 2)


class TimeTools:
    """Timestamp helpers shared by the store, sessions and statistics."""

    @staticmethod
    def utc_now() -> datetime.datetime:
        return datetime.datetime.now(datetime.timezone.utc)

    @staticmethod
    def to_iso(dt: datetime.datetime) -> str:
        """Return ``dt`` as an ISO-8601 UTC string with millisecond precision."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=datetime.timezone.utc)
        dt = dt.astimezone(datetime.timezone.utc)
        return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"

    @staticmethod
    def parse_timestamp(ts: str) -> datetime.datetime:
        """Return ``ts`` as timezone-aware datetime in UTC."""
        if ts.endswith("Z"):
            ts = ts[:-1] + "+00:00"
        dt = datetime.datetime.fromisoformat(ts)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=datetime.timezone.utc)
        return dt.astimezone(datetime.timezone.utc)

    @classmethod
    def date_only(cls, ts: str) -> str:
        """Return the UTC calendar date of ``ts`` as ``YYYY-MM-DD``."""
        return cls.parse_timestamp(ts).date().isoformat()

    @classmethod
    def minutes_between(cls, start: str, end: str) -> float:
        delta = cls.parse_timestamp(end) - cls.parse_timestamp(start)
        return delta.total_seconds() / 60

    @staticmethod
    def format_duration(minutes: float) -> str:
        """Format ``minutes`` as ``"Xh Ym"``."""
        hours = int(minutes // 60)
        mins = int(minutes % 60)
        return f"{hours}h {mins}m"


class SystemClock:
    """Clock returning the current UTC time as an ISO string."""

    def __call__(self) -> str:
        return TimeTools.to_iso(TimeTools.utc_now())


class FixedClock:
    """Clock that returns preset timestamps, advancing by ``step`` per call."""

    def __init__(self, start: str, step_seconds: float = 0.0) -> None:
        self._current = TimeTools.parse_timestamp(start)
        self._step = datetime.timedelta(seconds=step_seconds)

    def __call__(self) -> str:
        value = TimeTools.to_iso(self._current)
        self._current += self._step
        return value


class UuidIdGenerator:
    """Random identifiers from :func:`uuid.uuid4`."""

    def __call__(self) -> str:
        return uuid.uuid4().hex


class CounterIdGenerator:
    """Monotonic string identifiers: ``"1"``, ``"2"``, ..."""

    def __init__(self, start: int = 1, prefix: str = "") -> None:
        self._counter = itertools.count(start)
        self.prefix = prefix

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


Clock = Callable[[], str]
IdGenerator = Callable[[], str]


def make_id_generator(strategy: str) -> IdGenerator:
    if strategy == "uuid":
        return UuidIdGenerator()
    if strategy == "counter":
        return CounterIdGenerator()
    raise ValueError(f"unknown id strategy: {strategy}")
