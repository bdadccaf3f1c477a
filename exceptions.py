"""Fitness tracker exceptions."""


class TrackerError(Exception):
    """Base exception for fitness tracker errors."""
    pass


class StorageError(TrackerError):
    """Raised when the backing blob store fails or holds corrupt data."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class PlanNotFoundError(TrackerError, LookupError):
    """Raised when a session is started for a plan that does not exist."""

    def __init__(self, plan_id: str):
        super().__init__(f"training plan not found: {plan_id}")
        self.plan_id = plan_id


class ValidationError(TrackerError, ValueError):
    """Raised when a submitted exercise or plan form is incomplete."""
    pass
