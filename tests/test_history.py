import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from history import fold_session, replace_session, session_date, iter_sessions
from models import WorkoutSession


def session(sid: str, start: str) -> WorkoutSession:
    return WorkoutSession(id=sid, plan_id="1", start_time=start)


class SessionDateTest(unittest.TestCase):
    def test_uses_utc_date(self) -> None:
        self.assertEqual(session_date("2024-05-04T23:30:00.000Z"), "2024-05-04")
        self.assertEqual(session_date("2024-05-04T23:30:00-02:00"), "2024-05-05")
        self.assertEqual(session_date("2024-05-04T01:00:00+03:00"), "2024-05-03")


class FoldSessionTest(unittest.TestCase):
    def test_same_day_shares_bucket(self) -> None:
        history = fold_session([], session("a", "2024-01-01T08:00:00Z"))
        history = fold_session(history, session("b", "2024-01-01T19:00:00Z"))
        self.assertEqual(len(history), 1)
        self.assertEqual([s.id for s in history[0].workout_sessions], ["a", "b"])

    def test_different_days_make_buckets(self) -> None:
        history = fold_session([], session("a", "2024-01-01T08:00:00Z"))
        history = fold_session(history, session("b", "2024-01-02T08:00:00Z"))
        self.assertEqual([h.date for h in history], ["2024-01-01", "2024-01-02"])

    def test_buckets_keep_insertion_order(self) -> None:
        history = fold_session([], session("a", "2024-01-05T08:00:00Z"))
        history = fold_session(history, session("b", "2024-01-01T08:00:00Z"))
        history = fold_session(history, session("c", "2024-01-05T09:00:00Z"))
        self.assertEqual([h.date for h in history], ["2024-01-05", "2024-01-01"])
        self.assertEqual([s.id for s in history[0].workout_sessions], ["a", "c"])

    def test_input_is_not_modified(self) -> None:
        original = fold_session([], session("a", "2024-01-01T08:00:00Z"))
        fold_session(original, session("b", "2024-01-01T09:00:00Z"))
        self.assertEqual(len(original[0].workout_sessions), 1)


class ReplaceSessionTest(unittest.TestCase):
    def setUp(self) -> None:
        history = fold_session([], session("a", "2024-01-01T08:00:00Z"))
        history = fold_session(history, session("b", "2024-01-01T09:00:00Z"))
        self.history = fold_session(history, session("c", "2024-01-02T09:00:00Z"))

    def test_replaces_in_place(self) -> None:
        edited = session("b", "2024-01-01T09:00:00Z")
        edited.end_time = "2024-01-01T10:00:00Z"
        result = replace_session(self.history, edited)
        self.assertEqual(
            [(d, s.id) for d, s in iter_sessions(result)],
            [("2024-01-01", "a"), ("2024-01-01", "b"), ("2024-01-02", "c")],
        )
        self.assertEqual(result[0].workout_sessions[1].end_time, "2024-01-01T10:00:00Z")
        self.assertIsNone(self.history[0].workout_sessions[1].end_time)

    def test_missing_returns_none(self) -> None:
        self.assertIsNone(replace_session(self.history, session("z", "2024-01-01T09:00:00Z")))


if __name__ == "__main__":
    unittest.main()
