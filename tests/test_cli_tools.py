import os
import io
import sys
import json
import unittest
from contextlib import redirect_stdout

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from cli import backup_db, export_history, main, open_store, restore_db, seed_db
from db import SqliteBlobStore
from models import ExerciseSet, SessionExerciseData, WorkoutSession


class CLIToolsTest(unittest.TestCase):
    def setUp(self) -> None:
        self.db_path = "test_cli.db"
        self.yaml_path = "test_cli.yaml"
        self.paths = [self.db_path, self.yaml_path, "test_backup.db", "test_history.json"]
        for path in self.paths:
            if os.path.exists(path):
                os.remove(path)
        self._env = os.environ.pop("SOTURIYFIT_DB", None)

    def tearDown(self) -> None:
        for path in self.paths:
            if os.path.exists(path):
                os.remove(path)
        if self._env is not None:
            os.environ["SOTURIYFIT_DB"] = self._env

    def _run(self, *argv: str) -> str:
        buf = io.StringIO()
        with redirect_stdout(buf):
            main(["--config", self.yaml_path, *argv])
        return buf.getvalue()

    def _log_session(self) -> None:
        store = open_store(self.db_path)
        store.add_workout_session(
            WorkoutSession(
                plan_id="1",
                start_time="2024-01-01T09:00:00.000Z",
                end_time="2024-01-01T10:05:00.000Z",
                exercises_data=[
                    SessionExerciseData(
                        exercise_id="1",
                        sets=[ExerciseSet(weight=80, reps=5, completed=True)],
                    )
                ],
            )
        )

    def test_seed(self) -> None:
        self.assertIn("Seed data inserted", self._run("seed", "--db", self.db_path))
        self.assertIsNotNone(SqliteBlobStore(self.db_path).get("soturiyfit-exercises"))
        self.assertIn("already contains", self._run("seed", "--db", self.db_path))
        seed_db(self.db_path)
        self.assertEqual(len(open_store(self.db_path).plans), 3)

    def test_stats(self) -> None:
        self._log_session()
        out = self._run("stats", "--db", self.db_path)
        self.assertIn("Total workouts: 1", out)
        self.assertIn("Total time: 1h 5m", out)
        self.assertIn("Most trained: Chest", out)
        self.assertIn("2024-01-01: 400 kg", out)
        self.assertIn("Mon: 1", out)
        self.assertIn("Full Body Workout", out)
        out = self._run("stats", "--db", self.db_path, "--unit", "lb")
        self.assertIn("2024-01-01: 882 lb", out)

    def test_export(self) -> None:
        self._log_session()
        export_history(open_store(self.db_path), "test_history.json")
        with open("test_history.json", "r", encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data[0]["date"], "2024-01-01")
        self.assertEqual(data[0]["workoutSessions"][0]["planId"], "1")

    def test_backup_restore(self) -> None:
        self._log_session()
        backup_db(self.db_path, "test_backup.db")
        self.assertTrue(os.path.exists("test_backup.db"))
        os.remove(self.db_path)
        restore_db("test_backup.db", self.db_path)
        self.assertEqual(len(open_store(self.db_path).workout_history), 1)

    def test_convert(self) -> None:
        self.assertIn("100.0 kg = 220.46 lb", self._run("convert", "--weight", "100", "--unit", "kg"))


if __name__ == "__main__":
    unittest.main()
