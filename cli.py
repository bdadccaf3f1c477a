import argparse
import json
import logging
import shutil

from config import YamlConfig, configure_logging
from data_store import DataStore
from db import SqliteBlobStore
from seed_sample_data import seed
from stats_service import StatisticsService
from tools import WeightConverter, make_id_generator

logger = logging.getLogger(__name__)


def open_store(db_path: str, key_prefix: str = "soturiyfit", id_strategy: str = "uuid") -> DataStore:
    return DataStore(
        SqliteBlobStore(db_path),
        id_generator=make_id_generator(id_strategy),
        key_prefix=key_prefix,
    )


def seed_db(db_path: str, key_prefix: str = "soturiyfit") -> None:
    if seed(SqliteBlobStore(db_path), key_prefix):
        print("Seed data inserted")
    else:
        print("Database already contains exercises")


def print_stats(store: DataStore, weight_unit: str = "kg", recent: int = 5) -> None:
    stats = StatisticsService(store, weight_unit=weight_unit)
    overview = stats.overview()
    print(f"Total workouts: {overview['total_workouts']}")
    print(f"Total time: {overview['total_duration']}")
    print(f"Most trained: {overview['most_trained_muscle_group']}")
    print(f"Last workout: {overview['last_workout_date'] or 'N/A'}")
    print("Volume by date:")
    for point in sorted(stats.volume_by_date(), key=lambda p: p["date"]):
        print(f"  {point['date']}: {point['volume']:.0f} {weight_unit}")
    print("Workouts by weekday:")
    for item in stats.frequency_by_weekday():
        print(f"  {item['day']}: {item['workouts']}")
    print("Recent workouts:")
    for item in stats.recent_sessions_summary(recent):
        print(
            f"  {item['date']} {item['plan']} "
            f"({item['duration_minutes']:.0f} min, {item['completed_sets']} sets)"
        )


def export_history(store: DataStore, out_path: str) -> None:
    data = [bucket.to_json_dict() for bucket in store.workout_history]
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    logger.info("exported %d history days to %s", len(data), out_path)


def backup_db(db_path: str, backup_path: str) -> None:
    SqliteBlobStore(db_path).vacuum()
    shutil.copy(db_path, backup_path)


def restore_db(backup_path: str, db_path: str) -> None:
    shutil.copy(backup_path, db_path)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Fitness tracker utility commands")
    parser.add_argument("--config", default="settings.yaml")
    sub = parser.add_subparsers(dest="cmd", required=True)

    seed_cmd = sub.add_parser("seed")
    seed_cmd.add_argument("--db")

    stats_cmd = sub.add_parser("stats")
    stats_cmd.add_argument("--db")
    stats_cmd.add_argument("--unit", choices=["kg", "lb"])

    exp = sub.add_parser("export")
    exp.add_argument("--db")
    exp.add_argument("--out", default="history.json")

    bkp = sub.add_parser("backup")
    bkp.add_argument("--db")
    bkp.add_argument("--out", default="backup.db")

    rst = sub.add_parser("restore")
    rst.add_argument("--in", dest="src", default="backup.db")
    rst.add_argument("--db")

    conv = sub.add_parser("convert")
    conv.add_argument("--weight", type=float, required=True)
    conv.add_argument("--unit", choices=["kg", "lb"], required=True)

    args = parser.parse_args(argv)
    settings = YamlConfig(args.config).settings()
    configure_logging(settings.log_level)
    db_path = getattr(args, "db", None) or settings.db_path

    if args.cmd == "seed":
        seed_db(db_path, settings.key_prefix)
    elif args.cmd == "stats":
        store = open_store(db_path, settings.key_prefix, settings.id_strategy)
        print_stats(store, args.unit or settings.weight_unit, settings.recent_sessions_limit)
    elif args.cmd == "export":
        store = open_store(db_path, settings.key_prefix, settings.id_strategy)
        export_history(store, args.out)
    elif args.cmd == "backup":
        backup_db(db_path, args.out)
    elif args.cmd == "restore":
        restore_db(args.src, db_path)
    elif args.cmd == "convert":
        if args.unit == "kg":
            print(f"{args.weight} kg = {WeightConverter.kg_to_lb(args.weight)} lb")
        else:
            print(f"{args.weight} lb = {WeightConverter.lb_to_kg(args.weight)} kg")


if __name__ == "__main__":
    main()
