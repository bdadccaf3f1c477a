import logging
import os
import yaml

from settings_schema import SettingsSchema, validate_settings

APP_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


class YamlConfig:
    """Load and save settings to a YAML file."""

    def __init__(self, path: str = "settings.yaml") -> None:
        self.path = path

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a mapping")
        return data

    def save(self, data: dict) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(dict(data), f)

    def settings(self) -> SettingsSchema:
        """Return validated settings, with ``SOTURIYFIT_DB`` overriding ``db_path``."""
        data = self.load()
        env_db = os.environ.get("SOTURIYFIT_DB")
        if env_db:
            data["db_path"] = env_db
        settings = validate_settings(data)
        logger.debug("loaded settings from %s", self.path)
        return settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
