from typing import Literal

from pydantic import BaseModel, Field, ValidationError


class SettingsSchema(BaseModel):
    db_path: str = "fitness.db"
    key_prefix: str = "soturiyfit"
    id_strategy: Literal["uuid", "counter"] = "uuid"
    recent_sessions_limit: int = Field(default=5, ge=1)
    weight_unit: Literal["kg", "lb"] = "kg"
    log_level: str = "WARNING"


def validate_settings(data: dict) -> SettingsSchema:
    try:
        return SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
