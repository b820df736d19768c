from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    load_increment_kg: float = Field(default=2.5)
    default_goal: str = Field(default="peaking")
    default_total_weeks: int = Field(default=8, ge=1)
    default_start_exertion: float = Field(default=7.0, ge=6.0, le=10.0)
    default_set_count: int = Field(default=3, ge=1)
    default_target_reps: int = Field(default=5, ge=1)
    history_limit: int = Field(default=10, ge=1)
    exercise_search_limit: int = Field(default=6, ge=1)
    log_level: str = Field(default="INFO")
    log_file: str | None = Field(default=None)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BLOCKPLANNER_",
        extra="ignore",
    )

    @field_validator("load_increment_kg")
    @classmethod
    def validate_increment(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("BLOCKPLANNER_LOAD_INCREMENT_KG must be positive (e.g. 2.5 for standard plates).")
        return value

    @field_validator("default_goal")
    @classmethod
    def validate_goal(cls, value: str) -> str:
        value = value.lower()
        if value not in {"peaking", "maintenance"}:
            raise ValueError("BLOCKPLANNER_DEFAULT_GOAL must be 'peaking' or 'maintenance'.")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}. Expected one of {sorted(_LOG_LEVELS)}.")
        return value


settings = Settings()
logger.debug(f"Settings loaded: load_increment_kg={settings.load_increment_kg}, log_level={settings.log_level}")
