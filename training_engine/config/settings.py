from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="ENGINE_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="ENGINE_LOG_FILE")
    log_json: bool = Field(default=False, validation_alias="ENGINE_LOG_JSON")
    default_weekly_volume_km: float = Field(default=50.0, validation_alias="ENGINE_DEFAULT_WEEKLY_VOLUME_KM")
    # Minimum distance for any easy/recovery filler day
    filler_floor_km: int = Field(default=3, validation_alias="ENGINE_FILLER_FLOOR_KM")
    # Empty days turn into rest days once the weekly budget is used up
    rest_when_budget_exhausted: bool = Field(default=True, validation_alias="ENGINE_REST_WHEN_BUDGET_EXHAUSTED")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported ENGINE_LOG_LEVEL: {value}")
        return level

    @field_validator("default_weekly_volume_km")
    @classmethod
    def validate_default_volume(cls, value: float) -> float:
        if value <= 0:
            logger.warning(f"ENGINE_DEFAULT_WEEKLY_VOLUME_KM={value} is not positive, using 50")
            return 50.0
        return value

    @field_validator("filler_floor_km")
    @classmethod
    def validate_filler_floor(cls, value: int) -> int:
        # A filler session always covers at least one unit
        return max(1, value)


settings = EngineSettings()
