"""Runtime configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from block_city.constants import AI_PLANNER_INTERVAL_SECONDS, GAME_TICK_INTERVAL_SECONDS


class Settings(BaseSettings):
    """Simulation settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BLOCK_CITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scheduling
    tick_interval_seconds: float = GAME_TICK_INTERVAL_SECONDS
    planner_interval_seconds: float = AI_PLANNER_INTERVAL_SECONDS
    max_months: int | None = None

    # Simulation
    seed: int | None = None
    start_paused: bool = False
    autonomy_enabled: bool = True

    # Persistence
    save_path: str = ".block_city/save.json"
    save_key: str = "blockCityBuilderSave_v1"
    autosave_every_months: int = 12

    # Logging
    log_level: str = "info"


settings = Settings()
