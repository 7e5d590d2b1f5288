"""Runtime configuration for infinisweep."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="INFINISWEEP_", env_file=".env", extra="ignore")

    app_name: str = "infinisweep"
    log_level: str = "INFO"
    base_density: float = Field(
        default=0.15,
        gt=0.0,
        lt=1.0,
        description="Nominal mine probability before biome and upgrade adjustments.",
    )
    max_reveal_per_click: int = Field(default=1000, gt=0, description="Flood reveal cell budget per click.")
    safe_click_max_attempts: int = Field(default=100, ge=0, description="Seed re-rolls allowed per safe click.")
    replay_log_path: str | None = Field(default=None, description="JSONL file receiving replay events.")
    progress_path: str = Field(
        default="~/.infinisweep/progress.json",
        description="JSON file holding coins, stats and upgrade levels.",
    )
    viewport_width: int = Field(default=20, gt=0)
    viewport_height: int = Field(default=15, gt=0)


settings = Settings()
