"""Runtime configuration for MC Crafter."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="MC_CRAFTER_", env_file=".env", extra="ignore")

    app_name: str = "mc-crafter"
    log_level: str = "INFO"
    max_plan_depth: int = Field(default=10, ge=1, description="Recursion bound for recipe expansion.")
    recipes_path: str | None = Field(
        default=None,
        description="Optional JSON recipe table replacing the shipped vanilla recipes.",
    )
    history_path: str | None = Field(default=None, description="JSONL file for finished goal history.")
    step_timeout_seconds: float | None = Field(default=300.0, description="Upper bound for one gather/craft step.")
    step_delay_seconds: float = 0.2
    goal_delay_seconds: float = 0.5


settings = Settings()
