"""
settings.py — Application Settings
===================================
Every knob the app reads at startup, overridable from the environment
(SORTVIZ_PACING_INTERVAL_MS=50, SORTVIZ_ALGORITHM=quick, …) or a .env file.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from algorithms import Algorithm


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SORTVIZ_",
        env_file=".env",
        extra="ignore",
    )

    # ---- Playback ----------------------------------------------------

    # Delay between two delivered Steps
    pacing_interval_ms: int = Field(
        default=300,
        ge=0,
        description="Milliseconds between emitted Steps",
    )

    # The served page polls every poll_interval_ms; pacing never drops
    # below twice that, so each Step stays on screen for at least one poll
    poll_interval_ms: int = Field(
        default=50,
        ge=1,
        description="How often the served page polls /api/state",
    )

    algorithm: Algorithm = Field(
        default=Algorithm.BUBBLE,
        description="Engine used when a request does not name one",
    )

    # ---- Logging -----------------------------------------------------

    log_level: str = "INFO"

    # ---- Server ------------------------------------------------------

    host: str = "0.0.0.0"
    port: int = 5000


# Singleton settings object
settings = AppSettings()
