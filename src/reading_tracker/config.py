"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = "development"
    debug: bool = False
    service_name: str = "reading-tracker"

    # Snapshot store
    snapshot_path: Path = Path.home() / ".reading-tracker" / "snapshot.json"

    # Local day boundaries for streaks (None = system local time)
    timezone: str | None = None

    # Queue
    recent_verdict_limit: int = 3  # Decided items feeding the mix-up lane
    upcoming_limit: int = 3  # Items shown after the current one in tag view
    revisit_delay_days: int = 7

    # Priority recalculation
    priority_window_days: int = 7  # Verdicts this recent count as "recent topics"

    class Config:
        env_prefix = "READING_TRACKER_"
        env_file = ".env"
        case_sensitive = False


settings = Settings()
