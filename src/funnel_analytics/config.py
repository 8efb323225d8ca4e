"""Settings read from environment variables."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel


class Settings(BaseModel):
    events_path: Path
    scheduler_token: Optional[str] = None
    log_level: str = "INFO"
    log_json: bool = False
    service_name: str = "funnel-analytics"
    host: str = "0.0.0.0"
    port: int = 8000


def load_settings() -> Settings:
    """Build settings from the environment, with defaults for local dev."""
    return Settings(
        events_path=Path(os.getenv("EVENTS_PATH", "data/events.json")),
        scheduler_token=os.getenv("SCHEDULER_TOKEN") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_json=os.getenv("LOG_JSON", "false").lower() == "true",
        service_name=os.getenv("SERVICE_NAME", "funnel-analytics"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
