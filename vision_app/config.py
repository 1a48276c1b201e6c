from __future__ import annotations
import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

APP_TITLE = "Edge Vision Console"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

MODE_COPY = {
    "summarization": {
        "title": "Video Summarization",
        "description": "Upload your surveillance footage to generate AI-powered event detection "
                       "with searchable timeline and adjustable detail levels.",
        "steps": [
            ("Upload Video", "Upload your surveillance footage in MP4 or AVI format for analysis"),
            ("AI Processing", "Our AI detects events, movements, and activities with confidence scoring"),
            ("Search & Review", "Browse timeline results, search events, and adjust detail levels"),
        ],
    },
    "tracking": {
        "title": "People Tracking",
        "description": "Upload your video to enable advanced person detection and tracking "
                       "with visual path overlays and multi-person management.",
        "steps": [
            ("Upload Video", "Upload your surveillance footage for people detection and tracking"),
            ("Person Detection", "AI identifies and tracks individuals throughout your video footage"),
            ("Visual Tracking", "View tracking paths, manage multiple people, and analyze movements"),
        ],
    },
    "advanced": {
        "title": "Advanced Track and Search",
        "description": "Upload your footage for comprehensive analysis combining people tracking "
                       "with event summarization and advanced search capabilities.",
        "steps": [
            ("Upload Video", "Upload your footage for comprehensive tracking and event analysis"),
            ("Combined Analysis", "AI tracks people while simultaneously detecting and categorizing events"),
            ("Advanced Search", "Search activities by person, event type, or natural language queries"),
        ],
    },
}

VIDEO_TYPES = ["mp4", "avi", "mov", "mkv"]


class Settings(BaseSettings):
    api_base_url: str = "http://0.0.0.0:8080"
    request_timeout_seconds: float = 30.0

    poll_interval_seconds: float = 5.0
    poll_max_attempts: int = 12

    ui_refresh_seconds: float = 1.0
    upload_dir: Optional[str] = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="EDGE_VISION_", env_file=".env", extra="ignore")


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)
