import os
from dataclasses import dataclass
from logging import getLogger
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = getLogger(__name__)

DEFAULT_MAX_RESULTS = 5
DEFAULT_ORDER = "viewCount"
DEFAULT_RELAY_URL = "http://localhost:3000"

# The provider rejects anything outside these.
VALID_ORDERS = ("relevance", "viewCount")
VALID_DURATIONS = ("any", "short", "medium", "long")
MAX_RESULTS_LIMIT = 50


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


@dataclass(frozen=True)
class SearchSettings:
    api_key: Optional[str] = None
    max_results: int = DEFAULT_MAX_RESULTS
    order: str = DEFAULT_ORDER
    video_duration: Optional[str] = None
    query_suffix: Optional[str] = None

    def __post_init__(self):
        if not 1 <= self.max_results <= MAX_RESULTS_LIMIT:
            raise ValueError(
                f"max_results must be between 1 and {MAX_RESULTS_LIMIT}, got {self.max_results}"
            )
        if self.order not in VALID_ORDERS:
            raise ValueError(f"order must be one of {VALID_ORDERS}, got {self.order!r}")
        if self.video_duration is not None and self.video_duration not in VALID_DURATIONS:
            raise ValueError(
                f"video_duration must be one of {VALID_DURATIONS}, got {self.video_duration!r}"
            )

    @classmethod
    def from_env(cls) -> "SearchSettings":
        """
        Build settings from the process environment (and any .env file).
        """
        max_results = os.getenv("HHT_MAX_RESULTS", str(DEFAULT_MAX_RESULTS))
        try:
            max_results = int(max_results)
        except ValueError:
            raise ValueError(f"Invalid HHT_MAX_RESULTS: {max_results}")

        settings = cls(
            api_key=_optional_env("YOUTUBE_API_KEY"),
            max_results=max_results,
            order=os.getenv("HHT_ORDER", DEFAULT_ORDER),
            video_duration=_optional_env("HHT_VIDEO_DURATION"),
            query_suffix=_optional_env("HHT_QUERY_SUFFIX"),
        )
        if not settings.api_key:
            logger.warning("YOUTUBE_API_KEY is not set; YouTube will reject searches")
        return settings


def get_relay_url() -> str:
    return os.getenv("HHT_RELAY_URL", DEFAULT_RELAY_URL).rstrip("/")


def get_cors_origins() -> List[str]:
    origins = os.getenv("HHT_CORS_ORIGINS", "*")
    return [o.strip() for o in origins.split(",") if o.strip()]
