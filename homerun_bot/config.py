"""Configuration management for Home Run Bot."""

import math
import os
import threading
from dataclasses import dataclass
from datetime import tzinfo
from urllib.parse import urlparse

from dateutil import tz

DEFAULT_ENDPOINT_URL = "https://fastball-gateway.mlb.com/graphql"
DEFAULT_USER_AGENT = "HomeRunBot/1.0"


@dataclass
class SearchConfig:
    """Configuration for the highlight search API."""

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0


@dataclass
class WebhookConfig:
    """Configuration for the chat webhook."""

    webhook_url: str
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0
    retry_attempts: int = 3
    backoff_factor: float = 2.0


@dataclass
class ExtractionConfig:
    """Which feed and playback variant to link in notifications."""

    feed_type: str = "CMS"
    playback_name: str = "mp4Avc"


@dataclass
class ScheduleConfig:
    """Configuration for the polling loop."""

    poll_interval: float = 300.0


class Config:
    """Main configuration manager."""

    ENV_PREFIX = "HOMERUN_BOT_"

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.endpoint_url = self._getenv("ENDPOINT_URL", DEFAULT_ENDPOINT_URL)
        self.webhook_url = self._getenv("WEBHOOK_URL", "")
        self.category = self._getenv("CATEGORY", "Home Run")
        self.timezone = self._getenv("TIMEZONE", "America/Los_Angeles")
        self.feed_type = self._getenv("FEED_TYPE", "CMS")
        self.playback_name = self._getenv("PLAYBACK_NAME", "mp4Avc")
        self.poll_interval = self._get_float("POLL_INTERVAL", 300.0)
        self.request_timeout = self._get_float("REQUEST_TIMEOUT", 30.0)

    def _getenv(self, name: str, default: str) -> str:
        return os.getenv(f"{self.ENV_PREFIX}{name}", default).strip() or default

    def _get_float(self, name: str, default: float) -> float:
        raw = self._getenv(name, str(default))
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{self.ENV_PREFIX}{name} must be a number, got {raw!r}")

    def validate(self) -> None:
        """Check the configuration before the watcher starts.

        Raises:
            ValueError: If any setting is missing or inconsistent
        """
        if not self.webhook_url:
            raise ValueError(f"{self.ENV_PREFIX}WEBHOOK_URL must be set")

        for name, url in (
            ("ENDPOINT_URL", self.endpoint_url),
            ("WEBHOOK_URL", self.webhook_url),
        ):
            parsed = urlparse(url)
            if parsed.scheme != "https" or not parsed.netloc:
                raise ValueError(
                    f"{self.ENV_PREFIX}{name} must be an HTTPS URL: {url}"
                )

        if not self.category:
            raise ValueError(f"{self.ENV_PREFIX}CATEGORY cannot be empty")

        # Event.wait overflows on intervals past TIMEOUT_MAX
        if not (
            math.isfinite(self.poll_interval)
            and 0 < self.poll_interval <= threading.TIMEOUT_MAX
        ):
            raise ValueError(
                f"{self.ENV_PREFIX}POLL_INTERVAL must be a positive number of "
                f"seconds no greater than {threading.TIMEOUT_MAX}"
            )

        # A request must never be able to outlast the cycle it belongs to
        if not 0 < self.request_timeout < self.poll_interval:
            raise ValueError(
                f"{self.ENV_PREFIX}REQUEST_TIMEOUT must be positive and shorter "
                f"than {self.ENV_PREFIX}POLL_INTERVAL"
            )

        self.get_reference_timezone()

    def get_reference_timezone(self) -> tzinfo:
        """Resolve the timezone that decides what "today" means."""
        zone = tz.gettz(self.timezone)
        if zone is None:
            raise ValueError(f"Unknown timezone: {self.timezone}")
        return zone

    def get_search_config(self) -> SearchConfig:
        """Get search API configuration."""
        return SearchConfig(
            endpoint_url=self.endpoint_url,
            timeout=self.request_timeout,
        )

    def get_webhook_config(self) -> WebhookConfig:
        """Get webhook configuration."""
        return WebhookConfig(
            webhook_url=self.webhook_url,
            timeout=self.request_timeout,
        )

    def get_extraction_config(self) -> ExtractionConfig:
        """Get feed/playback selection configuration."""
        return ExtractionConfig(
            feed_type=self.feed_type,
            playback_name=self.playback_name,
        )

    def get_schedule_config(self) -> ScheduleConfig:
        """Get schedule configuration."""
        return ScheduleConfig(poll_interval=self.poll_interval)
