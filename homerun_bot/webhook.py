"""Webhook Notifier for Home Run Bot."""

import time

import requests

from .config import WebhookConfig
from .logging_config import create_execution_logger
from .models import NotificationPayload


class WebhookNotifier:
    """Handles posting notifications to a chat webhook."""

    def __init__(
        self,
        config: WebhookConfig,
        execution_id: str | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize webhook notifier with configuration.

        Args:
            config: Webhook configuration
            execution_id: Execution ID for logging context
            session: HTTP session to reuse (a new one is created otherwise)
        """
        self.config = config
        self.logger = create_execution_logger("webhook_notifier", execution_id)
        self.session = session or requests.Session()

        self.logger.info(
            "WebhookNotifier initialized",
            retry_attempts=config.retry_attempts,
            timeout=config.timeout,
        )

    def send(self, payload: NotificationPayload) -> bool:
        """
        Post a notification to the webhook.

        Args:
            payload: Notification to send

        Returns:
            True if the webhook accepted it, False otherwise
        """
        for attempt in range(self.config.retry_attempts):
            try:
                self.logger.debug(
                    f"Posting notification to webhook (attempt {attempt + 1})",
                    attempt=attempt + 1,
                    text_length=len(payload.text),
                )
                response = self.session.post(
                    self.config.webhook_url,
                    json=payload.to_json(),
                    headers={"User-Agent": self.config.user_agent},
                    timeout=self.config.timeout,
                )
            except requests.RequestException as e:
                self.logger.error(
                    f"Error posting notification: {e}", error=str(e)
                )
                return False

            if response.ok:
                self.logger.info(
                    "Notification sent successfully",
                    status_code=response.status_code,
                    response_body=response.text,
                )
                return True

            if response.status_code == 429:
                self.logger.warning(
                    f"Rate limited by webhook (attempt {attempt + 1})",
                    attempt=attempt + 1,
                    http_code=response.status_code,
                )
                if attempt < self.config.retry_attempts - 1:
                    self.handle_rate_limit(attempt)
                    continue
                self.logger.error("Max retry attempts reached for rate limiting")
                return False

            self.logger.error(
                f"Webhook returned status {response.status_code}",
                http_code=response.status_code,
                response_body=response.text,
            )
            return False

        return False

    def handle_rate_limit(self, retry_count: int) -> None:
        """
        Handle rate limiting with exponential backoff.

        Args:
            retry_count: Current retry attempt number
        """
        backoff_time = self.config.backoff_factor**retry_count
        self.logger.warning(
            f"Rate limited, waiting {backoff_time} seconds before retry {retry_count + 1}",
            retry_count=retry_count,
            backoff_time=backoff_time,
        )
        time.sleep(backoff_time)
