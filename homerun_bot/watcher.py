"""Poll, detect and notify cycle for Home Run Bot."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from enum import Enum
from typing import Any

from .config import ExtractionConfig
from .dedup import DedupState
from .extract import ExtractionError, extract_notification
from .logging_config import create_execution_logger
from .models import NotificationPayload
from .query import DEFAULT_CATEGORY, REFERENCE_TIMEZONE, build_search_query
from .search import SearchClient, SearchError
from .webhook import WebhookNotifier


class CycleOutcome(str, Enum):
    """How a single poll cycle ended."""

    NOTIFIED = "notified"
    UNCHANGED = "unchanged"
    NO_HIGHLIGHT = "no_highlight"
    FETCH_FAILED = "fetch_failed"
    EXTRACTION_FAILED = "extraction_failed"
    DISPATCH_FAILED = "dispatch_failed"
    ERROR = "error"


@dataclass
class CycleResult:
    """Result of one poll cycle."""

    outcome: CycleOutcome
    highlight_id: str | None = None
    payload: NotificationPayload | None = None
    error: str | None = None


def utc_now() -> datetime:
    return datetime.now(UTC)


class HighlightWatcher:
    """Runs poll cycles and notifies when a new highlight appears.

    LastSeenId only advances once the webhook has accepted a notification.
    When extraction or dispatch fails the highlight stays unseen and is tried
    again on the next cycle, until it is delivered or a newer one replaces it.
    """

    def __init__(
        self,
        search_client: SearchClient,
        notifier: WebhookNotifier,
        state: DedupState | None = None,
        extraction: ExtractionConfig | None = None,
        zone: tzinfo = REFERENCE_TIMEZONE,
        category: str = DEFAULT_CATEGORY,
        clock: Callable[[], datetime] = utc_now,
        execution_id: str | None = None,
    ):
        self.search_client = search_client
        self.notifier = notifier
        self.state = state or DedupState(execution_id=execution_id)
        self.extraction = extraction or ExtractionConfig()
        self.zone = zone
        self.category = category
        self.clock = clock
        self.logger = create_execution_logger("watcher", execution_id)
        self.metrics: dict[str, Any] = {
            "cycles": 0,
            "notifications_sent": 0,
            "outcomes": {outcome.value: 0 for outcome in CycleOutcome},
        }

    def run_cycle(self) -> CycleResult:
        """Run one poll cycle. Never raises."""
        try:
            result = self._poll()
        except Exception as e:
            self.logger.exception(f"Unexpected error during poll cycle: {e}", error=str(e))
            result = CycleResult(CycleOutcome.ERROR, error=str(e))

        self._record(result)
        return result

    def _poll(self) -> CycleResult:
        query = build_search_query(self.clock(), self.zone, self.category)

        try:
            search_result = self.search_client.search(query)
        except SearchError as e:
            self.logger.warning(f"Skipping cycle, search failed: {e}", error=str(e))
            return CycleResult(CycleOutcome.FETCH_FAILED, error=str(e))

        highlight = search_result.top
        if highlight is None:
            return CycleResult(CycleOutcome.NO_HIGHLIGHT)

        self.logger.info("Observed top highlight", highlight_id=highlight.id)

        if not self.state.is_new(highlight.id):
            self.logger.log_highlight_processing(highlight.id, "skipped_duplicate")
            return CycleResult(CycleOutcome.UNCHANGED, highlight_id=highlight.id)

        try:
            payload = extract_notification(
                highlight,
                self.extraction.feed_type,
                self.extraction.playback_name,
            )
        except ExtractionError as e:
            self.logger.log_highlight_processing(
                highlight.id,
                "extraction_failed",
                success=False,
                reason=e.reason,
                error=str(e),
            )
            return CycleResult(
                CycleOutcome.EXTRACTION_FAILED, highlight_id=highlight.id, error=str(e)
            )

        if not self.notifier.send(payload):
            self.logger.log_highlight_processing(
                highlight.id, "dispatch_failed", success=False
            )
            return CycleResult(
                CycleOutcome.DISPATCH_FAILED, highlight_id=highlight.id, payload=payload
            )

        self.state.mark_notified(highlight.id)
        self.logger.log_highlight_processing(highlight.id, "sent_to_webhook")
        return CycleResult(CycleOutcome.NOTIFIED, highlight_id=highlight.id, payload=payload)

    def _record(self, result: CycleResult) -> None:
        self.metrics["cycles"] += 1
        self.metrics["outcomes"][result.outcome.value] += 1
        if result.outcome is CycleOutcome.NOTIFIED:
            self.metrics["notifications_sent"] += 1
        self.metrics["last_seen_id"] = self.state.last_seen_id
        self.logger.log_metrics(self.metrics)
