"""Deduplication module for Home Run Bot."""

from .logging_config import create_execution_logger


class DedupState:
    """Remembers the last highlight that was notified.

    State lives only as long as the process, so after a restart the current
    top highlight is announced again.
    """

    def __init__(self, last_seen_id: str = "", execution_id: str | None = None):
        """Initialize the dedup state.

        Args:
            last_seen_id: Identifier of the last notified highlight
            execution_id: Execution ID for logging context
        """
        self.last_seen_id = last_seen_id
        self.logger = create_execution_logger("deduplicator", execution_id)

    def is_new(self, highlight_id: str) -> bool:
        """Check whether a highlight differs from the last one notified."""
        is_new = highlight_id != self.last_seen_id
        self.logger.debug(
            "Checked highlight against last seen",
            highlight_id=highlight_id,
            last_seen_id=self.last_seen_id,
            is_new=is_new,
        )
        return is_new

    def mark_notified(self, highlight_id: str) -> None:
        """Record a highlight as notified."""
        previous = self.last_seen_id
        self.last_seen_id = highlight_id
        self.logger.info(
            "Updated last seen highlight",
            highlight_id=highlight_id,
            previous_id=previous,
        )
