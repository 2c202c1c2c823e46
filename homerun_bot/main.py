"""Process entry point for Home Run Bot."""

import os
import signal
import sys
from datetime import UTC, datetime

from .config import Config
from .dedup import DedupState
from .logging_config import create_execution_logger, setup_structured_logging
from .scheduler import Scheduler
from .search import SearchClient
from .watcher import HighlightWatcher
from .webhook import WebhookNotifier


def build_scheduler(config: Config, execution_id: str) -> Scheduler:
    """Wire the watcher components together from configuration."""
    search_client = SearchClient(config.get_search_config(), execution_id=execution_id)
    notifier = WebhookNotifier(config.get_webhook_config(), execution_id=execution_id)
    watcher = HighlightWatcher(
        search_client,
        notifier,
        state=DedupState(execution_id=execution_id),
        extraction=config.get_extraction_config(),
        zone=config.get_reference_timezone(),
        category=config.category,
        execution_id=execution_id,
    )
    return Scheduler(
        watcher.run_cycle,
        config.get_schedule_config().poll_interval,
        execution_id=execution_id,
    )


def install_signal_handlers(scheduler: Scheduler) -> None:
    def _handle(signum, frame):
        scheduler.stop()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def main() -> int:
    """Start the watcher and run until the process is told to stop.

    Returns:
        Process exit status: 0 after a requested shutdown, 1 if the
        configuration is invalid
    """
    execution_id = f"run_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"

    try:
        setup_structured_logging(os.getenv("LOG_LEVEL", "INFO"))
    except ValueError:
        setup_structured_logging("INFO")

    main_logger = create_execution_logger("main", execution_id)

    try:
        config = Config()
        config.validate()
    except ValueError as e:
        main_logger.error(f"Invalid configuration: {e}", error=str(e))
        return 1

    main_logger.info(
        "Configuration loaded",
        endpoint_url=config.endpoint_url,
        category=config.category,
        timezone=config.timezone,
        poll_interval=config.poll_interval,
    )

    scheduler = build_scheduler(config, execution_id)
    install_signal_handlers(scheduler)
    scheduler.run()

    main_logger.info("Home Run Bot stopped", cycles_run=scheduler.cycles_run)
    return 0


if __name__ == "__main__":
    sys.exit(main())
