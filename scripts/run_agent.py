"""Run the KQXS crawler from the command line.

Usage:
  python scripts/run_agent.py            # crawl every CRAWL_INTERVAL_SECONDS until Ctrl+C
  python scripts/run_agent.py --once     # crawl once and print the saved record
  python scripts/run_agent.py --interval 120 --url https://example.com/kqxs
"""

from __future__ import annotations

import argparse
import json
import logging
import signal
import sys
import threading

from kqxs import create_app
from kqxs.extensions import get_ingestion_service
from kqxs.schemas.history import HistoryRecordSchema
from kqxs.services.ingestion_service import IngestionStatus
from kqxs.services.scheduler import IntervalScheduler

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Scheduled KQXS result crawler")
    parser.add_argument("--once", action="store_true", help="Run a single crawl and exit")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between crawls")
    parser.add_argument("--url", default=None, help="Results page to crawl (overrides KQXS_URL)")
    args = parser.parse_args(argv)

    overrides = {"AUTO_CRAWL": False}
    if args.url:
        overrides["KQXS_URL"] = args.url
    app = create_app(overrides)

    with app.app_context():
        service = get_ingestion_service()

        if args.once:
            outcome = service.crawl_and_save()
            if outcome.records:
                print(json.dumps(HistoryRecordSchema().dump(outcome.records[0]), ensure_ascii=False, indent=2))
            else:
                logger.warning("Crawl %s: %s", outcome.status.value, outcome.message)
            return 0 if outcome.status is IngestionStatus.SAVED else 1

        interval = args.interval or float(app.config["CRAWL_INTERVAL_SECONDS"])
        done = threading.Event()
        signal.signal(signal.SIGINT, lambda *_: done.set())
        signal.signal(signal.SIGTERM, lambda *_: done.set())

        service.start_auto(IntervalScheduler(interval))
        logger.info("Crawler running every %ss; press Ctrl+C to stop", interval)
        done.wait()
        service.stop_auto()
    return 0


if __name__ == "__main__":
    sys.exit(main())
