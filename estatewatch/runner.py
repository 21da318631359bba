"""Core execution workflow for EstateWatch."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .diff import build_snapshot, diff_records, initial_diff
from .errors import ScrapeError
from .models import Identifiable, RunSummary
from .notifications import Notifier, deliver_notifications
from .scraper import HUD_SEARCH_URL, scrape_listings
from .serialization import decode_snapshot, encode_snapshot
from .storage import BlobStore

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "hudhome listing"


@dataclass
class EstateWatchRunner:
    """Coordinates scrape, diff, notification, and persistence steps.

    The new snapshot is saved only after notifications went out, so a
    delivery failure leaves the previous snapshot in place and the same
    changes are reported again on the next run.
    """

    store: BlobStore
    target_url: str = HUD_SEARCH_URL
    scraper: Callable[[str], List[Identifiable]] = field(
        default_factory=lambda: scrape_listings
    )
    notifier: Optional[Notifier] = None
    label: str = DEFAULT_LABEL

    def run(self, dry_run: bool = False) -> RunSummary:
        """Execute a single monitoring cycle."""
        logger.info("Starting monitor cycle for %s", self.target_url)
        executed_at = dt.datetime.now(dt.timezone.utc).isoformat()

        try:
            records = list(self.scraper(self.target_url))
        except ScrapeError:
            logger.exception("Scraping failed for %s", self.target_url)
            raise
        logger.info("Scraped %d records from %s", len(records), self.target_url)

        payload = self.store.load()
        snapshot = build_snapshot(records)

        if payload is None:
            logger.info("No prior snapshot; reporting all %d records as added",
                        len(records))
            diff = initial_diff(records)
            first_run = True
        else:
            prior = decode_snapshot(payload)
            diff = diff_records(prior, records)
            first_run = False
            logger.info(
                "Compared against snapshot from %s: %d added, %d changed",
                dt.datetime.fromtimestamp(prior.captured_at, dt.timezone.utc).isoformat(),
                len(diff.added),
                len(diff.changed),
            )

        notified = False
        if diff.has_changes:
            if dry_run:
                logger.info("Dry run; skipping notifications")
            elif self.notifier is None:
                logger.info("No notifier configured; skipping notifications")
            else:
                deliver_notifications(self.notifier, diff, self.label)
                notified = True
        else:
            logger.info("No changes detected in this run.")

        object_name = None
        should_persist = first_run or diff.has_changes
        if should_persist and not dry_run:
            object_name = self.store.save(encode_snapshot(snapshot))
            logger.info("Persisted snapshot %s with %d entries", object_name,
                        len(snapshot.state))
        elif should_persist:
            logger.info("Dry run; snapshot with %d entries not persisted",
                        len(snapshot.state))

        return RunSummary(
            executed_at=executed_at,
            diff=diff,
            first_run=first_run,
            persisted=object_name is not None,
            notified=notified,
            object_name=object_name,
        )
