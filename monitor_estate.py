"""CLI and scheduled-handler entrypoint for the EstateWatch agent."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from estatewatch.errors import EstateWatchError
from estatewatch.export import export_diff_to_xlsx, export_filename
from estatewatch.notifications import build_notifier_from_env
from estatewatch.runner import DEFAULT_LABEL, EstateWatchRunner
from estatewatch.scraper import HUD_SEARCH_URL
from estatewatch.storage import build_store_from_env

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="EstateWatch monitoring agent")
    parser.add_argument(
        "--run",
        action="store_true",
        help="execute one monitoring cycle",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="skip notifications and persistence while still scraping and diffing",
    )
    parser.add_argument(
        "--target-url",
        default=os.getenv("TARGET_URL", HUD_SEARCH_URL),
        help="URL to monitor (overrides TARGET_URL env var)",
    )
    parser.add_argument(
        "--backend",
        choices=("fs", "disk"),
        default=None,
        help="snapshot store backend (overrides STORE_BACKEND env var)",
    )
    parser.add_argument(
        "--folder",
        default=None,
        help="snapshot folder (overrides SNAPSHOT_FOLDER env var)",
    )
    parser.add_argument(
        "--prefix",
        default=None,
        help="snapshot name prefix (overrides SNAPSHOT_PREFIX env var)",
    )
    parser.add_argument(
        "--export-dir",
        default=os.getenv("EXPORT_DIR"),
        help="write an xlsx report of each run's changes into this folder",
    )
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser


def build_runner(
    target_url: str,
    backend: str | None = None,
    folder: str | None = None,
    prefix: str | None = None,
) -> EstateWatchRunner:
    return EstateWatchRunner(
        store=build_store_from_env(backend=backend, folder=folder, prefix=prefix),
        target_url=target_url,
        notifier=build_notifier_from_env(),
        label=os.getenv("NOTIFY_LABEL", DEFAULT_LABEL),
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.run:
        parser.print_help()
        return 1

    try:
        runner = build_runner(
            args.target_url,
            backend=args.backend,
            folder=args.folder,
            prefix=args.prefix,
        )
        summary = runner.run(dry_run=args.dry_run)
    except (EstateWatchError, ValueError):
        logger.exception("Monitoring cycle failed")
        return 2

    logger.info(
        "Run finished: %d added, %d changed%s",
        summary.added_count,
        summary.changed_count,
        f", saved {summary.object_name}" if summary.persisted else "",
    )

    if args.export_dir and summary.diff.has_changes:
        try:
            export_path = Path(args.export_dir) / export_filename(summary)
            export_diff_to_xlsx(summary, export_path)
        except Exception:  # noqa: BLE001
            logger.exception("Failed to export change report")
    return 0


def lambda_handler(event: dict, context: object) -> dict:
    """Scheduled-function entrypoint; configuration comes from env vars."""
    configure_logging(verbose=False)
    runner = build_runner(os.getenv("TARGET_URL", HUD_SEARCH_URL))
    summary = runner.run()
    return {
        "changed_records": summary.changed_count,
        "new_records": summary.added_count,
        "message": "Success",
    }


if __name__ == "__main__":
    sys.exit(main())
