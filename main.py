import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

from datesorter.cleanup import remove_empty_dirs
from datesorter.config import SortConfig, parse_file_date_types, parse_older_than, validate_config
from datesorter.defaults import DEFAULT_FILE_DATE_TYPES, GROUP_BY_EXAMPLES
from datesorter.errors import DateSorterError
from datesorter.logger import MoveLogger
from datesorter.models import GroupBy
from datesorter.mover import SafeMover
from datesorter.planner import MovePlanner
from datesorter.scanner import FolderScanner
from datesorter.utils import resolve_path

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="datesorter",
        description="Move files into a destination folder based on their dates, "
                    "optionally grouped by calendar period.",
    )
    ap.add_argument("-s", "--source", required=True, metavar="PATH",
                    help="Source directory containing files to organize")
    ap.add_argument("-d", "--destination", required=True, metavar="PATH",
                    help="Destination directory where files will be moved")
    ap.add_argument("-g", "--group-by", choices=[g.value for g in GroupBy], metavar="STRATEGY",
                    help="Optional grouping strategy: "
                         + ", ".join(f"{k} ({v})" for k, v in GROUP_BY_EXAMPLES.items()))
    ap.add_argument("--previous-period-only", action="store_true",
                    help="Only move files from previous periods (not current period). Only valid with --group-by")
    ap.add_argument("--older-than", metavar="DURATION_OR_DATE",
                    help='Only move files older than a duration or date '
                         '(e.g., "30d", "1y6M", "2025-01-15", "2025-01-15T06:30:53")')
    ap.add_argument("--file-date-types", default=DEFAULT_FILE_DATE_TYPES, metavar="TYPES",
                    help="Which timestamps to check (created, modified, accessed). "
                         "Can use short forms (c, m, a). Where the platform has no birth time "
                         "(e.g. Linux), created falls back to the inode change time, which is "
                         "never older than the modification time; pass 'm' to sort by "
                         "modification time alone")
    ap.add_argument("--ignored-paths", metavar="PATHS",
                    help="Comma-separated list of files/folders to ignore")
    ap.add_argument("--min-depth", type=int, metavar="DEPTH", help="Minimum directory depth to search")
    ap.add_argument("--max-depth", type=int, metavar="DEPTH", help="Maximum directory depth to search")
    ap.add_argument("--keep-empty-folders", action="store_true",
                    help="Keep empty folders after moving files")
    ap.add_argument("--follow-symbolic-links", action="store_true",
                    help="Follow symbolic links while traversing")
    ap.add_argument("--dry-run", "-n", action="store_true",
                    help="Preview what would be moved without actually moving files")
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                    help="Logging verbosity (default: INFO)")
    return ap

def config_from_args(args: argparse.Namespace, now: datetime) -> SortConfig:
    ignored = [resolve_path(p.strip()) for p in (args.ignored_paths or "").split(",") if p.strip()]
    return SortConfig(
        source=resolve_path(args.source),
        destination=resolve_path(args.destination),
        group_by=GroupBy(args.group_by) if args.group_by else None,
        previous_period_only=args.previous_period_only,
        older_than=parse_older_than(args.older_than, now) if args.older_than else None,
        file_date_types=parse_file_date_types(args.file_date_types),
        ignored_paths=ignored,
        min_depth=args.min_depth,
        max_depth=args.max_depth,
        keep_empty_folders=args.keep_empty_folders,
        follow_symlinks=args.follow_symbolic_links,
        dry_run=args.dry_run,
    )

def organize_flow(config: SortConfig, now: datetime) -> int:
    reporter = MoveLogger(dry_run=config.dry_run)
    reporter.log_arguments(config)

    # Scan + plan
    scanner = FolderScanner(config.source, config.min_depth, config.max_depth, config.follow_symlinks)
    planner = MovePlanner(config, now, on_event=reporter.log_event)
    plan = planner.build(scanner.scan())
    reporter.log_plan(plan)

    # Move (or preview)
    reporter.begin_moves(len(plan))
    mover = SafeMover(dry_run=config.dry_run, on_result=reporter.log_result)
    results = mover.move_many(plan)
    reporter.write_results(results)

    if not config.dry_run and not config.keep_empty_folders:
        removed = remove_empty_dirs(config.source, config.ignored_paths, config.follow_symlinks)
        reporter.log_cleanup(removed)
    return 0

def run(argv: Optional[List[str]] = None, now: Optional[datetime] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    # Captured once; every date decision in the run uses this instant
    now = now or datetime.now(timezone.utc)
    try:
        config = config_from_args(args, now)
        validate_config(config)
    except DateSorterError as exc:
        logging.error("%s", exc)
        return 2
    return organize_flow(config, now)

def main():
    sys.exit(run())

if __name__ == "__main__":
    main()
