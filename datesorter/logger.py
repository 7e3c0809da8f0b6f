import logging
from typing import Iterable, List

from .config import SortConfig
from .models import EventKind, MovePlan, MoveResult, PlanEvent

log = logging.getLogger("datesorter")

class MoveLogger:
    """Renders planner events and move results as log lines."""
    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run
        self.included = 0
        self.index = 0
        self.total = 0

    def log_arguments(self, config: SortConfig) -> None:
        log.info("These are the arguments you provided:")
        log.info("Source directory: %s", config.source)
        log.info("Destination directory: %s", config.destination)
        log.info("Finding files to move by their: %s", ", ".join(t.value for t in config.file_date_types))
        log.info("Grouping by: %s", config.group_by.value if config.group_by else "None")
        if config.previous_period_only:
            log.info("Filter: Previous periods only (excluding current period)")
        if config.older_than is not None:
            log.info("Filter: Only files older than %s", config.older_than.isoformat())
        if config.ignored_paths:
            log.info("Ignored paths: %s", ", ".join(str(p) for p in config.ignored_paths))
        if config.min_depth is not None:
            log.info("Min depth: %d", config.min_depth)
        if config.max_depth is not None:
            log.info("Max depth: %d", config.max_depth)
        if config.keep_empty_folders:
            log.info("Keeping empty folders after moving files")
        log.info("Follow symbolic links: %s", config.follow_symlinks)
        log.info("Dry run: %s", config.dry_run)

    def log_event(self, event: PlanEvent) -> None:
        if event.kind is EventKind.INCLUDED:
            self.included += 1
            log.info("%d. %s", self.included, event.path)
        elif event.kind is EventKind.FAILED:
            log.warning("%s: %s", event.path, event.reason)
        elif event.kind is EventKind.EXCLUDED:
            log.debug("Skipped %s (%s)", event.path, event.reason)
        else:
            log.debug("Ignored %s", event.path)

    def log_plan(self, plan: MovePlan) -> None:
        log.info("Found %d file(s) to move", len(plan))
        if plan.skipped:
            log.info("%d file(s) did not pass the filters", plan.skipped)
        if plan.failed:
            log.warning("%d file(s) could not be evaluated", plan.failed)

    def begin_moves(self, total: int) -> None:
        self.index = 0
        self.total = total
        if total:
            log.info("Moving files%s...", " (DRY RUN)" if self.dry_run else "")

    def log_result(self, result: MoveResult) -> None:
        self.index += 1
        if result.error:
            log.error("%s", result.error)
            return
        flag = f" ({result.reason})" if result.reason else ""
        log.info("%d/%d. %s -> %s%s", self.index, self.total, result.src, result.dst.parent, flag)

    def write_results(self, results: Iterable[MoveResult]) -> int:
        ok = sum(1 for r in results if not r.error)
        if self.dry_run:
            log.info("DRY RUN: %d file(s) would have been moved successfully", ok)
        else:
            log.info("Finished moving files, %d file(s) moved successfully", ok)
        return ok

    def log_cleanup(self, removed: List) -> None:
        if not removed:
            return
        log.info("Cleaning up empty directories...")
        for i, d in enumerate(removed, 1):
            log.info("%d/%d. Deleted empty directory: %s", i, len(removed), d)
