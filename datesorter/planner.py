from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

from .config import SortConfig
from .errors import DestinationError, TimestampReadError
from .models import EventKind, FileMoveCandidate, FileToMove, GroupBy, MovePlan, PlanEvent
from .periods import is_before_current, period_label
from .timestamps import TimestampReader, get_file_date, read_file_timestamps
from .utils import compute_destination, is_within

EventSink = Callable[[PlanEvent], None]


def should_move(
    file_date: datetime,
    group_by: Optional[GroupBy],
    previous_period_only: bool,
    older_than: Optional[datetime],
    now: datetime,
) -> bool:
    """Decide whether a file dated ``file_date`` passes the active filters."""
    if older_than is not None and file_date >= older_than:
        return False

    # previous_period_only without group_by is accepted and has no effect
    if previous_period_only and group_by is not None:
        if not is_before_current(file_date, now, group_by):
            return False

    return True


def group_folder_for(file_date: datetime, group_by: Optional[GroupBy]) -> Optional[str]:
    if group_by is None:
        return None
    return period_label(file_date, group_by)


class MovePlanner:
    """Turns traversed file paths into an ordered MovePlan. Never touches the disk itself."""

    def __init__(
        self,
        config: SortConfig,
        now: datetime,
        read_timestamps: TimestampReader = read_file_timestamps,
        on_event: Optional[EventSink] = None,
    ):
        self.config = config
        self.now = now
        self.read_timestamps = read_timestamps
        self.on_event = on_event

    def _emit(self, kind: EventKind, path: Path, destination: Optional[Path] = None, reason: str = ""):
        if self.on_event is not None:
            self.on_event(PlanEvent(kind, path, destination, reason))

    def _candidate(self, path: Path) -> FileMoveCandidate:
        file_date = get_file_date(path, self.config.file_date_types, self.read_timestamps)
        return FileMoveCandidate(path, file_date)

    def build(self, paths: Iterable[Path]) -> MovePlan:
        cfg = self.config
        plan = MovePlan()

        for path in paths:
            if is_within(path, cfg.ignored_paths):
                self._emit(EventKind.IGNORED, path)
                continue

            try:
                candidate = self._candidate(path)
            except TimestampReadError as exc:
                plan.failed += 1
                self._emit(EventKind.FAILED, path, reason=f"Failed to get file date: {exc}")
                continue

            if not should_move(candidate.effective_date, cfg.group_by,
                               cfg.previous_period_only, cfg.older_than, self.now):
                plan.skipped += 1
                self._emit(EventKind.EXCLUDED, path, reason=f"dated {candidate.effective_date.isoformat()}")
                continue

            group = group_folder_for(candidate.effective_date, cfg.group_by)
            try:
                dest = compute_destination(path, cfg.source, cfg.destination, group)
            except DestinationError as exc:
                plan.failed += 1
                self._emit(EventKind.FAILED, path, reason=f"Failed to calculate destination: {exc}")
                continue

            plan.entries.append(FileToMove(path, dest))
            self._emit(EventKind.INCLUDED, path, dest)

        return plan
