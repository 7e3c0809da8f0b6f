import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Sequence

from .errors import ConfigurationError, TimestampReadError
from .models import FileDateType, FileTimestamps

TimestampReader = Callable[[Path], FileTimestamps]


def _utc(ts: float) -> datetime:
    return datetime.fromtimestamp(ts, tz=timezone.utc)


def read_file_timestamps(path: Path) -> FileTimestamps:
    """Read created/modified/accessed times of ``path`` as UTC datetimes.

    Platforms without a birth time fall back to ``st_ctime``.
    """
    try:
        st = os.stat(path)
    except OSError as exc:
        raise TimestampReadError(f"Failed to get metadata for: {path} ({exc})") from exc

    created = getattr(st, "st_birthtime", None) or st.st_ctime
    return FileTimestamps(
        created=_utc(created),
        modified=_utc(st.st_mtime),
        accessed=_utc(st.st_atime),
    )


def resolve_effective_date(
    created: datetime,
    modified: datetime,
    accessed: datetime,
    date_types: Sequence[FileDateType],
) -> datetime:
    """Return the most recent of the requested timestamps."""
    if not date_types:
        raise ConfigurationError("At least one file date type must be provided")
    by_type = {
        FileDateType.CREATED: created,
        FileDateType.MODIFIED: modified,
        FileDateType.ACCESSED: accessed,
    }
    return max(by_type[t] for t in date_types)


def get_file_date(
    path: Path,
    date_types: Sequence[FileDateType],
    read_timestamps: TimestampReader = read_file_timestamps,
) -> datetime:
    ts = read_timestamps(path)
    return resolve_effective_date(ts.created, ts.modified, ts.accessed, date_types)
