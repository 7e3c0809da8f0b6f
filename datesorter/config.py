import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

from .defaults import FILE_DATE_TYPE_ALIASES, FILE_DATE_TYPE_CHOICES
from .errors import ConfigurationError, InvalidPathError
from .models import FileDateType, GroupBy
from .utils import is_within

logger = logging.getLogger(__name__)

# Month and year lengths follow the usual "humantime" convention.
_DURATION_UNITS = {
    "ns": 1e-9, "nsec": 1e-9, "nanos": 1e-9,
    "us": 1e-6, "usec": 1e-6, "\u00b5s": 1e-6,
    "ms": 1e-3, "msec": 1e-3, "millis": 1e-3,
    "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
    "m": 60, "min": 60, "mins": 60, "minute": 60, "minutes": 60,
    "h": 3600, "hr": 3600, "hrs": 3600, "hour": 3600, "hours": 3600,
    "d": 86400, "day": 86400, "days": 86400,
    "w": 604800, "week": 604800, "weeks": 604800,
    "M": 2_630_016, "month": 2_630_016, "months": 2_630_016,
    "y": 31_557_600, "year": 31_557_600, "years": 31_557_600,
}
_DURATION_TERM = re.compile(r"\s*(\d+)\s*([^\W\d_]+)\s*")


@dataclass
class SortConfig:
    source: Path
    destination: Path
    group_by: Optional[GroupBy] = None
    previous_period_only: bool = False
    older_than: Optional[datetime] = None
    file_date_types: List[FileDateType] = field(
        default_factory=lambda: [FileDateType.CREATED, FileDateType.MODIFIED]
    )
    ignored_paths: List[Path] = field(default_factory=list)
    min_depth: Optional[int] = None
    max_depth: Optional[int] = None
    keep_empty_folders: bool = False
    follow_symlinks: bool = False
    dry_run: bool = False


def parse_file_date_type(value: str) -> FileDateType:
    key = value.strip()
    try:
        return FILE_DATE_TYPE_ALIASES[key.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported file date type: {key}. "
            f"Please use one of the following: {', '.join(FILE_DATE_TYPE_CHOICES)}"
        ) from None


def parse_file_date_types(value: str) -> List[FileDateType]:
    """Parse a comma-separated list such as ``"created,m"``."""
    return [parse_file_date_type(part) for part in value.split(",")]


def parse_duration(value: str) -> timedelta:
    """Parse durations like ``30d``, ``1y6M`` or ``2h 30m``."""
    pos = 0
    seconds = 0.0
    while pos < len(value):
        m = _DURATION_TERM.match(value, pos)
        if not m or m.group(2) not in _DURATION_UNITS:
            raise ConfigurationError(f"Invalid duration: {value!r}")
        seconds += int(m.group(1)) * _DURATION_UNITS[m.group(2)]
        pos = m.end()
    if pos == 0:
        raise ConfigurationError(f"Invalid duration: {value!r}")
    return timedelta(seconds=seconds)


def parse_older_than(value: str, now: datetime) -> datetime:
    """
    Turn an --older-than value into a UTC cutoff. ISO dates and datetimes are
    read in local time; durations are subtracted from ``now``.
    """
    for fmt in ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"):
        try:
            return datetime.strptime(value, fmt).astimezone(timezone.utc)
        except ValueError:
            continue

    try:
        return now - parse_duration(value)
    except OverflowError:
        raise ConfigurationError(f"Duration out of range: {value!r}") from None
    except ConfigurationError:
        raise ConfigurationError(
            "Invalid format. Use duration (e.g., '30d', '1y6M'), ISO date ('2025-01-15'), "
            "or ISO datetime ('2025-01-15T10:30:00')"
        ) from None


def validate_config(config: SortConfig) -> None:
    src, dest = config.source, config.destination
    if not src.exists():
        raise InvalidPathError(f"Source directory does not exist: {src}")
    if not src.is_dir():
        raise InvalidPathError(f"Source path is not a directory: {src}")

    if not dest.exists():
        logger.info("Destination directory does not exist. Creating: %s", dest)
        try:
            dest.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise InvalidPathError(f"Failed to create destination directory: {dest} ({exc})") from exc
    if not dest.is_dir():
        raise InvalidPathError(f"Destination path is not a directory: {dest}")

    if src == dest:
        raise InvalidPathError("Source and destination directories cannot be the same")

    if not config.file_date_types:
        raise ConfigurationError("At least one file date type must be provided")

    if config.previous_period_only and config.group_by is None:
        logger.warning("--previous-period-only is only meaningful with --group-by")

    for path in config.ignored_paths:
        if not path.exists():
            logger.warning("Ignored path does not exist: %s", path)

    if is_within(dest, [src]) and not is_within(dest, config.ignored_paths):
        logger.warning(
            "Destination %s is inside the source; add it to --ignored-paths "
            "to avoid re-sorting moved files", dest
        )

    if config.min_depth is not None and config.max_depth is not None:
        if config.min_depth > config.max_depth:
            raise ConfigurationError(
                f"Minimum depth ({config.min_depth}) must be less than or equal "
                f"to maximum depth ({config.max_depth})"
            )
