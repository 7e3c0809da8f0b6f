from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional

class FileDateType(Enum):
    CREATED = "created"
    MODIFIED = "modified"
    ACCESSED = "accessed"

class GroupBy(Enum):
    WEEK = "week"
    BIWEEKLY = "biweekly"
    MONTH = "month"
    TRIMESTER = "trimester"
    QUADRIMESTER = "quadrimester"
    SEMESTER = "semester"
    YEAR = "year"

class EventKind(Enum):
    INCLUDED = "included"
    IGNORED = "ignored"
    EXCLUDED = "excluded"
    FAILED = "failed"

@dataclass(frozen=True)
class FileTimestamps:
    created: datetime
    modified: datetime
    accessed: datetime

@dataclass(frozen=True)
class FileMoveCandidate:
    path: Path
    effective_date: datetime

@dataclass(frozen=True)
class FileToMove:
    source: Path
    destination: Path

@dataclass
class MovePlan:
    """Ordered move entries for one run, in traversal order."""
    entries: List[FileToMove] = field(default_factory=list)
    skipped: int = 0
    failed: int = 0

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[FileToMove]:
        return iter(self.entries)

@dataclass(frozen=True)
class PlanEvent:
    kind: EventKind
    path: Path
    destination: Optional[Path] = None
    reason: str = ""

@dataclass(frozen=True)
class MoveResult:
    src: Path
    dst: Path
    performed: bool  # False if dry-run or failed
    reason: str = ""  # e.g., "exists, renamed", "same location"
    error: str = ""  # set when the move failed
