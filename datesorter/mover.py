from pathlib import Path
from typing import Callable, Iterable, List, Optional
import shutil

from .errors import MoveError
from .models import FileToMove, MoveResult
from .utils import unique_path

class SafeMover:
    def __init__(self, dry_run: bool = True, on_result: Optional[Callable[[MoveResult], None]] = None):
        self.dry_run = dry_run
        self.on_result = on_result

    def _move(self, src: Path, dst: Path) -> None:
        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise MoveError(f"Failed to create directory: {dst.parent} ({exc})") from exc
        try:
            shutil.move(str(src), str(dst))
        except OSError as exc:
            raise MoveError(f"Moving file {src}: {exc}") from exc

    def move_one(self, item: FileToMove) -> MoveResult:
        src, dest_file = item.source, item.destination

        # Skip if source and destination are same
        if src == dest_file:
            return MoveResult(src, dest_file, performed=False, reason="same location")

        if dest_file.exists():
            dest_file = unique_path(dest_file)
            reason = "exists, renamed"
        else:
            reason = ""

        if self.dry_run:
            return MoveResult(src, dest_file, performed=False, reason=reason)

        try:
            self._move(src, dest_file)
        except MoveError as exc:
            return MoveResult(src, dest_file, performed=False, reason=reason, error=str(exc))
        return MoveResult(src, dest_file, performed=True, reason=reason)

    def move_many(self, items: Iterable[FileToMove]) -> List[MoveResult]:
        results: List[MoveResult] = []
        for item in items:
            result = self.move_one(item)
            results.append(result)
            if self.on_result is not None:
                self.on_result(result)
        return results
