from pathlib import Path
from typing import Iterator, Optional

from .utils import walk_tree

class FolderScanner:
    """Walks a folder tree and yields the files in it.

    The root itself has depth 0, so files directly inside it have depth 1.
    """

    def __init__(
        self,
        root: Path,
        min_depth: Optional[int] = None,
        max_depth: Optional[int] = None,
        follow_symlinks: bool = False,
    ):
        self.root = root
        self.min_depth = min_depth
        self.max_depth = max_depth
        self.follow_symlinks = follow_symlinks

    def _depth_ok(self, depth: int) -> bool:
        if self.min_depth is not None and depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False
        return True

    def scan(self) -> Iterator[Path]:
        # Unreadable directories are skipped (os.walk ignores errors by default)
        for base, dirnames, filenames in walk_tree(self.root, self.follow_symlinks):
            depth = len(base.relative_to(self.root).parts) + 1

            if self.max_depth is not None and depth >= self.max_depth:
                # Files at this level are still allowed, deeper folders are not
                dirnames[:] = []
            dirnames.sort()

            for name in sorted(filenames):
                p = base / name
                if not self._depth_ok(depth):
                    continue
                if not self.follow_symlinks and p.is_symlink():
                    continue
                if not p.is_file():
                    continue
                yield p
