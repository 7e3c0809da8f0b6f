import logging
from pathlib import Path
from typing import Iterable, List

from .utils import is_within, walk_tree

logger = logging.getLogger(__name__)


def remove_empty_dirs(root: Path, ignored_paths: Iterable[Path] = (), follow_symlinks: bool = False) -> List[Path]:
    """
    Delete empty directories below root, deepest first, so that folders
    emptied by their children go too. The root itself is kept.
    Returns the removed directories in removal order.
    """
    ignored = list(ignored_paths)
    removed: List[Path] = []

    # Reversed top-down order visits every child before its parent
    dirs = [base for base, _dirnames, _filenames in walk_tree(root, follow_symlinks)]
    for path in reversed(dirs):
        if path == root or is_within(path, ignored):
            continue
        if path.is_symlink():
            continue
        try:
            if any(path.iterdir()):
                continue
            path.rmdir()
        except OSError as exc:
            logger.warning("Failed to delete empty directory %s: %s", path, exc)
            continue
        removed.append(path)

    return removed
