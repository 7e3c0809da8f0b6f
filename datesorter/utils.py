import os
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple
from .errors import *

def resolve_path(path_str) -> Path:
    """Return an absolute, user-expanded Path."""
    return Path(path_str).expanduser().resolve()


def unique_path(dest: Path) -> Path:
    """
    If dest exists, append ' (1)', ' (2)', ... before the suffix.
    Returns a Path that does not exist.
    """
    if not dest.exists():
        return dest

    stem = dest.stem
    suffix = dest.suffix
    parent = dest.parent
    i = 1
    while True:
        candidate = parent / f"{stem} ({i}){suffix}"
        if not candidate.exists():
            return candidate
        i += 1


def is_within(path: Path, roots: Iterable[Path]) -> bool:
    """True if path equals or lies below any of roots (whole components only)."""
    return any(path.is_relative_to(root) for root in roots)


def _dir_key(path: Path) -> Optional[Tuple[int, int]]:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return (st.st_dev, st.st_ino)


def walk_tree(root: Path, follow_symlinks: bool = False) -> Iterator[Tuple[Path, List[str], List[str]]]:
    """
    Top-down os.walk that never re-enters a directory already open on the
    current path, so symlinks pointing back to an ancestor (or the root)
    are not followed. Callers may still prune the yielded dirnames.
    """
    opened: Dict[Path, Tuple[int, int]] = {}
    for dirpath, dirnames, filenames in os.walk(root, followlinks=follow_symlinks):
        base = Path(dirpath)
        key = _dir_key(base)
        if key is not None:
            opened[base] = key
        ancestors = {opened[p] for p in (base, *base.parents) if p in opened}
        dirnames[:] = [d for d in dirnames if _dir_key(base / d) not in ancestors]
        yield base, dirnames, filenames


def compute_destination(
    source_path: Path,
    source_root: Path,
    dest_root: Path,
    group_folder: Optional[str] = None,
) -> Path:
    """
    Re-root source_path from source_root onto dest_root, keeping its relative
    subtree. With a group folder: dest_root/group_folder/<relative>.
    """
    try:
        relative = source_path.relative_to(source_root)
    except ValueError:
        raise DestinationError(
            f"Failed to compute relative path: {source_path} is not under {source_root}"
        ) from None

    if group_folder:
        return dest_root / group_folder / relative
    return dest_root / relative
