"""
Candidate file discovery.

Walks a repository working tree and yields the text files worth analyzing.
"""

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

# Directories never descended into
EXCLUDED_DIRS = {".git"}

# git treats a file as binary if a NUL byte shows up this early
BINARY_SNIFF_BYTES = 8000


def looks_binary(path: Path) -> bool:
    """Return True if the file looks binary (or cannot be read)."""
    try:
        with open(path, "rb") as f:
            return b"\0" in f.read(BINARY_SNIFF_BYTES)
    except OSError:
        return True


def _is_within(path: Path, parent: Path) -> bool:
    return path == parent or parent in path.parents


def discover_files(root: Path, exclude: Iterable[Path] = ()) -> Iterator[Path]:
    """
    Yield the text files under a repository root in a stable order.

    Args:
        root: Repository root
        exclude: Directories to leave out, such as an output root inside the repo

    Yields:
        Absolute file paths, sorted by directory then name
    """
    root = root.resolve()
    excluded = [Path(path).resolve() for path in exclude]

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)

        # Prune in place so os.walk skips these subtrees
        dirnames[:] = sorted(
            name
            for name in dirnames
            if name not in EXCLUDED_DIRS
            and not (current / name).is_symlink()
            and not any(_is_within(current / name, path) for path in excluded)
        )

        for name in sorted(filenames):
            path = current / name
            if path.is_symlink() or not path.is_file():
                continue
            if looks_binary(path):
                continue
            yield path
