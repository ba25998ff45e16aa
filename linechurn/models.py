"""
Data types shared across the analysis pipeline.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class LineEditRecord:
    """Number of distinct commits that touched one source line."""

    line_number: int  # 1-based
    commit_count: int


@dataclass(frozen=True)
class SourceFile:
    """A text file from the repository with its lines materialized."""

    path: Path
    relative_path: str
    lines: tuple[str, ...]

    @property
    def line_count(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class FileReport:
    """Rendered HTML for one file plus its total edit count."""

    relative_path: str
    html: str
    total_edits: int
    line_count: int


@dataclass(frozen=True)
class OverviewEntry:
    """One row of the overview index."""

    relative_path: str
    link: str
    total_edits: int
    line_count: int = 0


@dataclass
class RunSummary:
    """Outcome of a full run."""

    processed: list[OverviewEntry] = field(default_factory=list)
    skipped_existing: list[str] = field(default_factory=list)
    skipped_too_long: list[str] = field(default_factory=list)
    skipped_unreadable: list[str] = field(default_factory=list)
    overview_path: Path | None = None

    @property
    def total_edits(self) -> int:
        return sum(entry.total_edits for entry in self.processed)


def display_path(relative_path: str) -> str:
    """
    Return a path that is safe to print and to write as UTF-8.

    File names that are not valid UTF-8 reach Python as lone surrogates;
    those bytes are shown as replacement characters.
    """
    return relative_path.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def split_lines(data: bytes) -> list[str]:
    """
    Split raw file content into lines the way git numbers them.

    Lines end at "\\n" only. A final newline does not start an extra line and
    a trailing "\\r" is dropped from each line.

    Args:
        data: Raw file bytes

    Returns:
        List of decoded lines (undecodable bytes replaced)
    """
    if not data:
        return []

    chunks = data.split(b"\n")
    if chunks[-1] == b"":
        chunks.pop()

    lines = []
    for chunk in chunks:
        if chunk.endswith(b"\r"):
            chunk = chunk[:-1]
        lines.append(chunk.decode("utf-8", errors="replace"))
    return lines


def count_lines(path: Path) -> int:
    """Count lines without keeping the file content around."""
    count = 0
    last = b""
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(65536), b""):
            count += block.count(b"\n")
            last = block
    # Unterminated last line
    if last and not last.endswith(b"\n"):
        count += 1
    return count


def read_source_file(path: Path, repo_root: Path) -> SourceFile:
    """
    Read a repository file into a SourceFile.

    Args:
        path: Absolute path of the file
        repo_root: Repository root the relative path is computed against

    Returns:
        SourceFile with its lines in order
    """
    relative_path = path.relative_to(repo_root).as_posix()
    return SourceFile(
        path=path,
        relative_path=relative_path,
        lines=tuple(split_lines(path.read_bytes())),
    )
