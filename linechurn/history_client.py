"""
Git history client for per-line commit counts.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class HistoryClientError(Exception):
    """Raised when the history tool cannot be used at all."""

    pass


class HistoryQuery(Protocol):
    """Anything that can report how many commits touched a single line."""

    def count_commits(self, relative_path: str, line: int) -> int:
        ...


class GitHistoryClient:
    """Counts the commits touching one line with `git log -L`."""

    def __init__(
        self,
        repo_root: str | Path,
        timeout: float | None = None,
        git_executable: str = "git",
    ):
        """
        Initialize the git client.

        Args:
            repo_root: Root of the git working tree, used as working directory
            timeout: Seconds before a single query is abandoned (None = wait forever)
            git_executable: Name or path of the git binary

        Raises:
            HistoryClientError: If the git executable cannot be found
        """
        git_path = shutil.which(git_executable)
        if git_path is None:
            raise HistoryClientError(
                f"'{git_executable}' not found. Install git or put it on PATH."
            )

        self.repo_root = Path(repo_root)
        self.timeout = timeout
        self.git = git_path

    def build_command(self, relative_path: str, line: int) -> list[str]:
        """Return the git argument list for one line range query."""
        return [
            self.git,
            "log",
            f"-L{line},{line}:{relative_path}",
            "--no-patch",
            "--pretty=format:%H",
        ]

    def count_commits(self, relative_path: str, line: int) -> int:
        """
        Count the distinct commits whose diff touched the given line.

        Any failure (git missing at runtime, timeout, non-zero exit) yields 0
        so a single unreadable line does not stop the run.

        Args:
            relative_path: File path relative to the repository root
            line: 1-based line number

        Returns:
            Number of commits, or 0 on failure
        """
        cmd = self.build_command(relative_path, line)
        logger.debug("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_root,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("git log failed for %s:%d: %s", relative_path, line, e)
            return 0

        if result.returncode != 0:
            logger.debug(
                "git log exited %d for %s:%d: %s",
                result.returncode,
                relative_path,
                line,
                result.stderr.strip(),
            )
            return 0

        return parse_commit_count(result.stdout)


def parse_commit_count(output: str | None) -> int:
    """
    Count the commit records in `git log --pretty=format:%H` output.

    Args:
        output: Raw stdout of the git command

    Returns:
        Number of distinct non-empty records, 0 for empty or missing output
    """
    if not output:
        return 0

    records = {record.strip() for record in output.splitlines() if record.strip()}
    return len(records)
