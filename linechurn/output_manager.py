"""
Output tree management.

Mirrors the repository layout under the output root, decides which files
need processing and writes reports atomically.
"""

import logging
import os
import tempfile
from pathlib import Path, PurePosixPath
from urllib.parse import quote

from linechurn.config import OVERVIEW_FILENAME, REPORT_SUFFIX
from linechurn.models import display_path

logger = logging.getLogger(__name__)


class ReportWriteError(Exception):
    """Raised when a report cannot be written completely."""

    pass


class OutputManager:
    """Owns the output root and everything written below it."""

    def __init__(
        self,
        output_root: str | Path,
        skip_existing: bool = True,
        max_lines: int = 0,
        report_suffix: str = REPORT_SUFFIX,
        overview_filename: str = OVERVIEW_FILENAME,
    ):
        """
        Initialize the output manager.

        Args:
            output_root: Directory the report tree is written to
            skip_existing: Skip files whose report already exists
            max_lines: Skip files with more lines than this (0 = no limit)
            report_suffix: Appended to the source file name for its report
            overview_filename: Name of the overview index in the output root
        """
        if max_lines < 0:
            raise ValueError(f"max_lines must not be negative, got {max_lines}")

        self.output_root = Path(output_root)
        self.skip_existing = skip_existing
        self.max_lines = max_lines
        self.report_suffix = report_suffix
        self.overview_filename = overview_filename

    @property
    def overview_path(self) -> Path:
        return self.output_root / self.overview_filename

    def prepare(self) -> None:
        """Create the output root if it doesn't exist."""
        self.output_root.mkdir(parents=True, exist_ok=True)

    def _relative_report_path(self, relative_path: str) -> PurePosixPath:
        source = PurePosixPath(relative_path)
        return source.with_name(source.name + self.report_suffix)

    def report_path(self, relative_path: str) -> Path:
        """
        Return where the report for a source file is written.

        Args:
            relative_path: Source path relative to the repository root ("/"-separated)

        Returns:
            <output_root>/<same directories>/<file name><report suffix>
        """
        return self.output_root.joinpath(*self._relative_report_path(relative_path).parts)

    def report_link(self, relative_path: str) -> str:
        """Return the URL of a report relative to the output root."""
        # Quote the file system bytes so undecodable names still resolve
        return quote(os.fsencode(str(self._relative_report_path(relative_path))))

    def is_existing(self, relative_path: str) -> bool:
        """Check whether skip-existing applies to this file."""
        return self.skip_existing and self.report_path(relative_path).exists()

    def exceeds_max_lines(self, line_count: int) -> bool:
        """Check whether a file is over the configured line limit."""
        return self.max_lines != 0 and line_count > self.max_lines

    def write_report(self, relative_path: str, html: str) -> Path:
        """
        Write the report for one source file.

        Args:
            relative_path: Source path relative to the repository root
            html: Complete HTML document

        Returns:
            Path of the written report

        Raises:
            ReportWriteError: If the report could not be written
        """
        return self._write(self.report_path(relative_path), html)

    def write_overview(self, html: str) -> Path:
        """Write the overview index to the output root."""
        return self._write(self.overview_path, html)

    def _write(self, path: Path, html: str) -> Path:
        """Write to a temporary file beside the target, then replace the target."""
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(html)
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, UnicodeError) as e:
            raise ReportWriteError(f"Could not write {display_path(str(path))}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.debug("Wrote %s", display_path(str(path)))
        return path
