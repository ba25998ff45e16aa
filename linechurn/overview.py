"""
Overview index of all reports written in a run.
"""

import logging
from pathlib import Path

from linechurn.models import OverviewEntry
from linechurn.output_manager import OutputManager
from linechurn.renderer import render_overview

logger = logging.getLogger(__name__)


class OverviewAggregator:
    """Collects per-file totals during a run and writes the ranked index."""

    def __init__(self):
        self._entries: list[OverviewEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, entry: OverviewEntry) -> None:
        """Add a file whose report was written successfully."""
        self._entries.append(entry)

    def entries(self) -> list[OverviewEntry]:
        """
        Return the recorded entries ranked by total edits, highest first.

        The sort is stable, so files with equal totals keep the order in
        which they were processed.
        """
        return sorted(self._entries, key=lambda entry: entry.total_edits, reverse=True)

    def write(self, output: OutputManager, title: str = "linechurn overview") -> Path:
        """
        Render and write the index for this run's entries.

        Args:
            output: Output manager owning the output root
            title: Page title

        Returns:
            Path of the written index
        """
        ranked = self.entries()
        logger.info("Writing overview of %d files", len(ranked))
        return output.write_overview(render_overview(ranked, title=title))
