"""Tests for the overview aggregator."""

from linechurn.models import OverviewEntry
from linechurn.output_manager import OutputManager
from linechurn.overview import OverviewAggregator


def _entry(path, total):
    return OverviewEntry(path, f"{path}.html", total, 1)


class TestOverviewAggregator:
    """Tests for ranking and writing the index."""

    def test_starts_empty(self):
        aggregator = OverviewAggregator()

        assert len(aggregator) == 0
        assert aggregator.entries() == []

    def test_sorted_by_descending_total(self):
        """A file with 40 edits comes before one with 15."""
        aggregator = OverviewAggregator()
        aggregator.record(_entry("low.py", 15))
        aggregator.record(_entry("high.py", 40))

        assert [e.relative_path for e in aggregator.entries()] == ["high.py", "low.py"]

    def test_ties_keep_processing_order(self):
        aggregator = OverviewAggregator()
        for path, total in [("a", 5), ("b", 9), ("c", 5), ("d", 9), ("e", 5)]:
            aggregator.record(_entry(path, total))

        assert [e.relative_path for e in aggregator.entries()] == ["b", "d", "a", "c", "e"]

    def test_entries_does_not_mutate(self):
        aggregator = OverviewAggregator()
        aggregator.record(_entry("a", 1))
        aggregator.record(_entry("b", 2))

        aggregator.entries()

        assert [e.relative_path for e in aggregator.entries()] == ["b", "a"]
        assert len(aggregator) == 2

    def test_write(self, tmp_path):
        output = OutputManager(tmp_path)
        aggregator = OverviewAggregator()
        aggregator.record(_entry("small.py", 15))
        aggregator.record(_entry("big.py", 40))

        path = aggregator.write(output)

        html = path.read_text(encoding="utf-8")
        assert path == tmp_path / "linechurn_overview.html"
        assert html.index("big.py.html") < html.index("small.py.html")

    def test_write_empty_index(self, tmp_path):
        path = OverviewAggregator().write(OutputManager(tmp_path))

        assert "0 files" in path.read_text(encoding="utf-8")
