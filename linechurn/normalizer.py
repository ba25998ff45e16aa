"""
Intensity normalization for the heat map.

Maps raw per-line commit counts onto [0, 1] relative to the least and most
edited lines of the same file.
"""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class IntensityMap:
    """Min/max of a file's counts and the mapping derived from them."""

    min: int
    max: int

    @property
    def divisor(self) -> int:
        return self.max - self.min

    def intensity(self, count: int) -> float:
        """
        Return the heat-map intensity for a count.

        Every intensity is 0 when all lines share the same count.
        """
        divisor = self.divisor
        if divisor == 0:
            return 0.0
        value = (count - self.min) / divisor
        return min(1.0, max(0.0, value))

    def intensities(self, counts: Iterable[int]) -> list[float]:
        return [self.intensity(count) for count in counts]


def normalize(counts: Iterable[int]) -> IntensityMap:
    """
    Build the IntensityMap for a sequence of per-line counts.

    Args:
        counts: Commit counts in line order (may be empty)

    Returns:
        IntensityMap with min and max of the counts (both 0 when empty)
    """
    counts = list(counts)
    if not counts:
        return IntensityMap(min=0, max=0)
    return IntensityMap(min=min(counts), max=max(counts))
