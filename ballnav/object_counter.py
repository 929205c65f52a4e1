"""Tally of detected objects by label."""

from __future__ import annotations

from collections import Counter


class ObjectCounter:
    """Counts how many times each label has been detected."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()

    def detected(self, label: str) -> None:
        self._counts[label] += 1

    def reset(self) -> None:
        self._counts.clear()

    def count(self, label: str) -> int:
        return self._counts[label]