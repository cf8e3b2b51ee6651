"""
Random source capability for the generator.

Production uses SystemRandomSource. Tests inject SequenceRandomSource to
replay a fixed sequence of choices and assert exact output.
"""

import random
from typing import Iterable, List, Optional, Protocol


class RandomSource(Protocol):
    def next(self, bound: int) -> int:
        """Return an integer in [0, bound)."""
        ...


class SystemRandomSource:
    """Uniform choices backed by random.Random (optionally seeded)."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def next(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self._random.randrange(bound)


class SequenceRandomSource:
    """
    Replays a fixed sequence of raw values, reduced modulo the bound.

    Once the sequence runs out it keeps returning 0, so a short sequence
    always means "first remaining candidate" for the rest of the plan.
    """

    def __init__(self, values: Iterable[int]):
        self._values: List[int] = list(values)
        self._position = 0
        self.calls: List[int] = []

    def next(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        self.calls.append(bound)
        if self._position >= len(self._values):
            return 0
        value = self._values[self._position]
        self._position += 1
        return value % bound
