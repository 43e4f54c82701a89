"""
Ratio model for the Bandwidth Allocator.

Priority-per-bandwidth ratio as an explicit tagged value. A zero-demand
entry with positive priority gets an UNBOUNDED ratio instead of a large
sentinel number, so no finite ratio can ever outrank it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class RatioKind(Enum):
    """Kinds of priority/demand ratios."""
    FINITE = "FINITE"
    UNBOUNDED = "UNBOUNDED"


@dataclass(frozen=True)
class Ratio:
    """
    Priority per unit of demanded bandwidth.

    Attributes:
        kind: FINITE or UNBOUNDED
        value: Numeric ratio (only meaningful for FINITE)
    """
    kind: RatioKind
    value: float = 0.0

    @classmethod
    def finite(cls, value: float) -> "Ratio":
        return cls(RatioKind.FINITE, float(value))

    @classmethod
    def unbounded(cls) -> "Ratio":
        return cls(RatioKind.UNBOUNDED)

    @property
    def is_unbounded(self) -> bool:
        return self.kind == RatioKind.UNBOUNDED

    def sort_key(self) -> Tuple[int, float]:
        """
        Ascending sort key that places the highest ratio first.

        UNBOUNDED maps to group 0 and sorts before every FINITE ratio
        (group 1); within FINITE, larger values get smaller keys.
        """
        if self.is_unbounded:
            return (0, 0.0)
        return (1, -self.value)

    def __str__(self) -> str:
        if self.is_unbounded:
            return "unbounded"
        return f"{self.value:.2f}"
