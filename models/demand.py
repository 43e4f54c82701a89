"""
Demand model for the Bandwidth Allocator.

Represents one user or task competing for bandwidth.
"""

import math
from dataclasses import dataclass
from numbers import Integral
from typing import Optional

from models.ratio import Ratio


@dataclass
class Demand:
    """
    A single user or task requesting bandwidth.

    Attributes:
        name: Name of the user or task
        demand: Bandwidth requested (the knapsack weight)
        priority: Priority level of the task (the knapsack value)
        ratio: Priority per unit of demand, computed once before ranking
        allocated: Bandwidth granted by the allocation pass

    Invariant:
        0 <= allocated <= demand
    """
    name: str
    demand: float
    priority: int
    ratio: Optional[Ratio] = None
    allocated: float = 0.0

    def __post_init__(self):
        """Validate demand state. Negative or non-finite inputs are rejected."""
        if isinstance(self.priority, bool) or not isinstance(self.priority, Integral):
            raise ValueError(f"Demand '{self.name}': priority must be an integer, got {self.priority!r}")
        if self.priority < 0:
            raise ValueError(f"Demand '{self.name}': priority cannot be negative ({self.priority})")
        try:
            float(self.priority)
        except OverflowError:
            raise ValueError(f"Demand '{self.name}': priority {self.priority} is too large")

        try:
            self.demand = float(self.demand)
        except OverflowError:
            raise ValueError(f"Demand '{self.name}': demand {self.demand} is too large")
        if not math.isfinite(self.demand):
            raise ValueError(f"Demand '{self.name}': demand must be a finite number")
        if self.demand < 0:
            raise ValueError(f"Demand '{self.name}': demand cannot be negative ({self.demand})")

        if self.allocated < 0 or self.allocated > self.demand:
            raise ValueError(
                f"Demand '{self.name}': allocated ({self.allocated}) "
                f"outside [0, {self.demand}]"
            )

    @property
    def fill_fraction(self) -> float:
        """
        Fraction of the demand that was granted.

        Zero-demand entries count as fully filled.
        """
        if self.demand == 0:
            return 1.0
        return self.allocated / self.demand

    @property
    def credited_value(self) -> float:
        """Priority credited for the current allocation (fractional for partial grants)."""
        return self.fill_fraction * self.priority

    def is_fully_served(self) -> bool:
        return self.allocated == self.demand

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Demand(name={self.name!r}, demand={self.demand}, "
            f"priority={self.priority}, ratio={self.ratio}, allocated={self.allocated})"
        )
