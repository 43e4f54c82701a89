"""
Bandwidth pool model for the Bandwidth Allocator.

The single divisible resource drawn down by one allocation pass.
"""

import math
from dataclasses import dataclass, field


@dataclass
class BandwidthPool:
    """
    Remaining bandwidth during an allocation pass.

    Attributes:
        total: Configured total capacity
        remaining: Capacity not yet handed out

    Invariant:
        0 <= remaining <= total, and remaining never increases
    """
    total: float
    remaining: float = field(init=False)

    def __post_init__(self):
        """Validate capacity and fill the pool."""
        try:
            self.total = float(self.total)
        except OverflowError:
            raise ValueError(f"Bandwidth capacity {self.total} is too large")
        if not math.isfinite(self.total):
            raise ValueError("Bandwidth capacity must be a finite number")
        if self.total < 0:
            raise ValueError(f"Bandwidth capacity cannot be negative ({self.total})")
        self.remaining = self.total

    @property
    def used(self) -> float:
        return self.total - self.remaining

    def is_exhausted(self) -> bool:
        return self.remaining <= 0

    def draw(self, amount: float) -> float:
        """
        Take up to `amount` bandwidth from the pool.

        Args:
            amount: Bandwidth requested

        Returns:
            Bandwidth actually granted (the whole amount if it fits,
            otherwise everything that was left)

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Cannot draw negative bandwidth ({amount})")

        if amount <= self.remaining:
            self.remaining -= amount
            return amount

        granted = self.remaining
        self.remaining = 0.0
        return granted
