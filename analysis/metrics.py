"""
Metrics and invariant checks for the Bandwidth Allocator.

Evaluates allocation vectors and summarizes a finished allocation pass.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from models.demand import Demand

# Slack for float comparisons on bandwidth sums
TOLERANCE = 1e-9


def demand_vector(demands: Sequence[Demand]) -> np.ndarray:
    """Demanded bandwidth per entry [N]."""
    return np.array([d.demand for d in demands], dtype=float)


def priority_vector(demands: Sequence[Demand]) -> np.ndarray:
    """Priority per entry [N]."""
    return np.array([d.priority for d in demands], dtype=float)


def allocated_vector(demands: Sequence[Demand]) -> np.ndarray:
    """Allocated bandwidth per entry [N]."""
    return np.array([d.allocated for d in demands], dtype=float)


def allocation_value(demands: Sequence[Demand], allocated: Sequence[float]) -> float:
    """
    Priority value of an arbitrary allocation.

    Each entry is credited priority * (allocated / demand); zero-demand
    entries are credited their full priority.

    Args:
        demands: Demand entries
        allocated: Bandwidth given to each entry, same order as demands

    Returns:
        Total credited value
    """
    demand = demand_vector(demands)
    priority = priority_vector(demands)
    granted = np.asarray(allocated, dtype=float)

    fraction = np.ones_like(demand)
    positive = demand > 0
    fraction[positive] = granted[positive] / demand[positive]
    return float(np.sum(fraction * priority))


def is_feasible(demands: Sequence[Demand], allocated: Sequence[float], capacity: float) -> bool:
    """
    Check that an allocation respects per-entry caps and the total capacity.

    Args:
        demands: Demand entries
        allocated: Bandwidth given to each entry, same order as demands
        capacity: Total bandwidth available

    Returns:
        True if 0 <= allocated[i] <= demand[i] and sum(allocated) <= capacity
    """
    demand = demand_vector(demands)
    granted = np.asarray(allocated, dtype=float)

    if granted.shape != demand.shape:
        return False
    if np.any(granted < -TOLERANCE) or np.any(granted > demand + TOLERANCE):
        return False
    return bool(granted.sum() <= capacity + TOLERANCE)


def assert_allocation_invariants(result, context: str = "") -> None:
    """
    Verify conservation and bounds of a finished allocation pass.

    Checks:
    - 0 <= allocated[i] <= demand[i] for every entry
    - sum(allocated) + remaining == initial capacity
    - sum(allocated) == capacity whenever sum(demand) >= capacity

    Args:
        result: AllocationResult to check
        context: Description of when this check is being run (for error messages)

    Raises:
        AssertionError: If an invariant is violated
    """
    demand = demand_vector(result.demands)
    granted = allocated_vector(result.demands)

    for i, d in enumerate(result.demands):
        assert 0 <= granted[i] <= demand[i], (
            f"Allocation bounds violated for '{d.name}' {context}\n"
            f"  Allocated: {granted[i]}, Demand: {demand[i]}"
        )

    total_allocated = granted.sum()
    assert result.remaining >= 0, (
        f"Negative remaining bandwidth {context}\n"
        f"  Remaining: {result.remaining}"
    )
    assert np.isclose(
        total_allocated + result.remaining, result.initial_capacity, rtol=TOLERANCE, atol=TOLERANCE
    ), (
        f"Bandwidth conservation violated {context}\n"
        f"  Allocated: {total_allocated}, Remaining: {result.remaining}, "
        f"Capacity: {result.initial_capacity}"
    )

    if demand.sum() >= result.initial_capacity:
        assert np.isclose(
            total_allocated, result.initial_capacity, rtol=TOLERANCE, atol=TOLERANCE
        ), (
            f"Capacity left unused although demand exceeds it {context}\n"
            f"  Allocated: {total_allocated}, Capacity: {result.initial_capacity}, "
            f"Total demand: {demand.sum()}"
        )


@dataclass
class AllocationMetrics:
    """
    Summary figures for one allocation pass.

    Attributes:
        total_demands: Number of demand entries
        total_demand: Sum of demanded bandwidth
        capacity: Initial bandwidth capacity
        capacity_used: Bandwidth handed out
        value_achieved: Priority value credited
        max_value: Sum of all priorities (value if every demand were met)
        fully_served: Entries granted their whole demand
        partially_served: Entries granted part of their demand
        unserved: Entries granted nothing although they asked for bandwidth
    """
    total_demands: int = 0
    total_demand: float = 0.0
    capacity: float = 0.0
    capacity_used: float = 0.0
    value_achieved: float = 0.0
    max_value: float = 0.0
    fully_served: int = 0
    partially_served: int = 0
    unserved: int = 0

    @classmethod
    def from_result(cls, result) -> "AllocationMetrics":
        """Build metrics from an AllocationResult."""
        demand = demand_vector(result.demands)
        granted = allocated_vector(result.demands)
        priority = priority_vector(result.demands)

        full = granted == demand
        none = (granted == 0) & (demand > 0)

        return cls(
            total_demands=len(result.demands),
            total_demand=float(demand.sum()),
            capacity=result.initial_capacity,
            capacity_used=result.capacity_used,
            value_achieved=result.value_achieved,
            max_value=float(priority.sum()),
            fully_served=int(np.count_nonzero(full)),
            partially_served=int(np.count_nonzero(~full & ~none)),
            unserved=int(np.count_nonzero(none))
        )

    def get_utilization(self) -> float:
        """Capacity used as a percentage of capacity (0 when capacity is 0)."""
        if self.capacity <= 0:
            return 0.0
        return (self.capacity_used / self.capacity) * 100

    def get_value_fraction(self) -> float:
        """Value achieved as a fraction of the maximum attainable value."""
        if self.max_value == 0:
            return 0.0
        return self.value_achieved / self.max_value


def format_metrics_report(metrics: AllocationMetrics) -> str:
    """
    Format metrics for display at end of an allocation run.

    Args:
        metrics: AllocationMetrics for the run

    Returns:
        Formatted metrics report string
    """
    lines = []
    lines.append("\n" + "="*60)
    lines.append("ALLOCATION METRICS")
    lines.append("="*60)
    lines.append(f"Demands: {metrics.total_demands}")
    lines.append(f"Total Demand: {metrics.total_demand:.2f}")
    lines.append(f"Capacity: {metrics.capacity:.2f}")
    lines.append(f"Utilization: {metrics.get_utilization():.2f}%")
    lines.append(
        f"Value: {metrics.value_achieved:.2f} / {metrics.max_value:.2f} "
        f"({metrics.get_value_fraction():.2%})"
    )
    lines.append(
        f"Served: full={metrics.fully_served}, partial={metrics.partially_served}, "
        f"none={metrics.unserved}"
    )
    lines.append("="*60)
    return "\n".join(lines)
