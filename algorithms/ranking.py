"""
Ranking for the Bandwidth Allocator.

Computes priority/demand ratios and orders demands for the greedy pass.
"""

from typing import List, Sequence

from models.demand import Demand
from models.ratio import Ratio


def compute_ratio(demand: Demand) -> Ratio:
    """
    Compute the priority-per-bandwidth ratio of a demand.

    Cases:
    - demand > 0: FINITE(priority / demand)
    - demand == 0, priority > 0: UNBOUNDED (served first, consumes nothing)
    - demand == 0, priority == 0: FINITE(0)

    Args:
        demand: Demand entry (already validated non-negative)

    Returns:
        Ratio for this demand
    """
    if demand.demand > 0:
        return Ratio.finite(demand.priority / demand.demand)
    if demand.priority > 0:
        return Ratio.unbounded()
    return Ratio.finite(0.0)


def assign_ratios(demands: Sequence[Demand]) -> None:
    """Compute each demand's ratio once, leaving already-computed ratios alone."""
    for demand in demands:
        if demand.ratio is None:
            demand.ratio = compute_ratio(demand)


def rank(demands: Sequence[Demand]) -> List[Demand]:
    """
    Order demands by ratio, highest first.

    UNBOUNDED ratios come before every finite ratio. The sort is stable:
    demands with equal ratios keep their original relative order, so
    ranking an already-ranked list returns the same order.

    Args:
        demands: Demands in input order

    Returns:
        New list holding the same Demand objects in rank order
    """
    assign_ratios(demands)
    return sorted(demands, key=lambda d: d.ratio.sort_key())
