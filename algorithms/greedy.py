"""
Greedy Allocation (Fractional Knapsack) for the Bandwidth Allocator.

Walks ranked demands and hands out bandwidth until the pool runs dry.
"""

from dataclasses import dataclass, field, replace
from typing import List, Sequence

from models.demand import Demand
from models.pool import BandwidthPool
from algorithms.ranking import compute_ratio
from analysis.events import EventLog, AllocationEvent, EventType


@dataclass
class AllocationResult:
    """
    Outcome of one allocation pass.

    Attributes:
        demands: Demands in rank order with `allocated` filled in
        initial_capacity: Pool size at the start of the pass
        remaining: Bandwidth left over after the pass
        value_achieved: Sum of (possibly fractional) credited priorities
        events: Trace of the decisions taken
    """
    demands: List[Demand]
    initial_capacity: float
    remaining: float
    value_achieved: float
    events: EventLog = field(default_factory=EventLog)

    @property
    def capacity_used(self) -> float:
        return self.initial_capacity - self.remaining

    @property
    def total_allocated(self) -> float:
        return sum(d.allocated for d in self.demands)


def allocate(ranked: Sequence[Demand], total_capacity: float) -> AllocationResult:
    """
    Allocate bandwidth to ranked demands using the fractional knapsack rule.

    Algorithm:
    1. Pool = total_capacity, value = 0
    2. For each demand in rank order while the pool is not empty:
       - demand <= remaining: grant it fully, credit full priority
       - otherwise: grant what is left, credit priority * (granted / demand)
    3. Demands not reached keep allocated = 0

    Zero-demand demands fit even into an empty pool, so they are granted
    (and credited) regardless of capacity. They rank first whenever they
    carry priority, which keeps them ahead of the exhaustion check.

    The inputs are not mutated; the result holds updated copies.

    Args:
        ranked: Demands in rank order (see algorithms.ranking.rank)
        total_capacity: Bandwidth available, >= 0

    Returns:
        AllocationResult for this pass

    Raises:
        ValueError: If total_capacity is negative or not finite
    """
    pool = BandwidthPool(total_capacity)
    events = EventLog()
    value_achieved = 0.0
    allocated: List[Demand] = []

    stopped = False
    for position, demand in enumerate(ranked):
        ratio = demand.ratio if demand.ratio is not None else compute_ratio(demand)

        if not stopped and pool.is_exhausted() and demand.demand > 0:
            events.add(AllocationEvent(
                position=position,
                event_type=EventType.EXHAUSTED,
                remaining_before=pool.remaining
            ))
            stopped = True

        if stopped:
            allocated.append(replace(demand, ratio=ratio, allocated=0.0))
            continue

        remaining_before = pool.remaining
        granted = pool.draw(demand.demand)

        if granted == demand.demand:
            credited = float(demand.priority)
            event_type = EventType.FULL
        else:
            credited = (granted / demand.demand) * demand.priority
            event_type = EventType.PARTIAL

        value_achieved += credited
        allocated.append(replace(demand, ratio=ratio, allocated=granted))
        events.add(AllocationEvent(
            position=position,
            event_type=event_type,
            name=demand.name,
            ratio=str(ratio),
            remaining_before=remaining_before,
            granted=granted,
            credited=credited
        ))

    return AllocationResult(
        demands=allocated,
        initial_capacity=pool.total,
        remaining=pool.remaining,
        value_achieved=value_achieved,
        events=events
    )
