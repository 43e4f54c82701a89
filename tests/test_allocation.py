"""
Allocation Tests - Ranking and Greedy Fractional Knapsack

Tests ratio computation, stable ranking, the allocation pass and the
conservation / bounds / optimality properties of its result.
"""

import sys
from pathlib import Path

import numpy as np

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.demand import Demand
from models.ratio import Ratio
from algorithms.ranking import compute_ratio, rank
from algorithms.greedy import allocate
from analysis.events import EventType
from analysis.metrics import (
    AllocationMetrics,
    allocation_value,
    assert_allocation_invariants,
    is_feasible,
)


def _three_demands():
    return [
        Demand(name="A", demand=60, priority=60),
        Demand(name="B", demand=50, priority=100),
        Demand(name="C", demand=30, priority=30),
    ]


def test_compute_ratio():
    """Finite, unbounded and zero ratios."""
    assert compute_ratio(Demand(name="A", demand=50, priority=100)) == Ratio.finite(2.0)
    assert compute_ratio(Demand(name="B", demand=0, priority=5)) == Ratio.unbounded()
    assert compute_ratio(Demand(name="C", demand=0, priority=0)) == Ratio.finite(0.0)
    assert compute_ratio(Demand(name="D", demand=10, priority=0)) == Ratio.finite(0.0)


def test_rank_order_and_stable_ties():
    """B ranks first; A and C tie at 1.0 and keep their input order."""
    print("\n" + "="*60)
    print("TEST: Ranking")
    print("="*60)

    demands = _three_demands()
    ranked = rank(demands)
    names = [d.name for d in ranked]
    print(f"  Rank order: {names}")
    assert names == ["B", "A", "C"]

    # Permutation of the input, same objects, input list untouched
    assert sorted(id(d) for d in ranked) == sorted(id(d) for d in demands)
    assert [d.name for d in demands] == ["A", "B", "C"]

    # Re-ranking a ranked list is a no-op
    assert [d.name for d in rank(ranked)] == names
    print("  ✓ Stable, idempotent ranking")


def test_rank_zero_demand_first():
    """A zero-demand entry with priority outranks any finite ratio."""
    demands = [
        Demand(name="bulk", demand=1e-12, priority=1000),
        Demand(name="idle", demand=0, priority=0),
        Demand(name="ping", demand=0, priority=1),
    ]
    names = [d.name for d in rank(demands)]
    assert names == ["ping", "bulk", "idle"]


def test_allocate_example():
    """Capacity 100: B fully, A partially (50/60), C nothing; value 150."""
    print("\n" + "="*60)
    print("TEST: Greedy Allocation Example")
    print("="*60)

    demands = _three_demands()
    result = allocate(rank(demands), 100)

    allocated = {d.name: d.allocated for d in result.demands}
    print(f"  Allocated: {allocated}")
    print(f"  Value: {result.value_achieved}")

    assert allocated == {"B": 50.0, "A": 50.0, "C": 0.0}
    assert abs(result.value_achieved - 150.0) < 1e-9
    assert result.remaining == 0.0
    assert result.capacity_used == 100.0
    assert result.total_allocated == 100.0

    types = [e.event_type for e in result.events.events]
    assert types == [EventType.FULL, EventType.PARTIAL, EventType.EXHAUSTED]
    assert result.events.events[0].remaining_before == 100.0
    assert result.events.events[1].remaining_before == 50.0

    # Inputs are not mutated by the pass
    assert all(d.allocated == 0.0 for d in demands)

    assert_allocation_invariants(result, "in example test")

    trace = result.events.display().splitlines()
    assert trace == [
        "Considering Task 'B' (Ratio: 2.00). Remaining Bandwidth: 100.00",
        "  -> Allocated full demand (50.00)",
        "Considering Task 'A' (Ratio: 1.00). Remaining Bandwidth: 50.00",
        "  -> Allocated remaining bandwidth (50.00)",
        "No more bandwidth to allocate. Stopping.",
    ]
    assert result.events.stopped_early
    assert "     credited value 50.00" in result.events.display(show_credit=True)
    print("  ✓ Example allocation correct")


def test_allocate_all_demand_fits():
    """When total demand is below capacity everyone is served in full."""
    demands = [
        Demand(name="Email", demand=10, priority=40),
        Demand(name="Video Calls", demand=80, priority=85),
        Demand(name="File Sync", demand=60, priority=30),
    ]
    result = allocate(rank(demands), 200)

    assert all(d.is_fully_served() for d in result.demands)
    assert result.remaining == 50.0
    assert result.value_achieved == 155.0
    assert len(result.events.get_events_by_type(EventType.EXHAUSTED)) == 0
    assert not result.events.stopped_early
    assert_allocation_invariants(result)


def test_allocate_zero_capacity():
    """No bandwidth: nothing is allocated, only zero-demand priority is credited."""
    demands = [
        Demand(name="video", demand=40, priority=80),
        Demand(name="heartbeat", demand=0, priority=5),
    ]
    result = allocate(rank(demands), 0)

    assert [d.name for d in result.demands] == ["heartbeat", "video"]
    assert all(d.allocated == 0.0 for d in result.demands)
    assert result.value_achieved == 5.0

    types = [e.event_type for e in result.events.events]
    assert types == [EventType.FULL, EventType.EXHAUSTED]

    # Without zero-demand entries the value is zero
    result = allocate(rank([Demand(name="video", demand=40, priority=80)]), 0)
    assert result.value_achieved == 0.0
    assert_allocation_invariants(result)


def test_allocate_zero_demand_priority():
    """Zero-demand entries get nothing, credit their full priority and keep capacity intact."""
    demands = [
        Demand(name="bulk", demand=100, priority=10),
        Demand(name="ping", demand=0, priority=25),
    ]
    result = allocate(rank(demands), 100)

    ping = result.demands[0]
    assert ping.name == "ping"
    assert ping.allocated == 0.0
    assert result.demands[1].allocated == 100.0
    assert result.value_achieved == 35.0


def test_allocate_empty():
    """No demands: empty result, value 0."""
    result = allocate(rank([]), 250)
    assert result.demands == []
    assert result.value_achieved == 0.0
    assert result.remaining == 250.0
    assert len(result.events) == 0
    assert_allocation_invariants(result)


def test_allocate_rejects_negative_capacity():
    try:
        allocate(rank(_three_demands()), -5)
    except ValueError:
        pass
    else:
        assert False, "Negative capacity should have been rejected"


def test_conservation_and_bounds_random():
    """Conservation and bounds hold on randomized inputs."""
    rng = np.random.default_rng(323)

    for _ in range(200):
        n = int(rng.integers(1, 12))
        demands = [
            Demand(
                name=f"T{i}",
                demand=float(rng.choice([0.0, rng.uniform(0, 100)])),
                priority=int(rng.integers(0, 100))
            )
            for i in range(n)
        ]
        capacity = float(rng.uniform(0, 400))
        result = allocate(rank(demands), capacity)

        assert_allocation_invariants(result, "on random input")
        total_demand = sum(d.demand for d in demands)
        if total_demand >= capacity:
            assert abs(result.total_allocated - capacity) < 1e-6
        else:
            assert abs(result.total_allocated - total_demand) < 1e-6


def test_greedy_is_optimal():
    """No feasible fractional allocation beats the greedy value."""
    print("\n" + "="*60)
    print("TEST: Fractional Knapsack Optimality")
    print("="*60)

    rng = np.random.default_rng(7)

    for trial in range(50):
        n = int(rng.integers(2, 8))
        demands = [
            Demand(name=f"T{i}", demand=float(rng.uniform(1, 50)), priority=int(rng.integers(0, 100)))
            for i in range(n)
        ]
        capacity = float(rng.uniform(0, 150))
        result = allocate(rank(demands), capacity)

        # Greedy result evaluated in its own (ranked) order
        greedy_value = allocation_value(result.demands, [d.allocated for d in result.demands])
        assert abs(greedy_value - result.value_achieved) < 1e-6

        caps = np.array([d.demand for d in demands])
        for _ in range(40):
            candidate = rng.uniform(0, 1, n) * caps
            if candidate.sum() > capacity:
                candidate *= capacity / candidate.sum()
            assert is_feasible(demands, candidate, capacity)
            assert allocation_value(demands, candidate) <= result.value_achieved + 1e-6

    print("  ✓ Greedy value never beaten")


def test_is_feasible():
    demands = _three_demands()
    assert is_feasible(demands, [60, 40, 0], 100)
    assert not is_feasible(demands, [61, 0, 0], 100)
    assert not is_feasible(demands, [-1, 0, 0], 100)
    assert not is_feasible(demands, [60, 50, 0], 100)
    assert not is_feasible(demands, [60, 40], 100)


def test_metrics_and_invariant_violation():
    """Metrics summarize the pass; tampered results fail the invariant check."""
    result = allocate(rank(_three_demands()), 100)
    metrics = AllocationMetrics.from_result(result)

    assert metrics.total_demands == 3
    assert metrics.total_demand == 140.0
    assert metrics.get_utilization() == 100.0
    assert metrics.max_value == 190.0
    assert (metrics.fully_served, metrics.partially_served, metrics.unserved) == (1, 1, 1)
    assert abs(metrics.get_value_fraction() - 150.0 / 190.0) < 1e-9

    result.remaining = 10.0
    try:
        assert_allocation_invariants(result, "after tampering")
    except AssertionError as e:
        print(f"  ✓ Violation detected: {str(e).splitlines()[0]}")
    else:
        assert False, "Conservation violation should have been detected"


def main():
    """Run all allocation tests."""
    tests = [
        test_compute_ratio,
        test_rank_order_and_stable_ties,
        test_rank_zero_demand_first,
        test_allocate_example,
        test_allocate_all_demand_fits,
        test_allocate_zero_capacity,
        test_allocate_zero_demand_priority,
        test_allocate_empty,
        test_allocate_rejects_negative_capacity,
        test_conservation_and_bounds_random,
        test_greedy_is_optimal,
        test_is_feasible,
        test_metrics_and_invariant_violation,
    ]
    try:
        for test in tests:
            test()
        print("\n✅ Allocation Tests PASSED")
        return 0
    except AssertionError as e:
        print(f"\n❌ TEST FAILED: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
