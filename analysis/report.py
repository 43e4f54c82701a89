"""
Report formatting for the Bandwidth Allocator.

Renders the final allocation table and summary line.
"""

from typing import List

from models.demand import Demand

TABLE_RULE = "-" * 96


def share_of_capacity(demand: Demand, initial_capacity: float) -> float:
    """Allocated bandwidth as a percentage of the initial capacity (0 when capacity is 0)."""
    if initial_capacity > 0:
        return (demand.allocated / initial_capacity) * 100.0
    return 0.0


def format_summary(result) -> str:
    """Summary line: capacity, capacity used and total priority value."""
    return (
        f"Total Bandwidth: {result.initial_capacity:.2f} | "
        f"Bandwidth Used: {result.capacity_used:.2f} | "
        f"Total Priority Value: {result.value_achieved:.2f}"
    )


def format_table_rows(result) -> List[str]:
    """One row per demand, in rank order."""
    rows = []
    for demand in result.demands:
        rows.append(
            f"| {demand.name:<20} | {demand.priority:<10d} | {demand.demand:<15.2f} | "
            f"{demand.allocated:<15.2f} | "
            f"{share_of_capacity(demand, result.initial_capacity):<20.2f}% |"
        )
    return rows


def format_allocation_report(result) -> str:
    """
    Format the final bandwidth allocation table.

    Rows are printed in allocation order (highest ratio first).

    Args:
        result: AllocationResult of the pass

    Returns:
        Formatted report string
    """
    lines = []
    lines.append("\n--- Final Bandwidth Allocation Table ---\n")
    lines.append(format_summary(result))
    lines.append(TABLE_RULE)
    lines.append(
        f"| {'Task Name':<20} | {'Priority':<10} | {'Demand':<15} | "
        f"{'Allocated':<15} | {'Share of Total (%)':<20} |"
    )
    lines.append(TABLE_RULE)
    lines.extend(format_table_rows(result))
    lines.append(TABLE_RULE)
    return "\n".join(lines)
