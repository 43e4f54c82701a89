"""
Interactive input for the Bandwidth Allocator.

Asks for the total bandwidth, the number of competing tasks and each
task's name, demand and priority. Invalid answers are re-prompted.
"""

import math
from typing import Callable, List, Optional, Tuple

from models.demand import Demand


def ask_float(prompt: str, input_func: Callable[[str], str] = input,
              output: Callable[[str], None] = print) -> float:
    """Ask until a finite, non-negative number is entered."""
    while True:
        raw = input_func(prompt).strip()
        try:
            value = float(raw)
        except ValueError:
            output(f"  Invalid number: '{raw}'. Please try again.")
            continue
        if not math.isfinite(value) or value < 0:
            output(f"  Value must be a non-negative number (got {raw}). Please try again.")
            continue
        return value


def ask_int(prompt: str, input_func: Callable[[str], str] = input,
            output: Callable[[str], None] = print, minimum: Optional[int] = None) -> int:
    """Ask until an integer (at least `minimum`, if given) is entered."""
    while True:
        raw = input_func(prompt).strip()
        try:
            value = int(raw)
        except ValueError:
            output(f"  Invalid integer: '{raw}'. Please try again.")
            continue
        if minimum is not None and value < minimum:
            output(f"  Value must be at least {minimum} (got {value}). Please try again.")
            continue
        return value


def read_demands_interactive(
    input_func: Callable[[str], str] = input,
    output: Callable[[str], None] = print
) -> Tuple[float, List[Demand]]:
    """
    Read capacity and demands from the user.

    A task count <= 0 returns an empty demand list.

    Args:
        input_func: Function used to read one answer (defaults to input)
        output: Function used to print headers and errors (defaults to print)

    Returns:
        Tuple of (capacity, demands in input order)

    Raises:
        EOFError: If input ends before all answers were read
    """
    output("--- Bandwidth Allocation (Fractional Knapsack) ---")
    capacity = ask_float("Enter the Total Available Bandwidth (e.g., 1000 Mbps): ", input_func, output)
    count = ask_int("Enter the number of competing users/tasks: ", input_func, output)

    if count <= 0:
        return capacity, []

    demands = []
    output("\n--- Enter Task Details ---")
    for i in range(count):
        output(f"Task #{i + 1}:")
        name = input_func("  Name: ").strip()
        demand = ask_float("  Demand (Bandwidth requested): ", input_func, output)
        priority = ask_int("  Priority (e.g., 1-100): ", input_func, output, minimum=0)
        demands.append(Demand(name=name, demand=demand, priority=priority))

    return capacity, demands
