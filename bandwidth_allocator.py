#!/usr/bin/env python3
"""
Bandwidth Allocator
Main entry point for the allocation tool.

Distributes a limited amount of bandwidth among competing users/tasks with
the fractional knapsack strategy: rank by priority per unit of demand,
serve the best ratios first, split the demand that exhausts the pool.
"""

import argparse
import math
import sys
from typing import List, Optional

from models.demand import Demand
from utils.scenario_loader import load_scenario, get_scenario_description, ScenarioLoadError
from utils.prompt import read_demands_interactive
from utils.logger import AllocatorLogger
from algorithms.ranking import rank
from algorithms.greedy import allocate, AllocationResult
from analysis.metrics import AllocationMetrics, assert_allocation_invariants, format_metrics_report
from analysis.report import format_allocation_report


def run_allocation(
    capacity: float,
    demands: List[Demand],
    logger: AllocatorLogger
) -> AllocationResult:
    """
    Rank demands, allocate the bandwidth and report the outcome.

    Step Ordering:
    1. Compute ratios and rank (stable, highest ratio first)
    2. Greedy allocation pass over the ranked demands
    3. Verify conservation and bounds
    4. Print the allocation table and summary

    Args:
        capacity: Total available bandwidth
        demands: Demands in input order
        logger: Logger instance

    Returns:
        AllocationResult of the pass
    """
    ranked = rank(demands)

    if logger.verbose:
        _display_ranking(ranked, logger)

    logger.section("Processing Allocation (Highest Priority/Demand first)")
    result = allocate(ranked, capacity)
    if len(result.events):
        logger.log(result.events.display(show_credit=logger.verbose))

    # SANITY CHECK: Verify bandwidth conservation after the pass
    assert_allocation_invariants(result, "after allocation pass")

    logger.log(format_allocation_report(result))

    if logger.verbose:
        logger.log(format_metrics_report(AllocationMetrics.from_result(result)), "debug")

    return result


def _display_ranking(ranked: List[Demand], logger: AllocatorLogger) -> None:
    """Display ranked demands with their ratios."""
    logger.log("Ranked Demands:", "debug")
    for position, d in enumerate(ranked, start=1):
        logger.log(
            f"  {position}. {d.name}: demand={d.demand:.2f}, priority={d.priority}, ratio={d.ratio}",
            "debug"
        )


def _non_negative_float(text: str) -> float:
    """argparse type for a finite bandwidth value >= 0."""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}")
    if not math.isfinite(value) or value < 0:
        raise argparse.ArgumentTypeError(f"capacity must be a non-negative number, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description='Bandwidth Allocation (Fractional Knapsack)'
    )
    parser.add_argument(
        '--scenario',
        type=str,
        default=None,
        help='Path to scenario JSON file (default: read values interactively)'
    )
    parser.add_argument(
        '--capacity',
        type=_non_negative_float,
        default=None,
        help='Total available bandwidth (overrides the scenario value)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write log output to this file'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the allocator."""
    args = build_parser().parse_args(argv)
    with AllocatorLogger(verbose=args.verbose, log_file=args.log_file) as logger:
        try:
            if args.scenario:
                capacity, demands = load_scenario(args.scenario)
            else:
                capacity, demands = read_demands_interactive()
        except ScenarioLoadError as e:
            logger.log(f"Failed to load scenario: {e}", "error")
            return 1
        except EOFError:
            logger.log("Input ended before all values were read", "error")
            return 1
        except MemoryError:
            logger.log("Error: Failed to allocate memory for tasks.", "error")
            return 1

        if args.scenario:
            logger.log(f"Scenario: {args.scenario}")
            description = get_scenario_description(args.scenario)
            if description:
                logger.log(f"  {description}")
        elif not demands:
            logger.log("No tasks to allocate. Exiting.")
            return 0

        if args.capacity is not None:
            capacity = args.capacity

        run_allocation(capacity, demands, logger)
        return 0


if __name__ == '__main__':
    sys.exit(main())
