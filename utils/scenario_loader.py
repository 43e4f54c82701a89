"""
Scenario Loader for the Bandwidth Allocator.

Loads and validates JSON scenario files describing the total capacity
and the competing demands.
"""

import json
import math
from numbers import Integral, Real
from typing import Dict, List, Any, Tuple

from models.demand import Demand


class ScenarioLoadError(Exception):
    """Exception raised when scenario file cannot be loaded or is invalid."""
    pass


def load_scenario(file_path: str) -> Tuple[float, List[Demand]]:
    """
    Load scenario from JSON file.

    Expected format:
        {"description": "...", "capacity": 100,
         "demands": [{"name": "A", "demand": 60, "priority": 60}, ...]}

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Tuple of (capacity, demands in file order)

    Raises:
        ScenarioLoadError: If file cannot be loaded or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ScenarioLoadError(f"Scenario file not found: {file_path}")
    except json.JSONDecodeError as e:
        raise ScenarioLoadError(f"Invalid JSON in scenario file: {e}")

    return parse_scenario(data)


def parse_scenario(data: Any) -> Tuple[float, List[Demand]]:
    """
    Validate already-decoded scenario data.

    Args:
        data: Decoded JSON object

    Returns:
        Tuple of (capacity, demands in input order)

    Raises:
        ScenarioLoadError: If the data is invalid
    """
    if not isinstance(data, dict):
        raise ScenarioLoadError("Scenario must be a JSON object")

    # Validate required fields
    if 'capacity' not in data:
        raise ScenarioLoadError("Scenario missing 'capacity' field")
    if 'demands' not in data:
        raise ScenarioLoadError("Scenario missing 'demands' field")

    capacity = _load_capacity(data['capacity'])

    if not isinstance(data['demands'], list):
        raise ScenarioLoadError("Scenario 'demands' must be a list")

    demands = [_load_demand(index, entry) for index, entry in enumerate(data['demands'])]
    return capacity, demands


def _load_capacity(value: Any) -> float:
    """Validate the total capacity."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ScenarioLoadError(f"Scenario 'capacity' must be a number, got {value!r}")
    try:
        capacity = float(value)
    except OverflowError:
        raise ScenarioLoadError(f"Scenario 'capacity' is too large ({value})")
    if not math.isfinite(capacity):
        raise ScenarioLoadError(f"Scenario 'capacity' must be a finite number, got {value!r}")
    if capacity < 0:
        raise ScenarioLoadError(f"Scenario 'capacity' cannot be negative ({value})")
    return capacity


def _load_demand(index: int, entry: Dict) -> Demand:
    """
    Load a single demand from scenario data.

    Args:
        index: Position of the entry in the 'demands' list
        entry: Demand dictionary from scenario

    Returns:
        Demand object
    """
    if not isinstance(entry, dict):
        raise ScenarioLoadError(f"Demand #{index + 1}: must be an object")

    # Validate required fields
    required_fields = ['name', 'demand', 'priority']
    for field in required_fields:
        if field not in entry:
            raise ScenarioLoadError(f"Demand #{index + 1} missing required field: {field}")

    name = entry['name']
    if not isinstance(name, str):
        raise ScenarioLoadError(f"Demand #{index + 1}: 'name' must be a string")

    if isinstance(entry['demand'], bool) or not isinstance(entry['demand'], Real):
        raise ScenarioLoadError(f"Demand '{name}': 'demand' must be a number")
    if isinstance(entry['priority'], bool) or not isinstance(entry['priority'], Integral):
        raise ScenarioLoadError(f"Demand '{name}': 'priority' must be an integer")

    try:
        return Demand(name=name, demand=entry['demand'], priority=entry['priority'])
    except ValueError as e:
        raise ScenarioLoadError(str(e))


def get_scenario_description(file_path: str) -> str:
    """
    Get description from scenario file without full loading.

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Description string, or empty string if not present
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return ''
    if not isinstance(data, dict):
        return ''
    return data.get('description', '')
