"""
Fuel Mix Calculator
===================
Ethanol/gasoline blending solver: how much of each fuel to add to reach a
target ethanol percentage, either from an empty tank or on top of what is
already in it.

Usage:
    from fuel_mix import Scenario, SolverConfig, solve, run_scenarios
"""

from .models import (
    GasolineGrade,
    EthanolGrade,
    GASOLINE_GRADES,
    ETHANOL_GRADES,
    TankState,
    SolverConfig,
    Scenario,
    SolveResult,
)
from .units import to_liters, from_liters, parse_number, round_display, display_values
from .solver import fill_from_empty, add_fuel, add_cheapest_fuel, solve
from .reporter import full_report


def run_scenarios(scenarios: list, cfg: SolverConfig = None,
                  verbose: bool = True) -> dict:
    """
    Solve a batch of scenarios.

    Args:
        scenarios: list[Scenario]
        cfg: SolverConfig — tunable parameters (None uses all defaults)
        verbose: whether to print the full report

    Returns:
        dict with keys:
            results: list[SolveResult], same order as `scenarios`
            valid_count: number of valid results
    """
    if cfg is None:
        cfg = SolverConfig()

    _validate_scenarios(scenarios)

    results = [solve(s, cfg) for s in scenarios]

    if verbose:
        full_report(scenarios, results, cfg)

    return {
        "results": results,
        "valid_count": sum(1 for r in results if r.valid),
    }


def _validate_scenarios(scenarios: list):
    """Structural validation; numeric problems are reported per result"""
    if not scenarios:
        raise ValueError("At least 1 scenario is required")

    labels = set()
    for s in scenarios:
        if not isinstance(s, Scenario):
            raise TypeError(f"Expected Scenario, got {type(s)}")
        if not s.label:
            continue
        if s.label in labels:
            raise ValueError(f"Duplicate scenario label: {s.label}")
        labels.add(s.label)
