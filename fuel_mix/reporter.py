"""
Fuel Mix Calculator — Report Output
====================================
Format scenarios, additions, final mixture and infeasibility reasons.
All rounding happens here, never in the solver.
"""

from .models import SolverConfig, GASOLINE_GRADES, ETHANOL_GRADES
from .units import display_values, round_display


def _fmt_volume(val, unit: str) -> str:
    if val == "∞" or val == float("inf"):
        return "∞"
    return f"{val:,.2f} {unit}"


def _fmt_pct(val: float, decimals: int = 1) -> str:
    return f"{round_display(val, decimals):.{decimals}f}%"


def _fmt_bar(fraction: float, width: int = 30) -> str:
    """Ethanol share as a bar: █ ethanol, ░ gasoline"""
    fraction = max(0.0, min(1.0, fraction))
    filled = int(round(fraction * width))
    return "█" * filled + "░" * (width - filled)


def print_separator(char: str = "═", width: int = 72):
    print(char * width)


def print_header(title: str, width: int = 72):
    print()
    print_separator()
    print(f"  {title}")
    print_separator()


def report_config(cfg: SolverConfig):
    """Print solver configuration and the selected grades"""
    print_header("Configuration")

    gas = GASOLINE_GRADES.get(cfg.gasoline_grade)
    eth = ETHANOL_GRADES.get(cfg.ethanol_grade)
    print(f"  Unit              = {cfg.unit}  (1 gal = {cfg.liters_per_gallon} L)")
    if gas:
        print(f"  Gasoline grade    = {gas.grade_id}  {gas.name}")
    if eth:
        print(f"  Ethanol grade     = {eth.grade_id}  {eth.name}")
    print(f"  Tolerance         = {cfg.eps:.0e}  (final check {cfg.final_check_eps:.0e})")


def report_scenarios(scenarios: list, cfg: SolverConfig):
    """Print scenario inputs as entered"""
    print_header("Scenarios (User Input)")

    headers = f"{'#':<3} {'Label':<16} {'Mode':<5} {'Volume':>10} {'Unit':<4} {'Now %':>6} {'Target %':>8}  Fuel"
    print(f"  {headers}")
    print(f"  {'─' * len(headers)}")

    for i, s in enumerate(scenarios, 1):
        current = s.current_pct if s.mode != "fill" else "—"
        fuel = s.fuel if s.mode == "add" else ("auto" if s.mode == "auto" else "—")
        print(f"  {i:<3} {s.label or '-':<16.16} {s.mode:<5} {str(s.volume):>10}"
              f" {s.unit or cfg.unit:<4} {str(current):>6} {str(s.target_pct):>8}  {fuel}")


def report_result(index: int, scenario, result, cfg: SolverConfig):
    """Print one solved scenario"""
    d = display_values(result, scenario.unit or cfg.unit, cfg)
    unit = d["unit"]
    title = scenario.label or f"Scenario {index}"
    status = "✓" if result.valid else "✗"

    print(f"\n  {status} {title}  [{result.mode}]")

    if result.valid:
        for src, vol in d["additions"].items():
            print(f"    Add {src:<9} {_fmt_volume(vol, unit):>14}")
        if result.source and result.mode == "auto":
            print(f"    Chosen fuel: {result.source} (smaller addition)")
        print(f"    Final:       {_fmt_volume(d['final_volume'], unit):>14}"
              f" @ {_fmt_pct(result.final_ethanol_pct, cfg.pct_decimals)} ethanol")
        print(f"    Mix: {_fmt_bar(result.final_state.ethanol_fraction)}")
    else:
        if result.infinite:
            src = result.source or "fuel"
            print(f"    Add {src:<9} {'∞':>14}")
        print(f"    ⚠ {result.reason}")
    if result.warning:
        print(f"    → {result.warning}")


def report_summary(results: list):
    """Print valid / invalid counts"""
    print_header("Summary")
    valid = sum(1 for r in results if r.valid)
    infinite = sum(1 for r in results if r.infinite)
    print(f"  Scenarios: {len(results)} | valid: {valid}"
          f" | invalid: {len(results) - valid} (infinite: {infinite})")


def full_report(scenarios: list, results: list, cfg: SolverConfig):
    """Full report"""
    print("\n" + "▓" * 72)
    print("  Fuel Mix Calculator — Blending Report")
    print("▓" * 72)

    report_config(cfg)
    report_scenarios(scenarios, cfg)

    print_header("Results")
    for i, (scenario, result) in enumerate(zip(scenarios, results), 1):
        report_result(i, scenario, result, cfg)

    report_summary(results)

    print()
    print_separator()
    print("  Report complete")
    print_separator()
    print()
