"""
Fuel Mix Calculator — Units and Numeric Input
==============================================
- Volume conversion: liters ↔ US gallons (1 gal = 3.78541 L)
- Lenient parsing of form/JSON numbers
- Display rounding (presentation only, never used inside the solve)
"""

import math
from .models import SolverConfig, SolveResult

UNITS = ("L", "gal")


def check_unit(unit: str) -> str:
    if unit not in UNITS:
        raise ValueError(f"Unknown unit: {unit!r} (expected one of {', '.join(UNITS)})")
    return unit


def to_liters(value: float, unit: str, cfg: SolverConfig = None) -> float:
    """Convert a volume in `unit` to the base unit (liters)"""
    cfg = cfg or SolverConfig()
    if check_unit(unit) == "gal":
        return value * cfg.liters_per_gallon
    return value


def from_liters(liters: float, unit: str, cfg: SolverConfig = None) -> float:
    """Convert a volume in liters back to `unit` for display"""
    cfg = cfg or SolverConfig()
    if check_unit(unit) == "gal":
        return liters / cfg.liters_per_gallon
    return liters


def parse_number(value) -> float | None:
    """
    Parse a user-entered number.

    Accepts int/float and numeric strings (comma as decimal separator
    allowed, e.g. "40,5"). Returns None for anything non-numeric,
    including NaN and ±inf.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def round_display(value: float, decimals: int = 2) -> float:
    """
    Round for display.

    Non-finite values pass through unchanged so an infinite result
    never turns into a plausible-looking number.
    """
    if not math.isfinite(value):
        return value
    return round(value, decimals)


def display_values(result: SolveResult, unit: str = None,
                   cfg: SolverConfig = None) -> dict:
    """
    Unit-converted, rounded values for presentation.

    Volumes use cfg.volume_decimals, the percentage cfg.pct_decimals.
    An infinite result shows "∞" for its additions.
    """
    cfg = cfg or SolverConfig()
    unit = check_unit(unit or cfg.unit)

    def vol(liters):
        return round_display(from_liters(liters, unit, cfg), cfg.volume_decimals)

    if result.infinite:
        additions = {result.source: "∞"} if result.source else {}
    else:
        additions = {src: vol(v) for src, v in result.additions.items()}

    return {
        "unit": unit,
        "additions": additions,
        "total_added": "∞" if result.infinite else vol(result.total_added_L),
        "final_volume": vol(result.final_volume_L),
        "final_pct": round_display(result.final_ethanol_pct, cfg.pct_decimals),
        "valid": result.valid,
        "reason": result.reason,
        "warning": result.warning,
    }
