"""
Fuel Mix Calculator — Mixture Solver
=====================================
Closed-form two-source mixing equations.

Mode A  fill_from_empty:    x + y = T,  (x·1 + y·Eg) / T = Et
Mode B  add_fuel:           (A·Ec + x·Ea) / (A + x) = Et
Mode C  add_cheapest_fuel:  Mode B for ethanol and gasoline, keep the smaller x

Every function is pure. Infeasible scenarios come back as
SolveResult(valid=False, reason=...), never as exceptions and never as
negative volumes.
"""

import math
from dataclasses import replace

from .models import (
    SolverConfig, Scenario, SolveResult, TankState,
    GASOLINE_GRADES, ETHANOL_GRADES,
)
from .units import check_unit, parse_number, to_liters

MODES = ("fill", "add", "auto")
FUELS = ("ethanol", "gasoline")

WRONG_SIDE_WARNING = "target is on the wrong side of current; use the other fuel or drain."


def e_label(fraction: float) -> str:
    """0.955 → "E95.5", 0.27 → "E27" """
    return f"E{round(fraction * 100, 1):g}"


def _invalid(mode: str, volume_L: float, fraction: float, reason: str,
             **kwargs) -> SolveResult:
    kwargs.setdefault("additions", {})
    return SolveResult(
        mode=mode,
        final_volume_L=volume_L,
        final_ethanol_fraction=fraction,
        valid=False,
        reason=reason,
        **kwargs,
    )


# ═══════════════════════════════════════════════════════════════
# Mode A — fill from empty
# ═══════════════════════════════════════════════════════════════

def fill_from_empty(total_L: float, target: float, gasoline_fraction: float,
                    cfg: SolverConfig = None) -> SolveResult:
    """
    Compose `total_L` liters at `target` ethanol from pure ethanol
    and a gasoline grade carrying `gasoline_fraction` ethanol.

    x (ethanol)  = T·(Et − Eg) / (1 − Eg)
    y (gasoline) = T − x

    Achievable range is [Eg, 1]; below Eg only E0 gasoline helps.
    """
    cfg = cfg or SolverConfig()
    T, Et, Eg = total_L, target, gasoline_fraction

    if T <= 0:
        return _invalid("fill", 0.0, Et, "no final volume specified.")
    if Et > 1:
        return _invalid("fill", T, Et, "target exceeds 100%.")

    denom = 1.0 - Eg
    if abs(denom) < cfg.eps:
        # "Gasoline" that is itself pure ethanol: split by target directly
        return SolveResult(
            mode="fill",
            additions={"ethanol": T * Et, "gasoline": T * (1.0 - Et)},
            final_volume_L=T,
            final_ethanol_fraction=Et,
            valid=True,
        )

    if Et < Eg - cfg.eps:
        label = e_label(Eg)
        return _invalid(
            "fill", T, Eg,
            f"with the selected gasoline (≈{label}) the minimum achievable is "
            f"{label}; for less, use zero-ethanol gasoline (E0).",
            warning="use zero-ethanol gasoline (E0).",
        )

    x = T * (Et - Eg) / denom
    y = T - x
    x = max(0.0, min(T, x))
    y = max(0.0, min(T, y))

    return SolveResult(
        mode="fill",
        additions={"ethanol": x, "gasoline": y},
        final_volume_L=T,
        final_ethanol_fraction=(x + y * Eg) / T,
        valid=True,
    )


# ═══════════════════════════════════════════════════════════════
# Mode B — add one fuel to the tank
# ═══════════════════════════════════════════════════════════════

def add_fuel(current_L: float, current: float, target: float,
             additive: float, source: str = "ethanol",
             cfg: SolverConfig = None) -> SolveResult:
    """
    Add a single fuel with ethanol fraction `additive` to a tank holding
    `current_L` liters at `current` fraction.

    x = A·(Et − Ec) / (Ea − Et)

    Check order matters:
      empty tank → already on target → no movement possible → wrong side
      → Et == Ea (infinite) → negative / non-finite x → final-fraction window
    """
    cfg = cfg or SolverConfig()
    A, Ec, Et, Ea = current_L, current, target, additive

    if A <= 0:
        return _invalid("add", 0.0, Ec, "tank is empty.", source=source)

    if abs(Et - Ec) < cfg.eps:
        return SolveResult(
            mode="add", additions={source: 0.0},
            final_volume_L=A, final_ethanol_fraction=Ec,
            valid=True, source=source,
        )

    if abs(Ea - Ec) < cfg.eps:
        return _invalid(
            "add", A, Ec,
            f"{source} ({e_label(Ea)}) has the same ethanol content as the tank; "
            f"adding it cannot change the mix.",
            additions={source: 0.0}, warning=WRONG_SIDE_WARNING, source=source,
        )

    if (Et - Ec) * (Ea - Ec) < 0:
        return _invalid(
            "add", A, Ec,
            f"adding {source} ({e_label(Ea)}) moves the mix away from "
            f"{e_label(Et)}; the tank is at {e_label(Ec)}.",
            additions={source: 0.0}, warning=WRONG_SIDE_WARNING, source=source,
        )

    denom = Ea - Et
    if abs(denom) < cfg.eps:
        return _invalid(
            "add", A, Ec,
            f"reaching {e_label(Et)} with {source} ({e_label(Ea)}) would require "
            f"an infinite volume.",
            infinite=True, source=source,
        )

    x = A * (Et - Ec) / denom
    if not math.isfinite(x):
        return _invalid("add", A, Ec, "required volume is not a finite number.",
                        source=source)
    if x < 0:
        return _invalid(
            "add", A, Ec,
            f"{e_label(Et)} is beyond what {source} ({e_label(Ea)}) can reach; "
            f"the mix can only approach {e_label(Ea)}.",
            additions={source: 0.0}, source=source,
        )

    tank = TankState(A, Ec)
    final_L = tank.volume_L + x
    final = (tank.ethanol_L + x * Ea) / final_L

    lo = min(Ec, Ea) - cfg.final_check_eps
    hi = max(Ec, Ea) + cfg.final_check_eps
    if not lo <= final <= hi:
        return _invalid(
            "add", A, Ec,
            f"computed final content {e_label(final)} falls outside "
            f"{e_label(min(Ec, Ea))}–{e_label(max(Ec, Ea))}.",
            source=source,
        )

    return SolveResult(
        mode="add", additions={source: x},
        final_volume_L=final_L, final_ethanol_fraction=final,
        valid=True, source=source,
    )


# ═══════════════════════════════════════════════════════════════
# Mode C — pick the fuel needing the smaller addition
# ═══════════════════════════════════════════════════════════════

def add_cheapest_fuel(current_L: float, current: float, target: float,
                      gasoline_fraction: float, ethanol_fraction: float = 1.0,
                      cfg: SolverConfig = None) -> SolveResult:
    """
    Solve Mode B for the ethanol grade and the gasoline grade and keep
    the valid candidate with the smaller addition (ties → ethanol).

    When neither works, the reason says which fuel the target calls for
    and whether the selected grades can reach it at all.
    """
    cfg = cfg or SolverConfig()
    candidates = {
        "ethanol": add_fuel(current_L, current, target, ethanol_fraction,
                            "ethanol", cfg),
        "gasoline": add_fuel(current_L, current, target, gasoline_fraction,
                             "gasoline", cfg),
    }

    feasible = [
        c for c in candidates.values()
        if c.valid and math.isfinite(c.total_added_L)
    ]
    if feasible:
        best = min(feasible, key=lambda c: c.total_added_L)
        return replace(best, mode="auto", candidates=candidates)

    if current_L <= 0:
        return replace(candidates["ethanol"], mode="auto", source="",
                       candidates=candidates)

    Ec, Et = current, target
    needs = "ethanol" if Et > Ec else "gasoline"
    if needs == "ethanol" and Et >= ethanol_fraction - cfg.eps:
        reason = (f"{e_label(Et)} is not reachable with the selected ethanol "
                  f"({e_label(ethanol_fraction)}); the mix stays below "
                  f"{e_label(ethanol_fraction)}.")
    elif needs == "gasoline" and Et <= gasoline_fraction + cfg.eps:
        reason = (f"{e_label(Et)} is not reachable with the selected gasoline; "
                  f"its minimum is {e_label(gasoline_fraction)}. Use "
                  f"zero-ethanol gasoline (E0) or drain the tank.")
    else:
        reason = f"neither fuel brings the tank from {e_label(Ec)} to {e_label(Et)}."

    infinite = [c for c in candidates.values() if c.infinite]
    return _invalid(
        "auto", current_L, Ec, reason,
        warning=f"target requires {needs}.",
        infinite=bool(infinite),
        source=infinite[0].source if infinite else "",
        candidates=candidates,
    )


# ═══════════════════════════════════════════════════════════════
# Scenario entry point — parsing, validation, unit conversion
# ═══════════════════════════════════════════════════════════════

def _lookup(catalog: dict, grade_id: str, kind: str):
    try:
        return catalog[grade_id]
    except KeyError:
        raise ValueError(
            f"Unknown {kind}: {grade_id!r} (known: {', '.join(catalog)})"
        ) from None


def _parse_pct(value, name: str) -> tuple:
    """Percent → fraction. Out-of-range input is rejected, not clamped."""
    pct = parse_number(value)
    if pct is None:
        return None, f"{name} is not a number."
    if pct > 100:
        return None, f"{name} exceeds 100%."
    if pct < 0:
        return None, f"{name} is below 0%."
    return pct / 100.0, ""


def solve(scenario: Scenario, cfg: SolverConfig = None) -> SolveResult:
    """
    Solve one scenario.

    Bad numbers (non-numeric, negative volume, percentage outside 0–100)
    give an invalid result. Unknown mode/unit/fuel/grade ids raise
    ValueError: those are configuration errors, not user input.
    """
    cfg = cfg or SolverConfig()

    mode = scenario.mode
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode!r} (expected one of {', '.join(MODES)})")
    if mode == "add" and scenario.fuel not in FUELS:
        raise ValueError(f"Unknown fuel: {scenario.fuel!r} (expected one of {', '.join(FUELS)})")
    unit = check_unit(scenario.unit or cfg.unit)
    gasoline = _lookup(GASOLINE_GRADES, scenario.gasoline_grade or cfg.gasoline_grade,
                       "gasoline grade")
    ethanol = _lookup(ETHANOL_GRADES, scenario.ethanol_grade or cfg.ethanol_grade,
                      "ethanol grade")

    volume = parse_number(scenario.volume)
    if volume is None:
        return _invalid(mode, 0.0, 0.0, "volume is not a number.")
    if volume < 0:
        return _invalid(mode, 0.0, 0.0, "volume cannot be negative.")
    volume_L = to_liters(volume, unit, cfg)
    if not math.isfinite(volume_L):
        return _invalid(mode, 0.0, 0.0, "volume is too large.")

    target, reason = _parse_pct(scenario.target_pct, "target")
    if reason:
        return _invalid(mode, 0.0, 0.0, reason)

    if mode == "fill":
        return fill_from_empty(volume_L, target, gasoline.ethanol_fraction, cfg)

    current, reason = _parse_pct(scenario.current_pct, "current ethanol")
    if reason:
        return _invalid(mode, volume_L, 0.0, reason)

    if mode == "add":
        additive = (ethanol if scenario.fuel == "ethanol" else gasoline).ethanol_fraction
        return add_fuel(volume_L, current, target, additive, scenario.fuel, cfg)

    return add_cheapest_fuel(volume_L, current, target,
                             gasoline.ethanol_fraction, ethanol.ethanol_fraction, cfg)
