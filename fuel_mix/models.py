"""
Fuel Mix Calculator — Data Models
==================================
GasolineGrade:  Named gasoline blend with a fixed baseline ethanol fraction
EthanolGrade:   Named ethanol additive (hydrated / anhydrous / pure)
TankState:      (volume, ethanol fraction) of a tank or a final mixture
SolverConfig:   All tunable parameters (with defaults, user-adjustable)
Scenario:       One blending request as entered by the user
SolveResult:    Quantities to add + final mixture + validity verdict
"""

from dataclasses import dataclass, field


# ═══════════════════════════════════════════════════════════════
# Fuel grades — fixed ethanol content per named product
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class GasolineGrade:
    """Gasoline sold at the pump; already carries some ethanol."""
    grade_id: str           # e.g. "E27"
    name: str               # Display name
    ethanol_fraction: float # Volumetric ethanol content (0–1)


@dataclass(frozen=True)
class EthanolGrade:
    """Ethanol additive. Hydrated ethanol carries ~4.5% water."""
    grade_id: str
    name: str
    ethanol_fraction: float


GASOLINE_GRADES = {
    g.grade_id: g for g in (
        GasolineGrade("E27", "Gasolina Comum/Aditivada (≈E27)", 0.27),
        GasolineGrade("E25", "Gasolina Premium/Podium (≈E25)", 0.25),
        GasolineGrade("E30", "Gasolina regional (≈E30)", 0.30),
        GasolineGrade("E0", "Gasolina pura (E0)", 0.0),
    )
}

ETHANOL_GRADES = {
    g.grade_id: g for g in (
        EthanolGrade("E100", "Etanol puro (E100)", 1.0),
        EthanolGrade("hydrated", "Etanol hidratado (≈E95.5)", 0.955),
        EthanolGrade("anhydrous", "Etanol anidro (≈E99.6)", 0.996),
    )
}


# ═══════════════════════════════════════════════════════════════
# All tunable parameters — with defaults, user-adjustable
# ═══════════════════════════════════════════════════════════════

@dataclass
class SolverConfig:
    """
    Solver configuration.

    Grouped into four categories:
    1. Numeric tolerances
    2. Units
    3. Default fuel grades
    4. Display precision
    """

    # ─── 1. Numeric tolerances ───
    eps: float = 1e-9               # Equality / near-zero test in fraction space
    final_check_eps: float = 1e-6   # Slack on the final-fraction sanity window

    # ─── 2. Units ───
    liters_per_gallon: float = 3.78541  # US gallon
    unit: str = "L"                     # Default input/display unit: "L" or "gal"

    # ─── 3. Default fuel grades ───
    gasoline_grade: str = "E27"     # Key into GASOLINE_GRADES
    ethanol_grade: str = "E100"     # Key into ETHANOL_GRADES

    # ─── 4. Display precision (presentation only, never inside the solve) ───
    volume_decimals: int = 2
    pct_decimals: int = 1


# ═══════════════════════════════════════════════════════════════
# Inputs and results
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TankState:
    """Mixture state: current tank contents or a final result"""
    volume_L: float
    ethanol_fraction: float

    @property
    def ethanol_L(self) -> float:
        return self.volume_L * self.ethanol_fraction


@dataclass
class Scenario:
    """
    One blending request, in user units.

    mode:
      "fill" — compose `volume` from empty (Mode A)
      "add"  — add `fuel` to a tank holding `volume` (Mode B)
      "auto" — add whichever of ethanol/gasoline needs less volume (Mode C)

    Numeric fields are kept as entered (they may be strings from a form or
    JSON file); they are parsed and validated by solve().
    Grade ids left as None fall back to SolverConfig defaults.
    """
    mode: str = "fill"
    volume: object = 0.0            # Final volume (fill) or current volume (add/auto)
    target_pct: object = 0.0        # Target ethanol %, 0–100
    current_pct: object = 0.0       # Current ethanol % in tank (add/auto only)
    unit: str = None                # "L" | "gal"; None → cfg.unit
    fuel: str = "ethanol"           # Mode B only: "ethanol" | "gasoline"
    gasoline_grade: str = None
    ethanol_grade: str = None
    label: str = ""


@dataclass
class SolveResult:
    """Complete result for a single scenario. Volumes are in liters."""
    mode: str
    additions: dict                 # {source_id: liters}, e.g. {"ethanol": 12.6}
    final_volume_L: float
    final_ethanol_fraction: float
    valid: bool
    reason: str = ""                # Why the result is invalid
    warning: str = ""               # Directional advice (other fuel / drain)
    infinite: bool = False          # Target needs an infinite addition; additions is empty
    source: str = ""                # Chosen additive (auto mode)
    candidates: dict = field(default_factory=dict)  # auto mode: {source_id: SolveResult}

    @property
    def total_added_L(self) -> float:
        return sum(self.additions.values())

    @property
    def final_ethanol_pct(self) -> float:
        return self.final_ethanol_fraction * 100.0

    @property
    def final_state(self) -> TankState:
        return TankState(self.final_volume_L, self.final_ethanol_fraction)
