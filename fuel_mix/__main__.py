#!/usr/bin/env python3
"""
Fuel Mix Calculator — Main Entry Point
=======================================

Usage:
  1. Use default input (input/example_input.json):
     python -m fuel_mix

  2. Specify a file in the input/ directory:
     python -m fuel_mix --input my_tank.json

  3. Solve a single scenario from flags:
     python -m fuel_mix --mode add --volume 30 --current 10 --target 50 --fuel ethanol

  4. Adjust parameters:
     python -m fuel_mix --input my_tank.json --unit gal --gasoline_grade E25

Input files should be placed in the input/ directory.
See input/example_input.json for format reference.
"""

import argparse
import io
import json
import os
import sys
from datetime import datetime

from . import Scenario, SolverConfig, run_scenarios
from .models import GASOLINE_GRADES, ETHANOL_GRADES
from .solver import MODES, FUELS
from .units import UNITS


# ═══════════════════════════════════════════════════════════════
# Input directory and default file
# ═══════════════════════════════════════════════════════════════

_PKG_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PKG_DIR)
INPUT_DIR = os.path.join(_PROJECT_ROOT, "input")
REPORT_DIR = os.path.join(_PROJECT_ROOT, "report")
DEFAULT_INPUT = "example_input.json"

_SCENARIO_FLAGS = ("mode", "volume", "current", "target", "fuel")


def resolve_input_path(filename: str) -> str:
    """
    Resolve input file path.

    Priority:
    1. If absolute path and exists → use directly
    2. Look in input/ directory
    3. Look in current working directory
    """
    if os.path.isabs(filename) and os.path.isfile(filename):
        return filename

    in_input_dir = os.path.join(INPUT_DIR, filename)
    if os.path.isfile(in_input_dir):
        return in_input_dir

    if os.path.isfile(filename):
        return filename

    raise FileNotFoundError(
        f"Input file not found: {filename}\n"
        f"  Searched: {INPUT_DIR}/\n"
        f"  Please place JSON files in the input/ directory"
    )


def load_from_json(filepath: str) -> tuple:
    """
    Load scenarios and optional config overrides from JSON.

    JSON format:
    {
      "scenarios": [
        {"label": "E50 from empty", "mode": "fill", "volume": 40, "target_pct": 50},
        {"label": "Top up", "mode": "add", "volume": 30,
         "current_pct": 10, "target_pct": 50, "fuel": "ethanol"},
        ...
      ],
      "config": {           // optional — only list parameters to override
        "unit": "gal",
        "gasoline_grade": "E25"
      }
    }
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    scenarios = []
    for item in data["scenarios"]:
        scenarios.append(Scenario(**item))

    cfg_overrides = data.get("config", {})

    return scenarios, cfg_overrides


def build_config(cli_args: dict, json_overrides: dict = None) -> SolverConfig:
    """
    Build configuration: defaults → JSON overrides → CLI overrides

    Priority: CLI > JSON > defaults
    """
    cfg = SolverConfig()
    overrides = {}

    if json_overrides:
        overrides.update(json_overrides)

    # CLI overrides (only non-None values)
    config_fields = {f.name for f in SolverConfig.__dataclass_fields__.values()}
    for key, val in cli_args.items():
        if val is not None and key in config_fields:
            overrides[key] = val

    for key, val in overrides.items():
        if hasattr(cfg, key):
            setattr(cfg, key, type(getattr(cfg, key))(val))

    return cfg


def scenario_from_args(args: argparse.Namespace) -> Scenario | None:
    """Single scenario from --mode/--volume/... flags, or None if none given"""
    if all(getattr(args, name) is None for name in _SCENARIO_FLAGS):
        return None
    return Scenario(
        mode=args.mode or "fill",
        volume=args.volume if args.volume is not None else 0.0,
        current_pct=args.current if args.current is not None else 0.0,
        target_pct=args.target if args.target is not None else 0.0,
        fuel=args.fuel or "ethanol",
        label="command line",
    )


def save_report(text: str) -> str:
    os.makedirs(REPORT_DIR, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    report_path = os.path.join(REPORT_DIR, f"report_{timestamp}.txt")
    with open(report_path, "w", encoding="utf-8") as f:
        f.write(text)
    return report_path


def main(argv: list = None):
    parser = argparse.ArgumentParser(
        description="Fuel Mix Calculator — ethanol/gasoline blending",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m fuel_mix                                    # default: input/example_input.json
  python -m fuel_mix --input my_tank.json               # specify: input/my_tank.json
  python -m fuel_mix --mode fill --volume 40 --target 50
  python -m fuel_mix --mode auto --volume 30 --current 10 --target 35 --unit gal
        """,
    )

    # Input
    parser.add_argument("--input", "-i", type=str, default=DEFAULT_INPUT,
                        help=f"JSON filename in input/ directory (default: {DEFAULT_INPUT})")
    parser.add_argument("--save", action="store_true",
                        help="Also save the report to report/")

    # Single scenario (replaces the input file when given)
    s = parser.add_argument_group("Single scenario (replaces --input)")
    s.add_argument("--mode", choices=MODES, default=None,
                   help="fill = from empty, add = add --fuel, auto = cheaper of the two")
    s.add_argument("--volume", type=float, default=None,
                   help="Final volume (fill) or current volume (add/auto)")
    s.add_argument("--current", type=float, default=None,
                   help="Current ethanol %% in the tank (add/auto)")
    s.add_argument("--target", type=float, default=None,
                   help="Target ethanol %%")
    s.add_argument("--fuel", choices=FUELS, default=None,
                   help="Fuel being added in add mode (default: ethanol)")

    # Tunable parameters (all optional, override defaults)
    g = parser.add_argument_group("Tunable parameters (all have defaults)")
    g.add_argument("--unit", choices=UNITS, default=None,
                   help="Volume unit (default: L)")
    g.add_argument("--gasoline_grade", choices=list(GASOLINE_GRADES), default=None,
                   help="Gasoline grade (default: E27)")
    g.add_argument("--ethanol_grade", choices=list(ETHANOL_GRADES), default=None,
                   help="Ethanol grade (default: E100)")
    g.add_argument("--liters_per_gallon", type=float, default=None,
                   help="Gallon size in liters (default: 3.78541)")
    g.add_argument("--eps", type=float, default=None,
                   help="Fraction-space tolerance (default: 1e-9)")

    args = parser.parse_args(argv)

    # ── Load data ──
    json_overrides = {}
    scenario = scenario_from_args(args)
    if scenario is not None:
        scenarios = [scenario]
    else:
        try:
            input_path = resolve_input_path(args.input)
            scenarios, json_overrides = load_from_json(input_path)
            print(f"✓ Loaded: {input_path} ({len(scenarios)} scenarios)")
        except FileNotFoundError as e:
            print(f"✗ {e}", file=sys.stderr)
            sys.exit(1)
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            print(f"✗ JSON parse error: {e}", file=sys.stderr)
            sys.exit(1)

    # ── Build config ──
    try:
        cfg = build_config(vars(args), json_overrides)
    except (ValueError, TypeError) as e:
        print(f"✗ Config error: {e}", file=sys.stderr)
        sys.exit(1)

    # ── Solve ──
    report_buf = io.StringIO()
    _real_stdout = sys.stdout

    class _Tee:
        def __init__(self, *targets):
            self.targets = targets
        def write(self, data):
            for t in self.targets:
                t.write(data)
        def flush(self):
            for t in self.targets:
                t.flush()

    sys.stdout = _Tee(_real_stdout, report_buf)
    try:
        result = run_scenarios(scenarios, cfg, verbose=True)
    except ValueError as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        sys.stdout = _real_stdout

    if args.save:
        report_path = save_report(report_buf.getvalue())
        print(f"\n  📄 Report saved: {report_path}")

    return result


if __name__ == "__main__":
    main()
