from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from crucible.core.config import get_settings
from crucible.grid.cost_map import CostMapFormatError, load_cost_map
from crucible.planning.search import SearchBudgetExceeded, SearchConfigError
from crucible.planning.solver import RunProfile, SolveReport, solve_cost_map


logger = logging.getLogger("crucible.solve_grid")

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Minimum heat loss from top-left to bottom-right of a digit grid.")
    p.add_argument("input", type=Path, nargs="?", default=None, help="grid file, one digit per cell")
    p.add_argument("--min-run", type=int, default=None, help="custom profile: cells before a turn or stop")
    p.add_argument("--max-run", type=int, default=None, help="custom profile: max cells in one direction")
    p.add_argument("--parallel", action="store_true", help="run profiles on separate threads")
    p.add_argument("--json", action="store_true", help="print a JSON report instead of one cost per line")
    p.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None)
    return p.parse_args(argv)


def _profiles_from_args(args: argparse.Namespace) -> list[RunProfile]:
    if args.min_run is None and args.max_run is None:
        return get_settings().default_profiles()
    if args.min_run is None or args.max_run is None:
        raise SearchConfigError("--min-run and --max-run must be given together")
    return [RunProfile(name="custom", min_run=args.min_run, max_run=args.max_run)]


def format_report(report: SolveReport) -> list[str]:
    lines = []
    for outcome in report.outcomes:
        cost = outcome.result.cost
        lines.append(str(cost) if cost is not None else "unreachable")
    return lines


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    level = args.log_level or settings.log_level.upper()
    if level not in LOG_LEVELS:
        print(f"error: unsupported log level {level!r}, expected one of {list(LOG_LEVELS)}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    input_path = args.input or settings.default_input_path

    try:
        cost_map = load_cost_map(input_path)
        logger.debug("loaded %dx%d grid from %s\n%s", cost_map.width, cost_map.height, input_path, cost_map)
        report = solve_cost_map(
            cost_map,
            _profiles_from_args(args),
            max_expansions=settings.max_expansions,
            parallel=args.parallel,
            max_workers=max(1, settings.solve_max_workers),
        )
    except (FileNotFoundError, CostMapFormatError, SearchConfigError, SearchBudgetExceeded) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(report.as_dict(), ensure_ascii=False, indent=2))
    else:
        for line in format_report(report):
            print(line)
    return 0 if all(o.result.reachable for o in report.outcomes) else 1


if __name__ == "__main__":
    raise SystemExit(main())
