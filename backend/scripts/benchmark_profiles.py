from __future__ import annotations

import argparse
import csv
import json
import sys
import time
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from crucible.core.config import get_settings
from crucible.grid.cost_map import CostMapFormatError, load_cost_map
from crucible.planning.search import SearchBudgetExceeded, SearchConfigError, run_search
from crucible.planning.solver import RunProfile


def _parse_profiles(raw: str) -> list[RunProfile]:
    """Parse 'name:min:max,name:min:max'; empty falls back to configured defaults."""
    profiles: list[RunProfile] = []
    for item in raw.split(","):
        val = item.strip()
        if not val:
            continue
        parts = [p.strip() for p in val.split(":")]
        if len(parts) != 3:
            raise ValueError(f"expected 'name:min:max', got: {val}")
        try:
            min_run, max_run = int(parts[1]), int(parts[2])
        except ValueError as exc:
            raise ValueError(f"run bounds must be integers in '{val}'") from exc
        profiles.append(RunProfile(name=parts[0], min_run=min_run, max_run=max_run))
    return profiles or get_settings().default_profiles()


def run_benchmark(
    *,
    inputs: list[Path],
    profiles: list[RunProfile],
    repeats: int,
    max_expansions: int | None,
) -> list[dict]:
    rows: list[dict] = []
    repeats = max(1, int(repeats))
    for path in inputs:
        try:
            cost_map = load_cost_map(path)
        except (FileNotFoundError, CostMapFormatError) as exc:
            for profile in profiles:
                rows.append(_row(path, profile, status="fail", detail=str(exc)))
            continue
        start = cost_map.top_left()
        goal = cost_map.bottom_right()
        for profile in profiles:
            timings: list[float] = []
            result = None
            status = "ok"
            detail = ""
            for _ in range(repeats):
                t0 = time.perf_counter()
                try:
                    result = run_search(
                        cost_map,
                        start,
                        goal,
                        profile.min_run,
                        profile.max_run,
                        max_expansions=max_expansions,
                    )
                except (SearchConfigError, SearchBudgetExceeded) as exc:
                    status = "fail"
                    detail = str(exc)
                    break
                timings.append((time.perf_counter() - t0) * 1000.0)
            if result is not None and status == "ok" and not result.reachable:
                status = "unreachable"
            rows.append(
                _row(
                    path,
                    profile,
                    status=status,
                    detail=detail,
                    width=cost_map.width,
                    height=cost_map.height,
                    cost=result.cost if result is not None and status == "ok" else None,
                    expanded=result.expanded if result is not None else 0,
                    pushed=result.pushed if result is not None else 0,
                    stale_skipped=result.stale_skipped if result is not None else 0,
                    runtime_ms=round(min(timings), 3) if timings else 0.0,
                    mean_runtime_ms=round(sum(timings) / len(timings), 3) if timings else 0.0,
                )
            )
    return rows


def _row(path: Path, profile: RunProfile, **fields) -> dict:
    row = {
        "input": str(path),
        "profile": profile.name,
        "min_run": profile.min_run,
        "max_run": profile.max_run,
        "status": "ok",
        "width": 0,
        "height": 0,
        "cost": None,
        "expanded": 0,
        "pushed": 0,
        "stale_skipped": 0,
        "runtime_ms": 0.0,
        "mean_runtime_ms": 0.0,
        "detail": "",
    }
    row.update(fields)
    return row


def summarize(rows: list[dict]) -> dict:
    summary: dict[str, dict] = {}
    for row in rows:
        bucket = summary.setdefault(
            row["profile"],
            {"runs": 0, "ok": 0, "unreachable": 0, "fail": 0, "total_runtime_ms": 0.0, "total_expanded": 0},
        )
        bucket["runs"] += 1
        bucket[row["status"]] = bucket.get(row["status"], 0) + 1
        bucket["total_runtime_ms"] = round(bucket["total_runtime_ms"] + float(row["runtime_ms"]), 3)
        bucket["total_expanded"] += int(row["expanded"])
    return summary


def write_outputs(rows: list[dict], out_dir: Path) -> tuple[Path, Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    csv_path = out_dir / f"profile_benchmark_{stamp}.csv"
    json_path = out_dir / f"profile_benchmark_{stamp}.json"
    fieldnames = list(rows[0].keys()) if rows else list(_row(Path(""), RunProfile("", 0, 1)).keys())
    with csv_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    json_path.write_text(
        json.dumps({"rows": rows, "summary": summarize(rows)}, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    return csv_path, json_path


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Benchmark run profiles on one or more grid files")
    parser.add_argument("inputs", type=Path, nargs="*", help="grid files (defaults to configured input)")
    parser.add_argument("--profiles", type=str, default="", help="name:min:max,... (defaults to configured)")
    parser.add_argument("--repeats", type=int, default=3)
    parser.add_argument("--out-dir", type=Path, default=settings.benchmark_root)
    args = parser.parse_args(argv)
    try:
        profiles = _parse_profiles(args.profiles)
    except ValueError as exc:
        parser.error(str(exc))

    rows = run_benchmark(
        inputs=args.inputs or [settings.default_input_path],
        profiles=profiles,
        repeats=args.repeats,
        max_expansions=settings.max_expansions,
    )
    csv_path, _ = write_outputs(rows, args.out_dir)
    print(f"Benchmark complete: {csv_path}")
    print(json.dumps(summarize(rows), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
