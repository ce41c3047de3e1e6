from __future__ import annotations

from fastapi import APIRouter, HTTPException

from crucible.core.config import get_settings
from crucible.core.schemas import SolveRequest
from crucible.core.solve_runtime import solve_slots
from crucible.grid.cost_map import CostMap
from crucible.planning.solver import RunProfile, solve_cost_map


router = APIRouter(tags=["solve"])


@router.get("/profiles")
def list_profiles() -> dict:
    settings = get_settings()
    return {
        "profiles": [
            {"name": p.name, "min_run": p.min_run, "max_run": p.max_run} for p in settings.default_profiles()
        ],
        "max_expansions": settings.max_expansions,
    }


@router.get("/runtime")
def runtime_stats() -> dict:
    return solve_slots.stats()


@router.post("/solve")
def solve(payload: SolveRequest) -> dict:
    settings = get_settings()
    cost_map = CostMap.from_text(payload.grid)
    cells = cost_map.width * cost_map.height
    if cells > settings.max_grid_cells:
        raise HTTPException(
            status_code=413,
            detail=f"grid has {cells} cells, limit is {settings.max_grid_cells}",
        )

    if payload.profiles:
        profiles = [RunProfile(name=p.name, min_run=p.min_run, max_run=p.max_run) for p in payload.profiles]
    else:
        profiles = settings.default_profiles()

    with solve_slots.hold() as acquired:
        if not acquired:
            raise HTTPException(status_code=429, detail="Too many concurrent solves, retry later.")
        report = solve_cost_map(
            cost_map,
            profiles,
            start=(payload.start.x, payload.start.y) if payload.start else None,
            goal=(payload.goal.x, payload.goal.y) if payload.goal else None,
            max_expansions=settings.max_expansions,
            parallel=payload.parallel,
            max_workers=max(1, settings.solve_max_workers),
        )
    return report.as_dict()
