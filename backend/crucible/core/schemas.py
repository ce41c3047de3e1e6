from __future__ import annotations

from pydantic import BaseModel, Field


MAX_PROFILES_PER_REQUEST = 16


class Coord(BaseModel):
    x: int
    y: int


class RunProfileModel(BaseModel):
    name: str = "custom"
    min_run: int = Field(ge=0)
    max_run: int = Field(ge=1)


class SolveRequest(BaseModel):
    grid: str
    start: Coord | None = None
    goal: Coord | None = None
    profiles: list[RunProfileModel] | None = Field(default=None, max_length=MAX_PROFILES_PER_REQUEST)
    parallel: bool = False
