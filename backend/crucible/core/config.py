from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from crucible.planning.solver import RunProfile


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CRUCIBLE_",
        extra="ignore",
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
    )

    project_root: Path = Path(__file__).resolve().parents[3]
    data_root: Path = project_root / "data"
    outputs_root: Path = project_root / "outputs"
    default_input_path: Path = data_root / "input.txt"
    benchmark_root: Path = outputs_root / "benchmarks"
    standard_min_run: int = 0
    standard_max_run: int = 3
    ultra_min_run: int = 4
    ultra_max_run: int = 10
    search_max_expansions: int = 0
    solve_max_concurrent: int = 2
    solve_max_workers: int = 4
    max_grid_cells: int = 250_000
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"
    cors_origin_regex: str = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"

    @property
    def cors_origin_list(self) -> list[str]:
        return [v.strip() for v in self.cors_origins.split(",") if v.strip()]

    @property
    def max_expansions(self) -> int | None:
        return self.search_max_expansions if self.search_max_expansions > 0 else None

    def default_profiles(self) -> list[RunProfile]:
        return [
            RunProfile(name="standard", min_run=self.standard_min_run, max_run=self.standard_max_run),
            RunProfile(name="ultra", min_run=self.ultra_min_run, max_run=self.ultra_max_run),
        ]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings()
    provided = set(settings.model_fields_set)

    # Keep derived paths synced with data_root / outputs_root unless explicitly overridden.
    if "data_root" not in provided:
        settings.data_root = settings.project_root / "data"
    if "outputs_root" not in provided:
        settings.outputs_root = settings.project_root / "outputs"
    if "default_input_path" not in provided:
        settings.default_input_path = settings.data_root / "input.txt"
    if "benchmark_root" not in provided:
        settings.benchmark_root = settings.outputs_root / "benchmarks"
    return settings
