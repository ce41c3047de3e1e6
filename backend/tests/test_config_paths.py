from __future__ import annotations

from pathlib import Path

from crucible.core import config as config_module


def test_data_root_override_updates_derived_paths(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CRUCIBLE_PROJECT_ROOT", str(tmp_path / "isolated_project_root"))
    custom_data_root = tmp_path / "custom_data"
    monkeypatch.setenv("CRUCIBLE_DATA_ROOT", str(custom_data_root))
    monkeypatch.delenv("CRUCIBLE_DEFAULT_INPUT_PATH", raising=False)
    monkeypatch.delenv("CRUCIBLE_OUTPUTS_ROOT", raising=False)
    monkeypatch.delenv("CRUCIBLE_BENCHMARK_ROOT", raising=False)

    config_module.get_settings.cache_clear()
    try:
        settings = config_module.get_settings()
        assert settings.data_root == custom_data_root
        assert settings.default_input_path == custom_data_root / "input.txt"
        assert settings.outputs_root == tmp_path / "isolated_project_root" / "outputs"
        assert settings.benchmark_root == tmp_path / "isolated_project_root" / "outputs" / "benchmarks"
    finally:
        config_module.get_settings.cache_clear()


def test_profile_bounds_come_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("CRUCIBLE_ULTRA_MIN_RUN", "3")
    monkeypatch.setenv("CRUCIBLE_ULTRA_MAX_RUN", "7")
    monkeypatch.setenv("CRUCIBLE_SEARCH_MAX_EXPANSIONS", "500")

    config_module.get_settings.cache_clear()
    try:
        settings = config_module.get_settings()
        profiles = {p.name: p for p in settings.default_profiles()}
        assert (profiles["standard"].min_run, profiles["standard"].max_run) == (0, 3)
        assert (profiles["ultra"].min_run, profiles["ultra"].max_run) == (3, 7)
        assert settings.max_expansions == 500
    finally:
        config_module.get_settings.cache_clear()


def test_zero_expansion_budget_means_unlimited(monkeypatch) -> None:
    monkeypatch.setenv("CRUCIBLE_SEARCH_MAX_EXPANSIONS", "0")
    config_module.get_settings.cache_clear()
    try:
        assert config_module.get_settings().max_expansions is None
    finally:
        config_module.get_settings.cache_clear()


def test_standard_profile_uses_single_prefix_env_names(monkeypatch) -> None:
    monkeypatch.setenv("CRUCIBLE_STANDARD_MIN_RUN", "1")
    monkeypatch.setenv("CRUCIBLE_STANDARD_MAX_RUN", "5")

    config_module.get_settings.cache_clear()
    try:
        profiles = {p.name: p for p in config_module.get_settings().default_profiles()}
        assert (profiles["standard"].min_run, profiles["standard"].max_run) == (1, 5)
    finally:
        config_module.get_settings.cache_clear()
