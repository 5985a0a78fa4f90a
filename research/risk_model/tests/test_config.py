"""Unit tests for configuration loading."""
from __future__ import annotations

from pathlib import Path

import pytest

from risk_model.src.config import AppConfig, EngineConfig, SimulationConfig, load_config


class TestLoadConfig:
    def test_defaults_without_path(self) -> None:
        cfg = load_config()
        assert cfg == AppConfig()
        assert cfg.engine.max_parameter_change_bps == 1_000
        assert cfg.engine.enforce_bps_ceiling is True

    def test_loads_sample(self, sample_yaml_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RISK_MODEL_OUTPUT_DIR", "/tmp/risk-results")
        cfg = load_config(sample_yaml_path)

        assert cfg.engine == EngineConfig(
            max_parameter_change_bps=500,
            enforce_bps_ceiling=True,
            default_min_collateral_ratio=12_000,
            default_liquidation_threshold=11_000,
            default_close_factor=4_000,
            default_liquidation_incentive=800,
        )
        assert cfg.simulation == SimulationConfig(
            steps=25,
            random_seed=7,
            push_probability=0.5,
            output_dir="/tmp/risk-results",
            experiment_name="unit",
        )

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "empty.yaml"
        cfg_file.write_text("")
        assert load_config(cfg_file) == AppConfig()

    def test_env_interpolated_boolean(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RISK_MODEL_CEILING", "false")
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("engine:\n  enforce_bps_ceiling: ${RISK_MODEL_CEILING}\n")
        assert load_config(cfg_file).engine.enforce_bps_ceiling is False

    def test_rejects_inverted_default_ratios(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(
            "engine:\n  defaults:\n    min_collateral_ratio: 10000\n    liquidation_threshold: 10500\n"
        )
        with pytest.raises(ValueError, match="min_collateral_ratio"):
            load_config(cfg_file)

    def test_rejects_default_above_ceiling(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("engine:\n  defaults:\n    close_factor: 12000\n")
        with pytest.raises(ValueError, match="close_factor"):
            load_config(cfg_file)

    def test_rejects_zero_change_bound(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("engine:\n  max_parameter_change_bps: 0\n")
        with pytest.raises(ValueError, match="max_parameter_change_bps"):
            load_config(cfg_file)

    def test_rejects_bad_push_probability(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("simulation:\n  push_probability: 1.5\n")
        with pytest.raises(ValueError, match="push_probability"):
            load_config(cfg_file)
