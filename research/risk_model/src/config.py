"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .constants import (
    BPS_SCALE,
    DEFAULT_CLOSE_FACTOR,
    DEFAULT_LIQUIDATION_INCENTIVE,
    DEFAULT_LIQUIDATION_THRESHOLD,
    DEFAULT_MIN_COLLATERAL_RATIO,
    MAX_CAPPED_PARAMETER_BPS,
    MAX_PARAMETER_CHANGE_BPS,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineConfig:
    max_parameter_change_bps: int = MAX_PARAMETER_CHANGE_BPS
    enforce_bps_ceiling: bool = True
    default_min_collateral_ratio: int = DEFAULT_MIN_COLLATERAL_RATIO
    default_liquidation_threshold: int = DEFAULT_LIQUIDATION_THRESHOLD
    default_close_factor: int = DEFAULT_CLOSE_FACTOR
    default_liquidation_incentive: int = DEFAULT_LIQUIDATION_INCENTIVE


@dataclass(frozen=True)
class SimulationConfig:
    steps: int = 200
    random_seed: int | None = 42
    push_probability: float = 0.8
    output_dir: str = "research/results"
    experiment_name: str = "param_drift"


@dataclass(frozen=True)
class AppConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


def _as_bool(value: Any) -> bool:
    # Interpolated env values arrive as strings
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_engine(raw: dict[str, Any]) -> EngineConfig:
    defaults = raw.get("defaults", {})
    return EngineConfig(
        max_parameter_change_bps=int(raw.get("max_parameter_change_bps", MAX_PARAMETER_CHANGE_BPS)),
        enforce_bps_ceiling=_as_bool(raw.get("enforce_bps_ceiling", True)),
        default_min_collateral_ratio=int(
            defaults.get("min_collateral_ratio", DEFAULT_MIN_COLLATERAL_RATIO)
        ),
        default_liquidation_threshold=int(
            defaults.get("liquidation_threshold", DEFAULT_LIQUIDATION_THRESHOLD)
        ),
        default_close_factor=int(defaults.get("close_factor", DEFAULT_CLOSE_FACTOR)),
        default_liquidation_incentive=int(
            defaults.get("liquidation_incentive", DEFAULT_LIQUIDATION_INCENTIVE)
        ),
    )


def _build_simulation(raw: dict[str, Any]) -> SimulationConfig:
    seed = raw.get("random_seed", SimulationConfig.random_seed)
    return SimulationConfig(
        steps=int(raw.get("steps", SimulationConfig.steps)),
        random_seed=None if seed in (None, "") else int(seed),
        push_probability=float(raw.get("push_probability", SimulationConfig.push_probability)),
        # Unset env references interpolate to ""
        output_dir=raw.get("output_dir") or SimulationConfig.output_dir,
        experiment_name=raw.get("experiment_name", SimulationConfig.experiment_name),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate configuration from YAML + .env.

    Args:
        config_path: Path to a YAML file. When omitted the built-in defaults
            are returned unchanged.
    """
    load_dotenv()

    if config_path is None:
        cfg = AppConfig()
        _validate(cfg)
        return cfg

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        engine=_build_engine(raw.get("engine", {})),
        simulation=_build_simulation(raw.get("simulation", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    engine = cfg.engine
    if not 0 < engine.max_parameter_change_bps <= BPS_SCALE:
        raise ValueError(
            f"max_parameter_change_bps must be in 1..{BPS_SCALE}, "
            f"got {engine.max_parameter_change_bps}"
        )

    defaults = {
        "min_collateral_ratio": engine.default_min_collateral_ratio,
        "liquidation_threshold": engine.default_liquidation_threshold,
        "close_factor": engine.default_close_factor,
        "liquidation_incentive": engine.default_liquidation_incentive,
    }
    for name, value in defaults.items():
        if value < 0:
            raise ValueError(f"Default {name} must be non-negative, got {value}")

    if engine.enforce_bps_ceiling:
        for name in ("close_factor", "liquidation_incentive"):
            if defaults[name] > MAX_CAPPED_PARAMETER_BPS:
                raise ValueError(
                    f"Default {name} must not exceed {MAX_CAPPED_PARAMETER_BPS}, got {defaults[name]}"
                )

    if engine.default_min_collateral_ratio <= engine.default_liquidation_threshold:
        raise ValueError(
            "Default min_collateral_ratio must exceed default liquidation_threshold"
        )

    sim = cfg.simulation
    if sim.steps <= 0:
        raise ValueError(f"Simulation steps must be positive, got {sim.steps}")
    if not 0.0 <= sim.push_probability <= 1.0:
        raise ValueError(
            f"Simulation push_probability must be in [0, 1], got {sim.push_probability}"
        )
