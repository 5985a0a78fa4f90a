"""Shared test fixtures"""
from __future__ import annotations

import itertools
import textwrap
from pathlib import Path

import pytest

from risk_model.src.instructions.risk_params import initialize
from risk_model.src.state.deployment import Deployment

_counter = itertools.count()


def new_address() -> str:
    """Fresh, unique account address"""
    return f"GACCOUNT{next(_counter):08d}"


@pytest.fixture()
def deployment() -> Deployment:
    """A deployment with no admin and no parameters"""
    return Deployment()


@pytest.fixture()
def admin() -> str:
    return new_address()


@pytest.fixture()
def initialized(deployment: Deployment, admin: str) -> Deployment:
    """A deployment after initialize(admin), event log cleared"""
    initialize(deployment, admin)
    deployment.events.clear()
    return deployment


SAMPLE_YAML = textwrap.dedent("""\
    engine:
      max_parameter_change_bps: 500
      enforce_bps_ceiling: true
      defaults:
        min_collateral_ratio: 12000
        liquidation_threshold: 11000
        close_factor: 4000
        liquidation_incentive: 800
    simulation:
      steps: 25
      random_seed: 7
      push_probability: 0.5
      output_dir: "${RISK_MODEL_OUTPUT_DIR}"
      experiment_name: unit
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
