import logging
import numpy as np
import matplotlib.pyplot as plt
import pandas as pd
from dataclasses import dataclass
from typing import List, Optional
from pathlib import Path
from datetime import datetime

from risk_model.src.config import EngineConfig, SimulationConfig
from risk_model.src.constants import BPS_SCALE, MAX_PARAMETER_CHANGE_BPS
from risk_model.src.errors import RiskManagementError
from risk_model.src.instructions.liquidation import (
    get_liquidation_incentive_amount,
    get_max_liquidatable_amount,
)
from risk_model.src.instructions.risk_params import (
    get_risk_params,
    initialize,
    set_risk_params,
)
from risk_model.src.state.deployment import Deployment
from risk_model.src.state.risk_params import RISK_PARAM_FIELDS

logger = logging.getLogger(__name__)

SIM_ADMIN = "GSIMULATEDADMIN"
REFERENCE_DEBT = 1_000_000  # debt used to translate parameters into amounts

@dataclass
class SimulationParams:
    steps: int = 200
    random_seed: Optional[int] = 42
    push_probability: float = 0.8  # chance a proposal moves by the full allowed step upward
    max_parameter_change_bps: int = MAX_PARAMETER_CHANGE_BPS
    enforce_bps_ceiling: bool = True
    experiment_name: str = "param_drift"
    output_dir: str = "research/results"

    @classmethod
    def from_config(cls, sim: SimulationConfig, engine: EngineConfig) -> "SimulationParams":
        return cls(
            steps=sim.steps,
            random_seed=sim.random_seed,
            push_probability=sim.push_probability,
            max_parameter_change_bps=engine.max_parameter_change_bps,
            enforce_bps_ceiling=engine.enforce_bps_ceiling,
            experiment_name=sim.experiment_name,
            output_dir=sim.output_dir,
        )

class ParamDriftSimulation:
    """Replays a stream of admin proposals against a fresh deployment.

    Every step picks one parameter and proposes a new value for it: usually
    the largest increase the change bound allows, otherwise a random move
    inside the bound. The engine decides whether the proposal lands.
    """

    def __init__(self, params: SimulationParams):
        self.params = params
        self.rng = np.random.default_rng(params.random_seed)
        self.deployment = Deployment(config=EngineConfig(
            max_parameter_change_bps=params.max_parameter_change_bps,
            enforce_bps_ceiling=params.enforce_bps_ceiling,
        ))
        initialize(self.deployment, SIM_ADMIN)
        self.rows: List[dict] = []

    def propose(self, current: int) -> int:
        max_step = current * self.params.max_parameter_change_bps // BPS_SCALE
        if self.rng.random() < self.params.push_probability:
            return current + max_step
        return current + int(self.rng.integers(-max_step, max_step + 1))

    def step(self, index: int) -> dict:
        field = RISK_PARAM_FIELDS[int(self.rng.integers(len(RISK_PARAM_FIELDS)))]
        current = getattr(get_risk_params(self.deployment), field)
        proposed = self.propose(current)

        error = None
        try:
            set_risk_params(self.deployment, SIM_ADMIN, **{field: proposed})
        except RiskManagementError as e:
            error = type(e).__name__
            logger.debug("step %d: %s=%d rejected (%s)", index, field, proposed, error)

        after = get_risk_params(self.deployment)
        max_liquidatable = get_max_liquidatable_amount(self.deployment, REFERENCE_DEBT)
        row = {
            "step": index,
            "field": field,
            "proposed": proposed,
            "accepted": error is None,
            "error": error,
            **{name: getattr(after, name) for name in RISK_PARAM_FIELDS},
            "max_liquidatable": max_liquidatable,
            "incentive_amount": get_liquidation_incentive_amount(self.deployment, max_liquidatable),
        }
        self.rows.append(row)
        return row

    def simulate(self) -> pd.DataFrame:
        for index in range(self.params.steps):
            self.step(index)
        history = pd.DataFrame(self.rows)
        logger.info(
            "Simulation %s: %d/%d proposals accepted",
            self.params.experiment_name, int(history["accepted"].sum()), len(history),
        )
        return history

    def plot_results(self, history: pd.DataFrame) -> Path:
        output_dir = Path(self.params.output_dir) / self.params.experiment_name
        output_dir.mkdir(parents=True, exist_ok=True)

        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 8))

        # Ratios
        ax1.plot(history["step"], history["min_collateral_ratio"] / 100, label='Min Collateral Ratio')
        ax1.plot(history["step"], history["liquidation_threshold"] / 100, label='Liquidation Threshold')
        ax1.set_ylabel('Ratio (%)')
        ax1.set_title('Collateral Ratios Over Admin Updates')
        ax1.legend()
        ax1.grid(True)

        # Liquidation economics
        ax2.plot(history["step"], history["close_factor"] / 100, label='Close Factor')
        ax2.plot(history["step"], history["liquidation_incentive"] / 100, label='Liquidation Incentive', color='orange')
        ax2.axhline(y=100.0, color='r', linestyle='--', alpha=0.3)
        ax2.set_ylabel('Percent (%)')
        ax2.set_xlabel('Update step')
        ax2.set_title('Liquidation Parameters Over Admin Updates')
        ax2.legend()
        ax2.grid(True)

        plt.tight_layout()

        plot_name = f"change_{self.params.max_parameter_change_bps}_ceiling_{self.params.enforce_bps_ceiling}"
        if self.params.random_seed is not None:
            plot_name += f"_seed_{self.params.random_seed}"

        plot_path = output_dir / f"{plot_name}.png"
        plt.savefig(plot_path)
        plt.close()
        history.to_csv(output_dir / f"{plot_name}.csv", index=False)
        return plot_path

def compare_ceiling(base_params: SimulationParams) -> Path:
    """Run the same proposal stream with and without the 100% ceiling and plot both"""
    output_dir = Path(base_params.output_dir) / base_params.experiment_name
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 10))

    for enforce in (True, False):
        params = SimulationParams(
            steps=base_params.steps,
            random_seed=base_params.random_seed,
            push_probability=base_params.push_probability,
            max_parameter_change_bps=base_params.max_parameter_change_bps,
            enforce_bps_ceiling=enforce,
            experiment_name=base_params.experiment_name,
            output_dir=base_params.output_dir,
        )
        history = ParamDriftSimulation(params).simulate()
        label = "with ceiling" if enforce else "without ceiling"
        ax1.plot(history["step"], history["close_factor"] / 100, label=f'Close Factor ({label})')
        ax2.plot(history["step"], history["liquidation_incentive"] / 100, label=f'Liquidation Incentive ({label})')

    for ax, title in ((ax1, 'Close Factor'), (ax2, 'Liquidation Incentive')):
        ax.axhline(y=100.0, color='r', linestyle='--', alpha=0.3)
        ax.set_ylabel(f'{title} (%)')
        ax.set_title(f'{title} Drift Under Repeated Maximal Updates')
        ax.legend(loc='upper left')
        ax.grid(True, alpha=0.3)
    ax2.set_xlabel('Update step')

    seed_text = f"Random Seed: {base_params.random_seed}" if base_params.random_seed is not None else "No Seed"
    fig.text(0.02, 0.02, seed_text, fontsize=8, alpha=0.7)

    plt.tight_layout()

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    plot_path = output_dir / f"ceiling_comparison_{timestamp}.png"
    plt.savefig(plot_path, bbox_inches='tight', dpi=300)
    plt.close()
    return plot_path

def main():
    base_params = SimulationParams(
        experiment_name="ceiling_comparison",
        random_seed=57,
        steps=300,
    )
    compare_ceiling(base_params)

    # # single run for testing
    # sim = ParamDriftSimulation(SimulationParams(experiment_name="single_run"))
    # sim.plot_results(sim.simulate())

if __name__ == "__main__":
    main()
