"""Command-line interface for the risk-control model."""
from __future__ import annotations

import argparse
import sys

from .config import AppConfig, load_config
from .instructions.liquidation import (
    get_liquidation_incentive_amount,
    get_max_liquidatable_amount,
)
from .instructions.risk_params import get_risk_params, initialize
from .logging_setup import configure_logging
from .state.deployment import Deployment

CLI_ADMIN = "GCLIADMIN"


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="risk-model",
        description="Lending protocol risk parameter model",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML config (default: built-in defaults)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("defaults", help="Print the initial risk parameters")

    liq_parser = sub.add_parser("liquidation", help="Liquidation amounts for a debt")
    liq_parser.add_argument("debt", type=int, help="Outstanding debt in base units")

    sub.add_parser("simulate", help="Run the parameter drift simulation")

    return parser


def _fresh_deployment(config: AppConfig) -> Deployment:
    deployment = Deployment(config=config.engine)
    initialize(deployment, CLI_ADMIN)
    return deployment


def _run(args: argparse.Namespace) -> int:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "defaults":
        params = get_risk_params(_fresh_deployment(config))
        print(f"min_collateral_ratio:  {params.min_collateral_ratio}")
        print(f"liquidation_threshold: {params.liquidation_threshold}")
        print(f"close_factor:          {params.close_factor}")
        print(f"liquidation_incentive: {params.liquidation_incentive}")
    elif args.command == "liquidation":
        deployment = _fresh_deployment(config)
        max_amount = get_max_liquidatable_amount(deployment, args.debt)
        incentive = get_liquidation_incentive_amount(deployment, max_amount)
        print(f"max_liquidatable:  {max_amount}")
        print(f"incentive_amount:  {incentive}")
    elif args.command == "simulate":
        # Plotting stack is only needed here
        from param_drift_simulation import ParamDriftSimulation, SimulationParams

        sim = ParamDriftSimulation(SimulationParams.from_config(config.simulation, config.engine))
        plot_path = sim.plot_results(sim.simulate())
        print(f"plot written to {plot_path}")
    else:
        build_parser().print_help()
        return 1
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(_run(args))
