"""
Headless runner.

Runs the default fleet on a manual clock with no renderer attached and
prints the status block at the end. Without controller input the fleet
only drifts, so this is mainly useful for watching emergency injection.

    python -m atc_tower --duration 600 --seed 7
"""

import argparse
import json
import logging
import sys

from .clock import ManualClock
from .config import SimulationConfig
from .simulator import SimulationEngine


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="atc_tower", description="Headless ATC tower simulation")
    parser.add_argument("--duration", type=float, default=300.0, help="simulated seconds to run")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--config", help="JSON file with SimulationConfig overrides")
    parser.add_argument("--log-level", default="INFO", help="logging level (default INFO)")
    parser.add_argument("--verbose", action="store_true", help="print progress every simulated minute")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s"
    )

    config = SimulationConfig()
    if args.config:
        with open(args.config, "r", encoding="utf-8") as f:
            config = SimulationConfig.from_dict(json.load(f))

    engine = SimulationEngine.with_default_fleet(config=config, clock=ManualClock(), seed=args.seed)
    engine.run(args.duration, verbose=args.verbose)
    engine.print_status()
    return 0


if __name__ == "__main__":
    sys.exit(main())
