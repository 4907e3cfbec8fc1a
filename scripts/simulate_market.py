#!/usr/bin/env python3
"""Run a randomized trading session against a fresh market.

Usage:
    # Default curve, 10 traders, 1000 steps
    python scripts/simulate_market.py

    # Custom curve and fee, verbose logging
    python scripts/simulate_market.py --curve-a 30000 --fee-bps 100 --steps 5000 -v
"""

import argparse
import logging
import sys
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bonding.config import (  # noqa: E402
    DEFAULT_CURVE_A,
    DEFAULT_CURVE_B,
    DEFAULT_FEE_BPS,
    MarketConfig,
)
from bonding.market import BondingCurveMarket  # noqa: E402
from bonding.runtime import Runtime  # noqa: E402
from bonding.simulation import DEFAULT_LOT, make_traders, run_session  # noqa: E402


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Simulate trading on a bonding curve market and check reserve solvency",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--curve-a", type=int, default=DEFAULT_CURVE_A, help="Quadratic coeff.")
    parser.add_argument("--curve-b", type=int, default=DEFAULT_CURVE_B, help="Base price")
    parser.add_argument("--fee-bps", type=int, default=DEFAULT_FEE_BPS, help="Fee in bps")
    parser.add_argument("--traders", type=int, default=10, help="Number of traders")
    parser.add_argument("--steps", type=int, default=1000, help="Number of actions")
    parser.add_argument("--seed", type=int, default=0, help="RNG seed")
    parser.add_argument(
        "--lot",
        type=int,
        default=DEFAULT_LOT,
        help="Trade size granularity in 18-decimal units (1 for arbitrary sizes)",
    )
    parser.add_argument(
        "--funding",
        type=int,
        default=10**24,
        help="Native value granted to each trader",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    runtime = Runtime()
    config = MarketConfig(curve_a=args.curve_a, curve_b=args.curve_b, fee_bps=args.fee_bps)
    market = BondingCurveMarket.deploy(runtime, config)

    traders = make_traders(args.traders)
    for trader in traders:
        runtime.fund(trader, args.funding)

    report = run_session(market, traders, args.steps, seed=args.seed, lot=args.lot)

    print("=" * 60)
    print("Bonding Curve Simulation")
    print("=" * 60)
    print(f"Steps:            {args.steps}")
    print(f"Buys / Sells:     {report.buys} / {report.sells}")
    print(f"Donations:        {report.donations}")
    print(f"Rejected:         {report.rejected}")
    print(f"Final supply:     {market.total_supply()}")
    print(f"Reserve:          {market.reserve_balance()}")
    print(f"Required reserve: {market.required_reserve()}")
    print(f"Min margin:       {report.min_margin}")
    print(f"Always solvent:   {report.always_solvent}")

    return 0 if report.always_solvent else 1


if __name__ == "__main__":
    sys.exit(main())
