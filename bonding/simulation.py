"""Randomized trading sessions against a market.

Drives a market with a population of traders issuing buys, sells and
donations, and records the solvency margin after every step. Used by the
simulation script and by the invariant tests.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

import structlog

from bonding.errors import BondingCurveError
from bonding.market import BondingCurveMarket
from bonding.math.fixed_point import ONE

logger = structlog.get_logger()

# Default trade size step (0.0001 whole units); lot=1 trades arbitrary amounts
DEFAULT_LOT = ONE // 10_000


@dataclass
class StepRecord:
    """One simulated action and the solvency margin it left behind."""

    index: int
    action: str
    trader: str
    amount: int
    succeeded: bool
    margin: int
    solvent: bool
    error: str | None = None


@dataclass
class SimulationReport:
    """Aggregate outcome of a session."""

    steps: list[StepRecord] = field(default_factory=list)
    buys: int = 0
    sells: int = 0
    donations: int = 0
    rejected: int = 0
    min_margin: int | None = None

    @property
    def always_solvent(self) -> bool:
        return all(step.solvent for step in self.steps)

    def record(self, step: StepRecord) -> None:
        self.steps.append(step)
        if not step.succeeded:
            self.rejected += 1
        elif step.action == "buy":
            self.buys += 1
        elif step.action == "sell":
            self.sells += 1
        elif step.action == "donate":
            self.donations += 1
        if self.min_margin is None or step.margin < self.min_margin:
            self.min_margin = step.margin


def make_traders(count: int) -> list[str]:
    """Deterministic trader addresses 0x...1001, 0x...1002, ..."""
    return [f"0x{0x1000 + i + 1:040x}" for i in range(count)]


def run_session(
    market: BondingCurveMarket,
    traders: list[str],
    steps: int,
    *,
    seed: int = 0,
    max_lots: int = 50_000,
    lot: int = DEFAULT_LOT,
    donate_probability: float = 0.05,
) -> SimulationReport:
    """Run a random buy/sell/donate sequence and track reserve solvency.

    Traders must already hold native value on the market's runtime. Rejected
    operations (insufficient funds, balance, ...) are counted, not raised.

    Args:
        market: Market under test
        traders: Participating addresses
        steps: Number of actions to issue
        seed: RNG seed for reproducible sessions
        max_lots: Largest trade size in lots
        lot: Trade size granularity, 18-decimal units (1 for any amount)
        donate_probability: Chance that a step is a small donation

    Returns:
        SimulationReport with per-step solvency margins
    """
    rng = random.Random(seed)
    report = SimulationReport()

    for index in range(steps):
        trader = rng.choice(traders)
        roll = rng.random()
        error: str | None = None

        if roll < donate_probability:
            action = "donate"
            amount = rng.randint(1, 10**12)
        elif roll < 0.55 or market.balance_of(trader) == 0:
            action = "buy"
            amount = rng.randint(1, max_lots) * lot
        else:
            action = "sell"
            held_lots = market.balance_of(trader) // lot
            amount = rng.randint(1, held_lots) * lot if held_lots else market.balance_of(trader)

        try:
            _apply(market, action, trader, amount)
        except BondingCurveError as err:
            error = type(err).__name__
            logger.debug("simulated_step_rejected", index=index, action=action, error=error)

        report.record(
            StepRecord(
                index=index,
                action=action,
                trader=trader,
                amount=amount,
                succeeded=error is None,
                margin=market.solvency_margin(),
                solvent=market.is_solvent(),
                error=error,
            )
        )

    logger.info(
        "simulation_finished",
        steps=steps,
        buys=report.buys,
        sells=report.sells,
        donations=report.donations,
        rejected=report.rejected,
        min_margin=report.min_margin,
    )
    return report


def _apply(market: BondingCurveMarket, action: str, trader: str, amount: int) -> None:
    if action == "buy":
        market.buy(trader, amount, market.quote_buy(amount))
    elif action == "sell":
        market.sell(trader, amount)
    else:
        with market.runtime.transaction():
            market.runtime.transfer_value(trader, market.address, amount)
