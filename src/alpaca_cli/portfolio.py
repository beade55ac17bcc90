"""The ``report`` command: current positions and unrealized performance."""

from __future__ import annotations

from alpaca_cli._common import CLIState, echo, format_number, get_broker, run_async, usd
from alpaca_cli.client import BrokerService
from alpaca_cli.models import Position
from alpaca_cli.parser import ParsedInvocation

REPORT_HEADER = "  symbol     qty      cost     value      profit"


def format_position(position: Position) -> str:
    return (
        position.symbol.rjust(8)
        + format_number(position.qty).rjust(8)
        + usd(position.cost_basis).rjust(10)
        + usd(position.market_value).rjust(10)
        + usd(position.unrealized_pl).rjust(12)
    )


def total_performance(positions: list[Position]) -> float:
    return sum((position.unrealized_pl for position in positions), 0.0)


def render_report(positions: list[Position]) -> str:
    performance = total_performance(positions)
    sign = "+" if performance > 0 else ""
    rows = "\n".join(format_position(position) for position in positions)
    return f"\nPortfolio:\n{REPORT_HEADER}\n{rows}\n\nPerformance:\n  {sign}{usd(performance)}\n"


async def _fetch_positions(broker: BrokerService) -> list[Position]:
    async with broker:
        return await broker.get_positions()


def report(invocation: ParsedInvocation, state: CLIState) -> None:
    _ = invocation
    positions = run_async(_fetch_positions(get_broker(state)))
    echo(render_report(positions))
