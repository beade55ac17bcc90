"""Order entry commands (``buy`` and ``sell``)."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from pydantic import ValidationError

from alpaca_cli._common import CLIState, echo, format_number, get_broker, run_async
from alpaca_cli.client import BrokerService
from alpaca_cli.exceptions import AlpacaCliError, ErrorCode
from alpaca_cli.models import Order, OrderRequest, OrderType, Side
from alpaca_cli.parser import ParsedInvocation, coerce_number
from alpaca_cli.usage import BUY_USAGE, SELL_USAGE

logger = logging.getLogger(__name__)


def _is_numeric(token: str) -> bool:
    return not math.isnan(coerce_number(token))


def _usage_error(usage: str) -> AlpacaCliError:
    return AlpacaCliError(ErrorCode.USAGE_ERROR, "Usage: " + usage)


def resolve_quantity_and_symbol(positional: Sequence[str], usage: str) -> tuple[int | float, str]:
    """Resolve ``[quantity] <symbol>``; a lone non-numeric token buys one share."""

    if len(positional) == 1 and not _is_numeric(positional[0]):
        return 1, positional[0]
    if len(positional) < 2:
        raise _usage_error(usage)

    raw_qty, symbol = positional[0], positional[1]
    qty = coerce_number(raw_qty)
    if math.isnan(qty) or qty <= 0 or not symbol:
        raise _usage_error(usage)
    return (int(qty) if qty.is_integer() else qty), symbol


def _dollars(value: float | None) -> str:
    return f"${format_number(value)}" if value is not None else "an unspecified price"


def price_text(order: OrderRequest, market_price: float | None) -> str:
    limit = _dollars(order.limit_price)
    stop = _dollars(order.stop_price)
    if order.type is OrderType.STOP_LIMIT:
        return f"between {stop} and {limit}"
    if order.type is OrderType.LIMIT:
        return f"at {limit}"
    if order.type is OrderType.STOP:
        return f"at {stop}"
    if market_price is None:
        return "at market price"
    return f"at ${format_number(market_price)}"


async def _latest_price(broker: BrokerService, symbol: str) -> float | None:
    try:
        bars = await broker.get_bars("minute", symbol, limit=1)
    except AlpacaCliError as exc:
        logger.warning("could not fetch latest price for %s: %s", symbol, exc.message)
        return None
    except ValidationError as exc:
        logger.warning("malformed bar data for %s: %s", symbol, exc)
        return None
    latest = bars.get(symbol) or []
    if not latest:
        logger.warning("no recent bars returned for %s", symbol)
        return None
    return latest[0].c


async def _submit(broker: BrokerService, order: OrderRequest) -> tuple[Order, float | None]:
    async with broker:
        placed = await broker.create_order(order)
        market_price = None
        if order.type is OrderType.MARKET:
            market_price = await _latest_price(broker, order.symbol)
    return placed, market_price


def _place(invocation: ParsedInvocation, state: CLIState, side: Side, usage: str) -> None:
    qty, symbol = resolve_quantity_and_symbol(invocation.positional, usage)
    options = invocation.options
    order = OrderRequest(
        symbol=symbol,
        qty=qty,
        side=side,
        type=options["type"],
        time_in_force=options["time-in-force"],
        limit_price=options.get("limit-price"),
        stop_price=options.get("stop-price"),
        client_order_id=options.get("client-order-id"),
    )

    broker = get_broker(state)
    placed, market_price = run_async(_submit(broker, order))
    logger.debug("order %s accepted with status %s", placed.id, placed.status)

    plural = "s" if qty > 1 else ""
    echo(
        f"Placed a {order.type.value} order to {side.value} {format_number(qty)} share{plural} "
        f"of {order.symbol} {price_text(order, market_price)}.\n"
        f"\n"
        f"  order id:  {placed.id}"
    )


def buy(invocation: ParsedInvocation, state: CLIState) -> None:
    _place(invocation, state, Side.BUY, BUY_USAGE)


def sell(invocation: ParsedInvocation, state: CLIState) -> None:
    _place(invocation, state, Side.SELL, SELL_USAGE)
