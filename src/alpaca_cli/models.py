"""Order, position and bar models exchanged with the Alpaca REST API."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, field_validator


class Side(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    MARKET = "market"
    LIMIT = "limit"
    STOP = "stop"
    STOP_LIMIT = "stop_limit"


class TimeInForce(str, Enum):
    DAY = "day"
    GTC = "gtc"
    OPG = "opg"
    IOC = "ioc"


class OrderRequest(BaseModel):
    symbol: str
    qty: int | float
    side: Side
    type: OrderType = OrderType.MARKET
    time_in_force: TimeInForce = TimeInForce.GTC
    limit_price: float | None = None
    stop_price: float | None = None
    client_order_id: str | None = None

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        return value.upper().strip()


class Order(BaseModel):
    id: str
    client_order_id: str | None = None
    symbol: str | None = None
    qty: float | None = None
    side: str | None = None
    type: str | None = None
    status: str | None = None
    submitted_at: datetime | None = None


class Position(BaseModel):
    symbol: str
    qty: float
    cost_basis: float
    market_value: float
    unrealized_pl: float
    current_price: float | None = None
    side: str | None = None


class Bar(BaseModel):
    t: datetime | None = None
    o: float | None = None
    h: float | None = None
    l: float | None = None  # noqa: E741
    c: float
    v: float | None = None
