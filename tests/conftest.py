from __future__ import annotations

import os
from pathlib import Path

import pytest

from alpaca_cli.client import BrokerService
from alpaca_cli.models import Bar, Order, OrderRequest, Position


@pytest.fixture
def fake_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    return home


@pytest.fixture(autouse=True)
def clear_alpaca_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ.keys()):
        if key.startswith(("ALPACA_CLI_", "APCA_")):
            monkeypatch.delenv(key, raising=False)


class FakeBroker(BrokerService):
    def __init__(self) -> None:
        self.orders: list[OrderRequest] = []
        self.bar_requests: list[tuple[str, str, int]] = []
        self.positions: list[Position] = []
        self.bars: dict[str, list[Bar]] = {}
        self.bars_error: Exception | None = None
        self.entered = 0
        self.exited = 0

    async def __aenter__(self) -> "FakeBroker":
        self.entered += 1
        return self

    async def __aexit__(self, *_: object) -> None:
        self.exited += 1

    async def create_order(self, order: OrderRequest) -> Order:
        self.orders.append(order)
        return Order(id=f"order-{len(self.orders)}", symbol=order.symbol, status="accepted")

    async def get_positions(self) -> list[Position]:
        return list(self.positions)

    async def get_bars(self, timeframe: str, symbol: str, *, limit: int = 1) -> dict[str, list[Bar]]:
        self.bar_requests.append((timeframe, symbol, limit))
        if self.bars_error is not None:
            raise self.bars_error
        return self.bars


@pytest.fixture
def broker() -> FakeBroker:
    return FakeBroker()
