"""Shared CLI state, rendering, logging and error helpers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import math
import sys
from typing import Any, Callable

import typer
from rich.console import Console

from alpaca_cli.client import BrokerService, connect
from alpaca_cli.config import ConfigStore, Configuration, Settings, load_configuration
from alpaca_cli.exceptions import AlpacaCliError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

BrokerFactory = Callable[[Configuration, Settings], BrokerService]


@dataclass
class CLIState:
    store: ConfigStore
    settings: Settings
    broker_factory: BrokerFactory = connect


def get_broker(state: CLIState) -> BrokerService:
    return state.broker_factory(load_configuration(state.store), state.settings)


def run_async(awaitable: Any) -> Any:
    return asyncio.run(awaitable)


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def echo(text: str = "") -> None:
    typer.echo(text)


def handle_error(exc: AlpacaCliError) -> None:
    console = Console(stderr=True, soft_wrap=True)
    console.print(exc.message, style="red", markup=False, highlight=False)
    if exc.suggestion:
        console.print(exc.suggestion, markup=False, highlight=False)
    raise typer.Exit(code=exc.exit_code)


def format_number(value: float) -> str:
    """Render integral floats without a trailing ``.0`` (``150.0`` -> ``150``)."""

    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def usd(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
