"""Command lookup table and the parse -> validate -> handle pipeline."""

from __future__ import annotations

from enum import Enum
import logging
from typing import Sequence

from alpaca_cli._common import CLIState
from alpaca_cli.configure import configure
from alpaca_cli.help_cmd import help_command
from alpaca_cli.options import (
    CONFIGURE_OPTIONS,
    CONFIGURE_RULES,
    NO_OPTIONS,
    ORDER_OPTIONS,
    ORDER_RULES,
    CommandSpec,
)
from alpaca_cli.orders import buy, sell
from alpaca_cli.parser import parse_args
from alpaca_cli.portfolio import report
from alpaca_cli.validation import assert_valid

logger = logging.getLogger(__name__)


class Command(str, Enum):
    CONFIGURE = "configure"
    BUY = "buy"
    SELL = "sell"
    REPORT = "report"
    HELP = "help"

    @classmethod
    def resolve(cls, name: str | None) -> "Command":
        """Unknown or missing names fall back to ``help``."""

        try:
            return cls(name)
        except ValueError:
            return cls.HELP


COMMANDS: dict[Command, CommandSpec] = {
    Command.CONFIGURE: CommandSpec("configure", CONFIGURE_OPTIONS, CONFIGURE_RULES, configure),
    Command.BUY: CommandSpec("buy", ORDER_OPTIONS, ORDER_RULES, buy),
    Command.SELL: CommandSpec("sell", ORDER_OPTIONS, ORDER_RULES, sell),
    Command.REPORT: CommandSpec("report", NO_OPTIONS, None, report),
    Command.HELP: CommandSpec("help", NO_OPTIONS, None, help_command),
}


def get_command_spec(name: str | None) -> CommandSpec:
    return COMMANDS[Command.resolve(name)]


def dispatch(name: str | None, argv: Sequence[str], state: CLIState) -> None:
    spec = get_command_spec(name)
    if spec.name != name:
        logger.debug("unrecognized command %r, showing help", name)

    invocation = parse_args(argv, spec.options)
    # Option values may hold secrets; only names are logged.
    logger.debug("parsed %s: positional=%s flags=%s", spec.name, invocation.positional, list(invocation.options))
    if spec.rules is not None:
        assert_valid(invocation, spec.rules, spec.flags)
    spec.handler(invocation, state)
