"""Root Typer app: forwards raw tokens to the command dispatcher."""

from __future__ import annotations

import logging

import typer

from alpaca_cli._common import CLIState, configure_logging, handle_error
from alpaca_cli.client import connect
from alpaca_cli.config import ConfigStore, load_settings
from alpaca_cli.dispatch import dispatch
from alpaca_cli.exceptions import AlpacaCliError, ErrorCode

logger = logging.getLogger(__name__)

# Every token after the command name, including --flags, -h/--help and a bare --,
# is handed to the dispatcher untouched.
CONTEXT_SETTINGS = {
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
    "help_option_names": [],
}

app = typer.Typer(
    help="""Trade stocks through the Alpaca brokerage API.

    Examples:
      alpaca configure --id=<key-id> --secret=<secret-key> --mode=paper
      alpaca buy 10 AAPL --type=limit --limit-price=180
      alpaca report
    """,
    add_completion=False,
    context_settings=CONTEXT_SETTINGS,
)


@app.command()
def main(
    tokens: list[str] | None = typer.Argument(None, metavar="COMMAND [ARGS]..."),
) -> None:
    try:
        settings = load_settings()
    except ValueError as exc:
        handle_error(AlpacaCliError(ErrorCode.CONFIG_INVALID, f"invalid ALPACA_CLI_* environment: {exc}"))
        return
    configure_logging(settings.log_level)
    state = CLIState(store=ConfigStore(settings.config_path), settings=settings, broker_factory=connect)

    command, *argv = tokens or [""]
    try:
        dispatch(command, argv, state)
    except AlpacaCliError as exc:
        handle_error(exc)
    except typer.Exit:
        raise
    except Exception as exc:
        logger.debug("unhandled error", exc_info=True)
        handle_error(AlpacaCliError(ErrorCode.INTERNAL_ERROR, str(exc) or exc.__class__.__name__))


def run() -> None:
    app()
