"""The ``help`` command."""

from __future__ import annotations

from difflib import get_close_matches

from alpaca_cli._common import CLIState, echo
from alpaca_cli.exceptions import AlpacaCliError, ErrorCode
from alpaca_cli.parser import ParsedInvocation
from alpaca_cli.usage import HELP, HELP_DETAILS


def help_command(invocation: ParsedInvocation, state: CLIState) -> None:
    _ = state
    if not invocation.positional:
        echo(HELP)
        return

    topic = invocation.positional[0]
    detail = HELP_DETAILS.get(topic)
    if detail is None:
        matches = get_close_matches(topic, list(HELP_DETAILS), n=3, cutoff=0.45)
        raise AlpacaCliError(
            ErrorCode.UNKNOWN_COMMAND,
            f"'{topic}' is not an alpaca command. See 'alpaca help'",
            details={"command": topic},
            suggestion=f"Did you mean: {', '.join(matches)}" if matches else None,
        )
    echo(detail)
