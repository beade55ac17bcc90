"""The ``configure`` command: persist credentials and trading mode."""

from __future__ import annotations

import logging

from alpaca_cli._common import CLIState, echo
from alpaca_cli.parser import ParsedInvocation

logger = logging.getLogger(__name__)

# Flag name -> key in the persistent store.
FLAG_TO_CONFIG_KEY = {
    "id": "keyId",
    "secret": "secretKey",
    "mode": "mode",
    "base-url": "baseUrl",
}


def configure(invocation: ParsedInvocation, state: CLIState) -> None:
    written: list[str] = []
    for flag, value in invocation.options.items():
        key = FLAG_TO_CONFIG_KEY.get(flag)
        if key is None or not value:
            continue
        state.store.set(key, value)
        written.append(flag)

    if not written:
        echo("nothing to configure. See 'alpaca help configure'")
        return

    logger.info("configured %s in %s", ", ".join(written), state.store.path)
    echo("configured " + ", ".join(written))
