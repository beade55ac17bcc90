"""Usage and help text for every command."""

from __future__ import annotations

BUY_USAGE = """alpaca buy [quantity] <symbol>
  [--type=<market|limit|stop|stop_limit>]
  [--time-in-force=<day|gtc|opg|ioc>]
  [--limit-price=<number>]
  [--stop-price=<number>]
  [--client-order-id=<string>]"""

SELL_USAGE = """alpaca sell [quantity] <symbol>
  [--type=<market|limit|stop|stop_limit>]
  [--time-in-force=<day|gtc|opg|ioc>]
  [--limit-price=<number>]
  [--stop-price=<number>]
  [--client-order-id=<string>]"""

REPORT_USAGE = """alpaca report

Outputs a report of your current portfolio"""

CONFIGURE_USAGE = """alpaca configure [--id=<key-id>] [--secret=<secret-key>] [--mode=<paper|live>] [--base-url=<url>]

Get your api key at https://alpaca.markets.

'paper' mode switches on paper trading. 'live' is the default, and uses real money.
'--base-url' overrides the trading API endpoint chosen by the mode."""

HELP = """Usage:
alpaca <command>

commands:
  configure   configure your alpaca cli installation
  buy         buy a stock
  sell        sell a stock
  report      display a report of your current portfolio

Run 'alpaca help <command>' for help with a specific command.
"""

HELP_DETAILS: dict[str, str] = {
    "configure": CONFIGURE_USAGE,
    "buy": BUY_USAGE + "\n\nBuys a stock",
    "sell": SELL_USAGE + "\n\nSells a stock",
    "report": REPORT_USAGE,
    "help": HELP,
}
