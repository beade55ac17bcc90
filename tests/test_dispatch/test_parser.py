from __future__ import annotations

import math

import pytest

from alpaca_cli.options import CONFIGURE_OPTIONS, ORDER_OPTIONS, OptionDeclaration, OptionType
from alpaca_cli.parser import coerce_number, parse_args


def test_defaults_applied_when_flags_absent() -> None:
    parsed = parse_args(["AAPL"], ORDER_OPTIONS)
    assert parsed.positional == ("AAPL",)
    assert parsed.options == {"type": "market", "time-in-force": "gtc"}


def test_flags_without_default_are_omitted() -> None:
    parsed = parse_args([], CONFIGURE_OPTIONS)
    assert parsed.options == {}


def test_equals_and_space_forms_are_coerced() -> None:
    parsed = parse_args(
        ["5", "--type=limit", "AAPL", "--limit-price", "150.5", "--time-in-force=day"],
        ORDER_OPTIONS,
    )
    assert parsed.positional == ("5", "AAPL")
    assert parsed.options["type"] == "limit"
    assert parsed.options["limit-price"] == 150.5
    assert parsed.options["time-in-force"] == "day"


def test_positional_order_is_preserved() -> None:
    parsed = parse_args(["c", "--type=stop", "a", "b"], ORDER_OPTIONS)
    assert parsed.positional == ("c", "a", "b")


def test_malformed_number_becomes_nan() -> None:
    parsed = parse_args(["AAPL", "--stop-price=cheap"], ORDER_OPTIONS)
    assert math.isnan(parsed.options["stop-price"])


@pytest.mark.parametrize("raw", ["1_000", " 5 ", "5\n", "0x10", "inf", "nan", "1e400", ""])
def test_coerce_number_accepts_plain_decimal_syntax_only(raw: str) -> None:
    assert math.isnan(coerce_number(raw))


@pytest.mark.parametrize(("raw", "expected"), [("5", 5.0), ("-0.5", -0.5), (".25", 0.25), ("3.", 3.0), ("1e3", 1000.0)])
def test_coerce_number_parses_decimals(raw: str, expected: float) -> None:
    assert coerce_number(raw) == expected


def test_numeric_flag_without_value_becomes_nan() -> None:
    parsed = parse_args(["AAPL", "--limit-price"], ORDER_OPTIONS)
    assert math.isnan(parsed.options["limit-price"])


def test_string_flag_without_value_is_empty() -> None:
    parsed = parse_args(["--id", "--secret=s"], CONFIGURE_OPTIONS)
    assert parsed.options == {"id": "", "secret": "s"}


def test_single_dash_tokens_stay_positional() -> None:
    parsed = parse_args(["-5", "AAPL"], ORDER_OPTIONS)
    assert parsed.positional == ("-5", "AAPL")


def test_double_dash_ends_flag_parsing() -> None:
    parsed = parse_args(["--", "--type=limit", "AAPL"], ORDER_OPTIONS)
    assert parsed.positional == ("--type=limit", "AAPL")
    assert parsed.options["type"] == "market"


def test_unknown_flags_pass_through() -> None:
    parsed = parse_args(["--foo=bar", "--verbose", "AAPL"], ORDER_OPTIONS)
    assert parsed.options["foo"] == "bar"
    assert parsed.options["verbose"] is True
    assert parsed.positional == ("AAPL",)


def test_last_repeated_flag_wins() -> None:
    parsed = parse_args(["--type=limit", "--type=stop"], ORDER_OPTIONS)
    assert parsed.options["type"] == "stop"


def test_boolean_flags() -> None:
    decls = (OptionDeclaration("confirm", OptionType.BOOLEAN),)
    assert parse_args(["--confirm", "x"], decls).options == {"confirm": True}
    assert parse_args(["--confirm", "x"], decls).positional == ("x",)
    assert parse_args(["--no-confirm"], decls).options == {"confirm": False}
    assert parse_args(["--confirm=false"], decls).options == {"confirm": False}
