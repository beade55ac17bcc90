"""Turn raw argv tokens into positional arguments and typed options."""

from __future__ import annotations

from dataclasses import dataclass, field
import math
import re
from typing import Any, Iterable

from alpaca_cli.options import OptionDeclaration, OptionType

FALSE_WORDS = {"false", "0", "no", "off"}
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class ParsedInvocation:
    positional: tuple[str, ...] = ()
    options: dict[str, Any] = field(default_factory=dict)


def coerce_number(raw: str) -> float:
    """Parse a numeric flag value; anything unparsable becomes ``nan`` for the validator."""

    if not NUMBER_PATTERN.fullmatch(raw):
        return math.nan
    value = float(raw)
    return value if math.isfinite(value) else math.nan


def _coerce(raw: str, option_type: OptionType) -> Any:
    if option_type is OptionType.NUMBER:
        return coerce_number(raw)
    if option_type is OptionType.BOOLEAN:
        return raw.strip().lower() not in FALSE_WORDS
    return raw


def parse_args(tokens: Iterable[str], declarations: Iterable[OptionDeclaration]) -> ParsedInvocation:
    """Split tokens into positionals and ``--flag`` options.

    Only ``--`` prefixed tokens are flags, so ``-5`` stays positional. Undeclared
    flags are passed through as strings (or ``True`` when bare) and left for the
    validator to reject. A bare ``--`` ends flag parsing.
    """

    declared = {decl.flag: decl for decl in declarations}
    remaining = list(tokens)
    positional: list[str] = []
    options: dict[str, Any] = {}

    i = 0
    while i < len(remaining):
        token = remaining[i]
        i += 1

        if token == "--":
            positional.extend(remaining[i:])
            break
        if not token.startswith("--"):
            positional.append(token)
            continue

        name, sep, inline = token[2:].partition("=")
        decl = declared.get(name)

        if decl is None and not sep and name.startswith("no-") and name[3:] in declared:
            negated = declared[name[3:]]
            if negated.type is OptionType.BOOLEAN:
                options[negated.flag] = False
                continue

        option_type = decl.type if decl is not None else None
        if sep:
            options[name] = _coerce(inline, option_type) if option_type is not None else inline
            continue

        if option_type is OptionType.BOOLEAN:
            options[name] = True
            continue

        if option_type is None:
            # Undeclared flags never swallow the following token.
            options[name] = True
            continue
        if i < len(remaining) and not remaining[i].startswith("--"):
            options[name] = _coerce(remaining[i], option_type)
            i += 1
        else:
            options[name] = math.nan if option_type is OptionType.NUMBER else ""

    for decl in declared.values():
        if decl.flag not in options and decl.default is not None:
            options[decl.flag] = decl.default

    return ParsedInvocation(positional=tuple(positional), options=options)
