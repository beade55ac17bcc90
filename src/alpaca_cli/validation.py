"""Schema validation that reports every violation in one pass."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Iterable

from alpaca_cli.exceptions import AlpacaCliError, ErrorCode
from alpaca_cli.options import OneOf, OptionalPassthrough, OptionType, RequiredWhen, TypeCheck, ValidationRule
from alpaca_cli.parser import ParsedInvocation


@dataclass(frozen=True)
class Violation:
    field: str
    message: str


def _type_violation(field: str, value: Any, option_type: OptionType) -> str | None:
    if option_type is OptionType.NUMBER:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            return f'"{field}" must be a number'
        return None
    if option_type is OptionType.BOOLEAN:
        if not isinstance(value, bool):
            return f'"{field}" must be a boolean'
        return None
    if not isinstance(value, str):
        return f'"{field}" must be a string'
    if not value:
        return f'"{field}" is not allowed to be empty'
    return None


def _check_rule(rule: ValidationRule, options: dict[str, Any]) -> str | None:
    if isinstance(rule, RequiredWhen):
        trigger = options.get(rule.when_field)
        if trigger in rule.when_values and rule.field not in options:
            return f'"{rule.field}" is required when "{rule.when_field}" is {trigger}'
        return None

    if rule.field not in options:
        return f'"{rule.field}" is required' if rule.required else None

    value = options[rule.field]
    if isinstance(rule, OneOf):
        if not isinstance(value, str) or value not in rule.allowed:
            return f'"{rule.field}" must be one of [{", ".join(rule.allowed)}]'
        return None
    if isinstance(rule, TypeCheck):
        return _type_violation(rule.field, value, rule.type)
    if isinstance(rule, OptionalPassthrough):
        return None
    raise TypeError(f"unsupported validation rule: {rule!r}")


def validate(
    invocation: ParsedInvocation,
    rules: Iterable[ValidationRule],
    flags: Iterable[str] = (),
) -> list[Violation]:
    """Evaluate all rules without short-circuiting; an empty list means valid.

    Options outside ``flags`` and the rule fields are reported as not allowed;
    declared flags without a rule are accepted unchecked.
    """

    rules = tuple(rules)
    violations: list[Violation] = []
    for rule in rules:
        message = _check_rule(rule, invocation.options)
        if message:
            violations.append(Violation(rule.field, message))

    known = {rule.field for rule in rules} | set(flags)
    for name in invocation.options:
        if name not in known:
            violations.append(Violation(name, f'"{name}" is not allowed'))
    return violations


def assert_valid(
    invocation: ParsedInvocation,
    rules: Iterable[ValidationRule],
    flags: Iterable[str] = (),
) -> ParsedInvocation:
    violations = validate(invocation, rules, flags)
    if violations:
        raise AlpacaCliError(
            ErrorCode.VALIDATION_FAILED,
            "\n".join(violation.message for violation in violations),
            details={"violations": [{"field": v.field, "message": v.message} for v in violations]},
        )
    return invocation
