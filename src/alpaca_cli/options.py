"""Per-command option declarations and validation rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from alpaca_cli._common import CLIState
    from alpaca_cli.parser import ParsedInvocation


class OptionType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class OptionDeclaration:
    flag: str
    type: OptionType = OptionType.STRING
    default: Any = None


@dataclass(frozen=True)
class OneOf:
    """Value must exactly match one of ``allowed``."""

    field: str
    allowed: tuple[str, ...]
    required: bool = False


@dataclass(frozen=True)
class TypeCheck:
    field: str
    type: OptionType
    required: bool = False


@dataclass(frozen=True)
class RequiredWhen:
    """``field`` must be present whenever ``when_field`` holds one of ``when_values``."""

    field: str
    when_field: str
    when_values: tuple[str, ...]
    required: bool = False


@dataclass(frozen=True)
class OptionalPassthrough:
    field: str
    required: bool = False


ValidationRule = Union[OneOf, TypeCheck, RequiredWhen, OptionalPassthrough]
Handler = Callable[["ParsedInvocation", "CLIState"], None]


@dataclass(frozen=True)
class CommandSpec:
    name: str
    options: tuple[OptionDeclaration, ...]
    rules: tuple[ValidationRule, ...] | None
    handler: Handler

    def __post_init__(self) -> None:
        if self.rules is None:
            return
        declared = {option.flag for option in self.options}
        referenced = [rule.field for rule in self.rules]
        referenced += [rule.when_field for rule in self.rules if isinstance(rule, RequiredWhen)]
        unknown = [field for field in referenced if field not in declared]
        if unknown:
            raise ValueError(f"{self.name}: rules reference undeclared flags: {', '.join(unknown)}")

    @property
    def flags(self) -> set[str]:
        return {option.flag for option in self.options}


ORDER_TYPES = ("market", "limit", "stop", "stop_limit")
TIME_IN_FORCE = ("day", "gtc", "opg", "ioc")
CONFIG_MODES = ("paper", "live")

ORDER_OPTIONS: tuple[OptionDeclaration, ...] = (
    OptionDeclaration("type", OptionType.STRING, default="market"),
    OptionDeclaration("time-in-force", OptionType.STRING, default="gtc"),
    OptionDeclaration("limit-price", OptionType.NUMBER),
    OptionDeclaration("stop-price", OptionType.NUMBER),
    OptionDeclaration("client-order-id", OptionType.STRING),
)

ORDER_RULES: tuple[ValidationRule, ...] = (
    OneOf("type", ORDER_TYPES, required=True),
    OneOf("time-in-force", TIME_IN_FORCE, required=True),
    TypeCheck("limit-price", OptionType.NUMBER),
    TypeCheck("stop-price", OptionType.NUMBER),
    RequiredWhen("limit-price", "type", ("limit", "stop_limit")),
    RequiredWhen("stop-price", "type", ("stop", "stop_limit")),
    TypeCheck("client-order-id", OptionType.STRING),
)

CONFIGURE_OPTIONS: tuple[OptionDeclaration, ...] = (
    OptionDeclaration("id"),
    OptionDeclaration("secret"),
    OptionDeclaration("mode"),
    OptionDeclaration("base-url"),
)

CONFIGURE_RULES: tuple[ValidationRule, ...] = (
    TypeCheck("id", OptionType.STRING),
    TypeCheck("secret", OptionType.STRING),
    OneOf("mode", CONFIG_MODES),
    TypeCheck("base-url", OptionType.STRING),
)

NO_OPTIONS: tuple[OptionDeclaration, ...] = ()
