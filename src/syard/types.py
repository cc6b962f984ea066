# -----------------------------------------------------------------------------
# Types module: Shared dataclasses for the trace engine
# Purpose:
#   Define structured representations for tokens, token locations, recorded
#   snapshots and run results used across the tokenizer, engine and views.
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Mapping, Optional, Tuple

ConversionMode = Literal["POSTFIX", "PREFIX"]
MODES: Tuple[str, ...] = ("POSTFIX", "PREFIX")


class TokenKind(str, Enum):
    OPERAND = "OPERAND"
    OPERATOR = "OPERATOR"
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"


class Zone(str, Enum):
    INPUT = "INPUT"
    STACK = "STACK"
    OUTPUT = "OUTPUT"
    DISCARDED = "DISCARDED"


@dataclass(frozen=True)
class Token:
    """
    One lexical unit of the expression.
    Example:
        id: "t-2-*"
        value: "*"
        kind: TokenKind.OPERATOR
        precedence: 2
    Attributes:
        - id: built from (position, value); stable for the whole trace
        - precedence: 0 for operands and parentheses
    """
    id: str
    value: str
    kind: TokenKind
    precedence: int = 0

    @property
    def right_associative(self) -> bool:
        return self.value == "^"


@dataclass(frozen=True)
class Location:
    """
    Where a token sits at one instant.
    - zone: INPUT | STACK | OUTPUT | DISCARDED
    - position: index within the zone (stack depth, emission order, read order);
      always 0 for DISCARDED
    """
    zone: Zone
    position: int = 0


@dataclass(frozen=True)
class Step:
    """
    Immutable snapshot of the whole system after one algorithmic event.
    `locations` is a read-only copy taken at record time.
    """
    index: int
    title: str
    detail: str
    locations: Mapping[str, Location]
    active_token_id: Optional[str] = None

    def location_of(self, token_id: str) -> Location:
        return self.locations[token_id]


@dataclass(frozen=True)
class RunResult:
    # Owned by the caller once returned; the engine keeps no reference to it.
    tokens: Tuple[Token, ...]
    steps: Tuple[Step, ...]
    mode: ConversionMode
