# -----------------------------------------------------------------------------
# Conversion directions
# Purpose:
#   Bundle everything that differs between postfix and prefix conversion into
#   one small policy object, so the engine runs a single pop/push loop:
#     • pre-transform of the raw literal sequence (prefix: reverse + swap parens)
#     • equal-precedence tie rule (prefix inverts it)
#     • start-step wording
#   The output queue is never reversed here; see `canonical`.
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

from .types import MODES, Token

_PAREN_SWAP = {"(": ")", ")": "("}


def _identity(literals: Sequence[str]) -> List[str]:
    return list(literals)


def _reverse_and_swap(literals: Sequence[str]) -> List[str]:
    return [_PAREN_SWAP.get(lit, lit) for lit in reversed(literals)]


def _pop_on_tie_left(incoming: Token) -> bool:
    # left-to-right scan: equal precedence pops unless incoming is right-assoc
    return not incoming.right_associative


def _pop_on_tie_right(incoming: Token) -> bool:
    # reversed scan: equal precedence pops only for right-assoc incoming (^)
    return incoming.right_associative


@dataclass(frozen=True)
class Direction:
    mode: str
    prepare: Callable[[Sequence[str]], List[str]]
    pop_on_tie: Callable[[Token], bool]
    start_title: str
    start_detail: str
    reverse_output: bool = False

    def should_pop(self, top: Token, incoming: Token) -> bool:
        """Decide whether `top` leaves the stack before `incoming` is pushed."""
        if top.precedence > incoming.precedence:
            return True
        return top.precedence == incoming.precedence and self.pop_on_tie(incoming)

    def canonical(self, output_values: Sequence[str]) -> List[str]:
        """
        Order the engine's OUTPUT values into the canonical notation.
        The engine leaves prefix output in scan order; callers reverse it here.
        """
        return list(reversed(output_values)) if self.reverse_output else list(output_values)


POSTFIX = Direction(
    mode="POSTFIX",
    prepare=_identity,
    pop_on_tie=_pop_on_tie_left,
    start_title="Start",
    start_detail="Ready to process the expression.",
)

PREFIX = Direction(
    mode="PREFIX",
    prepare=_reverse_and_swap,
    pop_on_tie=_pop_on_tie_right,
    start_title="Start (Prefix Mode)",
    start_detail="Reversed input and swapped parentheses. Reading from right to left.",
    reverse_output=True,
)

DIRECTIONS: Dict[str, Direction] = {"POSTFIX": POSTFIX, "PREFIX": PREFIX}


def direction_for(mode: str) -> Direction:
    if mode not in DIRECTIONS:
        raise ValueError(f"Unknown conversion mode: {mode!r} (expected one of {', '.join(MODES)})")
    return DIRECTIONS[mode]
