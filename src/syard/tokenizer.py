# -----------------------------------------------------------------------------
# Tokenizer
# Purpose:
#   Turn a raw infix expression into an ordered tuple of typed, uniquely
#   identified tokens. Operands are maximal runs of letters, digits and '.';
#   each of + - * / ^ ( ) is a token; everything else (whitespace included)
#   is skipped. Never raises: unrecognizable input yields no tokens.
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import re
from typing import List, Tuple

from .direction import direction_for
from .types import Token, TokenKind

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[A-Za-z0-9.]+|[-+*/^()]")

# Fixed precedence table; anything absent ranks 0
PRECEDENCE = {"^": 3, "*": 2, "/": 2, "+": 1, "-": 1}

_KINDS = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    **{op: TokenKind.OPERATOR for op in PRECEDENCE},
}


def lex(expression: str) -> List[str]:
    """Return the raw literal sequence, left to right."""
    return _TOKEN_RE.findall(expression or "")


def make_token(position: int, value: str) -> Token:
    return Token(
        id=f"t-{position}-{value}",
        value=value,
        kind=_KINDS.get(value, TokenKind.OPERAND),
        precedence=PRECEDENCE.get(value, 0),
    )


def tokenize(expression: str, mode: str = "POSTFIX") -> Tuple[Token, ...]:
    """
    Tokenize `expression` for the given conversion mode.

    Ids are assigned after the direction's pre-transform (prefix mode reverses
    the sequence and swaps parentheses), so they follow the displayed order.
    Identical input always yields identical ids.
    """
    literals = direction_for(mode).prepare(lex(expression))
    tokens = tuple(make_token(i, lit) for i, lit in enumerate(literals))
    logger.debug("Tokenized %r (%s) into %d tokens", expression, mode, len(tokens))
    return tokens
