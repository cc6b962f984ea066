# -----------------------------------------------------------------------------
# Trace Engine: Shunting-yard conversion with a replayable step trace
# Responsibilities:
#   • Run the Shunting-yard loop over tokenized input (postfix or prefix)
#   • Track every token's zone/position in a side table (id → Location)
#   • Renumber all members of a zone whenever that zone changes
#   • Record an immutable snapshot after every discrete event
#   • Fail atomically on mismatched parentheses (no partial trace escapes)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
from collections import deque
from typing import Dict, List, Optional, Sequence

from .direction import Direction, direction_for
from .tokenizer import tokenize
from .tracer import Tracer
from .types import Location, RunResult, Token, TokenKind, Zone

logger = logging.getLogger(__name__)


class MismatchedParenthesesError(Exception):
    """Invalid input: a parenthesis has no partner. `missing` is '(' or ')'."""

    def __init__(self, missing: str):
        self.missing = missing
        super().__init__(f"missing '{missing}'")


class TraceEngine:
    """
    One conversion run. All state lives on the instance and is discarded with
    it; `run()` builds a fresh engine per call.
    """

    def __init__(self, tokens: Sequence[Token], direction: Direction):
        self.tokens = tuple(tokens)
        self.direction = direction
        self.tracer = Tracer()
        self.stack: List[Token] = []
        self.output: List[Token] = []
        self.pending = deque(self.tokens)  # tokens still in INPUT, in read order
        self.locations: Dict[str, Location] = {
            t.id: Location(Zone.INPUT, i) for i, t in enumerate(self.tokens)
        }

    # ---------------- zone bookkeeping ----------------

    def _renumber(self, zone: Zone, members: Sequence[Token]) -> None:
        for i, t in enumerate(members):
            self.locations[t.id] = Location(zone, i)

    def _take_from_input(self) -> None:
        # Tokens leave INPUT in read order; the rest shift down one slot.
        self.pending.popleft()
        self._renumber(Zone.INPUT, self.pending)

    def _record(self, title: str, detail: str, active: Optional[Token] = None) -> None:
        self.tracer.record(title, detail, self.locations, active.id if active else None)

    # ---------------- moves ----------------

    def _emit(self, token: Token) -> None:
        self.output.append(token)
        self.locations[token.id] = Location(Zone.OUTPUT, len(self.output) - 1)

    def _push(self, token: Token) -> None:
        self._take_from_input()
        self.stack.append(token)
        self._renumber(Zone.STACK, self.stack)

    def _pop_to_output(self, detail: str) -> Token:
        """Pop the stack top to OUTPUT, renumber the stack and record the move."""
        popped = self.stack.pop()
        self._emit(popped)
        self._renumber(Zone.STACK, self.stack)
        self._record(f"Pop {popped.value} to Output", detail, popped)
        return popped

    # ---------------- token handlers ----------------

    def _operand(self, token: Token) -> None:
        self._take_from_input()
        self._emit(token)
        self._record(f"Move {token.value} to Output", "Operands go directly to the result.", token)

    def _left_paren(self, token: Token) -> None:
        self._push(token)
        self._record(f"Push {token.value} to Stack", "Parentheses wait in the stack until closed.", token)

    def _right_paren(self, token: Token) -> None:
        while self.stack:
            top = self.stack[-1]
            if top.kind is TokenKind.LEFT_PAREN:
                self.stack.pop()
                self._renumber(Zone.STACK, self.stack)
                self._take_from_input()
                self.locations[top.id] = Location(Zone.DISCARDED, 0)
                self.locations[token.id] = Location(Zone.DISCARDED, 0)
                self._record("Discard Parentheses", "Matching pair found. Both are discarded.", token)
                return
            self._pop_to_output(f"Inside parentheses, pop '{top.value}' to output.")
        raise MismatchedParenthesesError("(")

    def _operator(self, token: Token) -> None:
        while self.stack:
            top = self.stack[-1]
            if top.kind is TokenKind.LEFT_PAREN or not self.direction.should_pop(top, token):
                break
            self._pop_to_output(f"'{top.value}' has priority/associativity to precede '{token.value}'.")
        self._push(token)
        self._record(f"Push {token.value} to Stack", f"Push '{token.value}' to stack.", token)

    # ---------------- main loop ----------------

    def run(self) -> RunResult:
        handlers = {
            TokenKind.OPERAND: self._operand,
            TokenKind.LEFT_PAREN: self._left_paren,
            TokenKind.RIGHT_PAREN: self._right_paren,
            TokenKind.OPERATOR: self._operator,
        }
        self._record(self.direction.start_title, self.direction.start_detail)

        for token in self.tokens:
            self._record(f"Read {token.value}", f"Processing token '{token.value}'.", token)
            handlers[token.kind](token)

        while self.stack:
            if self.stack[-1].kind is TokenKind.LEFT_PAREN:
                raise MismatchedParenthesesError(")")
            self._pop_to_output(f"Expression end. Pop remaining '{self.stack[-1].value}'.")

        self._record("Finished", "Conversion complete.")
        return RunResult(tokens=self.tokens, steps=self.tracer.steps(), mode=self.direction.mode)


def run(expression: str, mode: str = "POSTFIX") -> RunResult:
    """
    Convert `expression` and return its full trace.

    Parameters
    ----------
    expression : str
        Infix expression, e.g. "A + B * C - ( D / E )"
    mode : str
        "POSTFIX" (default) or "PREFIX".

    Returns
    -------
    RunResult
        tokens, steps and mode. In PREFIX mode the OUTPUT zone holds the
        prefix form in reverse; `views.notation` applies the reversal.

    Raises
    ------
    MismatchedParenthesesError
        If a ')' has no opening partner or a '(' is never closed.
    ValueError
        For an unknown mode.
    """
    direction = direction_for(mode)
    tokens = tokenize(expression, mode)
    try:
        result = TraceEngine(tokens, direction).run()
    except MismatchedParenthesesError as e:
        logger.info("Rejected %r (%s): %s", expression, mode, e)
        raise
    logger.debug("Converted %r (%s): %d tokens, %d steps",
                 expression, mode, len(result.tokens), len(result.steps))
    return result
