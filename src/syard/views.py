# -----------------------------------------------------------------------------
# Read-only views over a RunResult
# Purpose:
#   Helpers for presentation code that replays a trace: which tokens sit in
#   each zone at a step, the running output string, the canonical notation of
#   the finished run, and a JSON-friendly export. Nothing here re-enters the
#   engine or mutates a result.
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .direction import direction_for
from .tracer import step_to_dict
from .types import RunResult, Token, Zone


@dataclass(frozen=True)
class SnapshotView:
    # Zone contents at one step, each ordered by position.
    step_index: int
    title: str
    detail: str
    input: Tuple[Token, ...]
    stack: Tuple[Token, ...]
    output: Tuple[Token, ...]
    discarded: Tuple[Token, ...]
    active: Optional[Token]

    @property
    def output_text(self) -> str:
        return " ".join(t.value for t in self.output)


def zone_tokens(result: RunResult, step_index: int, zone: Zone) -> Tuple[Token, ...]:
    """Tokens in `zone` at `steps[step_index]`, ordered by position."""
    locations = result.steps[step_index].locations
    members = [t for t in result.tokens if locations[t.id].zone is zone]
    members.sort(key=lambda t: locations[t.id].position)
    return tuple(members)


def snapshot_view(result: RunResult, step_index: int) -> SnapshotView:
    step = result.steps[step_index]
    by_id = {t.id: t for t in result.tokens}
    return SnapshotView(
        step_index=step.index,
        title=step.title,
        detail=step.detail,
        input=zone_tokens(result, step_index, Zone.INPUT),
        stack=zone_tokens(result, step_index, Zone.STACK),
        output=zone_tokens(result, step_index, Zone.OUTPUT),
        discarded=zone_tokens(result, step_index, Zone.DISCARDED),
        active=by_id.get(step.active_token_id) if step.active_token_id else None,
    )


def output_tokens(result: RunResult) -> Tuple[Token, ...]:
    """OUTPUT zone of the final step in emission order (reversed prefix for PREFIX)."""
    return zone_tokens(result, len(result.steps) - 1, Zone.OUTPUT)


def notation(result: RunResult) -> str:
    """
    Canonical postfix or prefix string of a finished run.
    For PREFIX runs this is where the output reversal happens.
    """
    values = [t.value for t in output_tokens(result)]
    return " ".join(direction_for(result.mode).canonical(values))


def result_to_dict(result: RunResult) -> Dict[str, Any]:
    tokens: List[Dict[str, Any]] = [
        {"id": t.id, "value": t.value, "kind": t.kind.value, "precedence": t.precedence}
        for t in result.tokens
    ]
    return {
        "mode": result.mode,
        "notation": notation(result),
        "tokens": tokens,
        "steps": [step_to_dict(s) for s in result.steps],
    }
