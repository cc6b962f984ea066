# -----------------------------------------------------------------------------
# Tracing utility
# Purpose:
#   Append-only snapshot recorder. Each record freezes a copy of the current
#   token locations so later moves never alter an earlier step. Produces both
#   Step objects and a JSON-friendly list for API responses.
# -----------------------------------------------------------------------------

from __future__ import annotations
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .types import Location, Step


class Tracer:
    def __init__(self): self._steps: List[Step] = []

    def record(self, title: str, detail: str, locations: Mapping[str, Location],
               active_token_id: Optional[str] = None) -> Step:
        # Location values are frozen, so copying the mapping is a full copy.
        step = Step(
            index=len(self._steps),
            title=title,
            detail=detail,
            locations=MappingProxyType(dict(locations)),
            active_token_id=active_token_id,
        )
        self._steps.append(step)
        return step

    def steps(self) -> Tuple[Step, ...]: return tuple(self._steps)


def step_to_dict(step: Step) -> Dict[str, Any]:
    # Export in plain dict form for easy JSON serialization.
    return {
        "index": step.index,
        "title": step.title,
        "detail": step.detail,
        "active_token_id": step.active_token_id,
        "locations": {
            tid: {"zone": loc.zone.value, "position": loc.position}
            for tid, loc in step.locations.items()
        },
    }
