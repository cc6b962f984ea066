from __future__ import annotations
import logging
import os
from typing import Optional
from openai import OpenAI
from .models import ExplainRequest, Explanation

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a patient tutor explaining the Shunting-yard algorithm to a computer "
    "science student. Explain why the given step happens right now. "
    "Focus on operator precedence, associativity or stack rules. "
    "Never evaluate the expression. Keep it under 3 sentences."
)

MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

_client: OpenAI | None = None

def _client_instance() -> Optional[OpenAI]:
    global _client
    if _client is None and os.getenv("OPENAI_API_KEY"):
        _client = OpenAI()
    return _client

def build_prompt(req: ExplainRequest) -> str:
    return (
        f"I am visualizing the Shunting-yard algorithm ({req.mode.lower()} conversion) "
        f"for the expression: \"{req.expression}\".\n"
        f"Current step #{req.step_index}: {req.step_title}.\n"
        f"Algorithm note: {req.step_detail}."
    )

def explain_step(expression: str, step_title: str, step_detail: str,
                 step_index: int = 0, mode: str = "POSTFIX") -> Explanation:
    """
    Best-effort commentary for one step. Never raises: a missing API key or any
    client failure comes back as ok=False with the reason in `error`.
    """
    req = ExplainRequest(expression=expression, step_index=step_index,
                         step_title=step_title, step_detail=step_detail, mode=mode)
    client = _client_instance()
    if client is None:
        return Explanation(ok=False, step_index=step_index, error="OPENAI_API_KEY not set.")
    try:
        resp = client.chat.completions.create(
            model=MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(req)},
            ],
            temperature=0,
        )
        text = (resp.choices[0].message.content or "").strip()
    except Exception as e:
        # Commentary is optional; report the failure instead of propagating it.
        logger.warning("Explanation request failed for step %d: %s", step_index, e)
        return Explanation(ok=False, step_index=step_index, model=MODEL,
                           error=f"Failed to fetch AI explanation: {e}")
    if not text:
        return Explanation(ok=False, step_index=step_index, model=MODEL, error="Empty completion text.")
    return Explanation(ok=True, step_index=step_index, text=text, model=MODEL)
