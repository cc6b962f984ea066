# --- Shunting-yard Trace API (FastAPI) ----------------------------------------
# Purpose: Minimal API that (1) converts an infix expression into postfix or
# prefix form with a full step trace, and (2) optionally asks an LLM to comment
# on one step of that trace.
# ------------------------------------------------------------------------------

from __future__ import annotations
import os
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional
from syard.direction import direction_for
from syard.engine import MismatchedParenthesesError, run
from syard.logging_config import configure_from_env
from syard.views import result_to_dict
from assistant.explain import explain_step
from assistant.models import Mode

# Load .env for external configuration (API key, model, default mode, logging)
load_dotenv()
DEFAULT_MODE = os.getenv("SYARD_DEFAULT_MODE", "POSTFIX")
direction_for(DEFAULT_MODE)  # a bad setting fails at startup, not per request
configure_from_env()

_PAREN_SWAP = {"(": ")", ")": "("}


def _user_input_error(e: MismatchedParenthesesError, mode: str) -> dict:
    """
    Error envelope for invalid expressions: reported, never a server fault.
    `missing` is the paren the conversion loop lacked; prefix mode scans the
    reversed, paren-swapped input, so `missing_in_expression` maps it back to
    the paren absent from what the user typed.
    """
    typed = _PAREN_SWAP[e.missing] if mode == "PREFIX" else e.missing
    return {
        "ok": False,
        "error": f"Mismatched parentheses: missing '{typed}'",
        "error_kind": "user_input",
        "missing": e.missing,
        "missing_in_expression": typed,
    }

# FastAPI app with two main endpoints: /convert and /explain
app = FastAPI(title="Shunting-yard Trace API")

# ----------------------------- Schemas ----------------------------------------
class ConvertRequest(BaseModel):
    expression: str
    mode: Optional[Mode] = None

class ExplainStepRequest(ConvertRequest):
    # /explain re-runs the conversion and comments on one step of it.
    step_index: int

# ----------------------------- Routes -----------------------------------------
@app.get("/health")
def health(): return {"ok": True}

@app.post("/convert")
def convert(req: ConvertRequest):
    """
    Run the trace engine and return tokens, every step snapshot and the
    canonical notation (prefix output already reversed for PREFIX mode).
    """
    try:
        mode = req.mode or DEFAULT_MODE
        result = run(req.expression, mode)
    except MismatchedParenthesesError as e:
        return _user_input_error(e, mode)
    return {"ok": True, **result_to_dict(result)}

@app.post("/explain")
def explain(req: ExplainStepRequest):
    """
    Advisory path: the explanation never changes the conversion result and
    its failures are returned in the payload rather than raised.
    """
    mode = req.mode or DEFAULT_MODE
    try:
        result = run(req.expression, mode)
    except MismatchedParenthesesError as e:
        return _user_input_error(e, mode)
    if not 0 <= req.step_index < len(result.steps):
        raise HTTPException(status_code=404, detail=f"Step {req.step_index} out of range (0..{len(result.steps) - 1}).")
    step = result.steps[req.step_index]
    explanation = explain_step(req.expression, step.title, step.detail, step.index, mode)
    return {
        "ok": explanation.ok,
        "step": {"index": step.index, "title": step.title, "detail": step.detail},
        "explanation": explanation.model_dump(),
    }
