from __future__ import annotations
from typing import Optional, Literal
from pydantic import BaseModel, Field

Mode = Literal["POSTFIX", "PREFIX"]

class ExplainRequest(BaseModel):
    expression: str
    step_index: int = Field(ge=0)
    step_title: str
    step_detail: str
    mode: Mode = "POSTFIX"

class Explanation(BaseModel):
    ok: bool
    step_index: int
    text: Optional[str] = None
    model: Optional[str] = None
    error: Optional[str] = None
