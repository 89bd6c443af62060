from pydantic import BaseModel
from typing import Literal, Optional

from llm_arena.orchestrator.contracts import ClassificationOutcome
from llm_arena.orchestrator.errors import DecodeError

ShapeName = Literal["None", "Circle", "Square", "Triangle"]


class ClassifyRequest(BaseModel):
    prompt: str


class ClassifyResponse(BaseModel):
    ok: bool
    queued: bool = False
    error: Optional[str] = None   # ERR_BUSY | ERR_EMPTY_PROMPT when the trigger was ignored


class ResultOut(BaseModel):
    valid: bool
    error: str
    shape: ShapeName
    count: int


class StatusResponse(BaseModel):
    busy: bool
    has_result: bool = False
    ok: Optional[bool] = None          # None until the first classification completes
    result: Optional[ResultOut] = None
    error_code: Optional[str] = None   # REQUEST_FAILED | DECODE_FAILED
    error: Optional[str] = None
    raw_text: Optional[str] = None     # offending reply, decode failures only
    status_text: str
    logs: list[str]


class HealthResponse(BaseModel):
    api: bool = True
    llm_adapter: str
    llm_ready: bool
    runtime_running: bool
    all_ok: bool


def status_text(outcome: Optional[ClassificationOutcome]) -> str:
    """Display line for the UI: no result / success / failure."""
    if outcome is None:
        return "No result yet"
    if not outcome.ok:
        return f"Error generating level: {outcome.error}"
    r = outcome.result
    if not r.valid:
        return f"Prompt rejected: {r.error or 'no reason given'}"
    return f"Level successfully generated: {r.count} x {r.shape.value}"


def status_response(busy: bool, outcome: Optional[ClassificationOutcome], logs: list[str]) -> StatusResponse:
    if outcome is None:
        return StatusResponse(busy=busy, status_text=status_text(None), logs=logs)
    if outcome.ok:
        r = outcome.result
        return StatusResponse(
            busy=busy,
            has_result=True,
            ok=True,
            result=ResultOut(valid=r.valid, error=r.error, shape=r.shape.value, count=r.count),
            status_text=status_text(outcome),
            logs=logs,
        )
    err = outcome.error
    return StatusResponse(
        busy=busy,
        has_result=True,
        ok=False,
        error_code=err.code,
        error=str(err),
        raw_text=err.raw_text if isinstance(err, DecodeError) else None,
        status_text=status_text(outcome),
        logs=logs,
    )
