"""
Decode a raw model reply into a ClassificationResult.

Models often wrap the JSON in a markdown fence (```json ... ```) or add a
sentence around it despite the instruction. We strip one fence pair, and if
that still does not decode, retry on the first balanced {...} block.
"""
import re

from pydantic import ValidationError

from llm_arena.orchestrator.contracts import ClassificationResult
from llm_arena.orchestrator.errors import DecodeError

FENCE = "```"
_OPENING_FENCE = re.compile(r"^```[\w+-]*")


def strip_fences(raw: str) -> str:
    text = raw.strip()
    if text.startswith(FENCE):
        text = _OPENING_FENCE.sub("", text, count=1)
    if text.endswith(FENCE):
        text = text[: -len(FENCE)]
    return text.strip()


def extract_object(text: str) -> str | None:
    """Return the first balanced {...} block of text, or None."""
    start = text.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def parse(raw: str) -> ClassificationResult:
    text = strip_fences(raw)
    try:
        return ClassificationResult.model_validate_json(text)
    except ValidationError as first:
        candidate = extract_object(text)
        if candidate is None or candidate == text:
            raise DecodeError(raw, reason=_reason(first)) from first
        try:
            return ClassificationResult.model_validate_json(candidate)
        except ValidationError as e:
            raise DecodeError(raw, reason=_reason(e)) from e


def _reason(e: ValidationError) -> str:
    errs = e.errors()
    if not errs:
        return "invalid reply"
    first = errs[0]
    loc = ".".join(str(p) for p in first.get("loc", ())) or "reply"
    return f"{loc}: {first.get('msg', 'invalid')}"
