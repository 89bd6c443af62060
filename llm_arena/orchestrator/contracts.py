import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from llm_arena.orchestrator.errors import ClassificationError


I32_MIN = -2**31
I32_MAX = 2**31 - 1


class ShapeKind(str, Enum):
    NONE = "None"          # no shape described
    CIRCLE = "Circle"
    SQUARE = "Square"
    TRIANGLE = "Triangle"


class ClassificationResult(BaseModel):
    """Structured reply the model must produce for one prompt."""

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    valid: bool = Field(description="True when the prompt describes a classifiable shape request")
    error: str = Field(description="Why the prompt was rejected; empty when valid is true")
    shape: ShapeKind = Field(description="Shape category named by the prompt")
    count: int = Field(ge=I32_MIN, le=I32_MAX, description="How many of the shape were requested")


def schema_description() -> str:
    """JSON schema of ClassificationResult, used verbatim in the instruction."""
    return json.dumps(ClassificationResult.model_json_schema(), sort_keys=True)


@dataclass(frozen=True)
class ClassificationOutcome:
    # exactly one of result / error is set
    result: Optional[ClassificationResult] = None
    error: Optional[ClassificationError] = None

    def __post_init__(self):
        if (self.result is None) == (self.error is None):
            raise ValueError("outcome needs exactly one of result or error")

    @classmethod
    def success(cls, result: ClassificationResult) -> "ClassificationOutcome":
        return cls(result=result)

    @classmethod
    def failure(cls, error: ClassificationError) -> "ClassificationOutcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
