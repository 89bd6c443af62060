from llm_arena.orchestrator.contracts import ClassificationResult, schema_description
from llm_arena.orchestrator import parser

_INSTRUCTION = (
    "You classify the user's description of a shape. "
    "Decide whether the description asks for a shape, which shape it is, "
    "and how many of it are wanted. If it does not describe a shape, set "
    "valid to false, shape to \"None\" and explain why in error.\n\n"
    "Respond ONLY with a JSON object following this JSON schema, with no "
    "markdown, no extra keys and no commentary:\n"
)


def build_instruction() -> str:
    return _INSTRUCTION + schema_description()


class ShapeClassifier:
    """One schema-constrained round trip per call, no retries."""

    def __init__(self, llm, status_store, debug: bool = False):
        self.llm = llm
        self.status = status_store
        self.debug = debug

    async def classify(self, prompt: str) -> ClassificationResult:
        """Raises RequestError if the call fails, DecodeError if the reply is off-schema."""
        self.status.log(f"classifier: start ({self.llm.name})")
        raw = await self.llm.complete(build_instruction(), prompt)
        if self.debug:
            self.status.log(f"classifier: raw reply {raw!r}")
        result = parser.parse(raw)
        self.status.log(f"classifier: shape={result.shape.value} count={result.count} valid={result.valid}")
        return result
