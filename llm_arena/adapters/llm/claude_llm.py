"""
Anthropic Messages API adapter.

Requires ANTHROPIC_API_KEY in environment (llm_arena/.env or system env).
CLAUDE_MODEL overrides the model. SDK retries are disabled: a failed call
surfaces immediately as RequestError.
"""
import os
import anthropic
from llm_arena.adapters.llm.base import LLMAdapter
from llm_arena.orchestrator.errors import RequestError

DEFAULT_MODEL = "claude-haiku-4-5-20251001"


class ClaudeLLM(LLMAdapter):
    name = "claude"

    def __init__(self, status_store, api_key: str | None = None, model: str | None = None,
                 timeout: float = 30.0, max_tokens: int = 256):
        self.status = status_store
        self.model = model or os.getenv("CLAUDE_MODEL") or DEFAULT_MODEL
        self.max_tokens = max_tokens
        self._client = None
        api_key = api_key if api_key is not None else os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            self.status.log("claude_llm: ANTHROPIC_API_KEY not set")
            return
        self._client = anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)
        self.status.log(f"claude_llm: ready ({self.model})")

    @property
    def ready(self) -> bool:
        return self._client is not None

    async def complete(self, instruction: str, prompt: str) -> str:
        if self._client is None:
            raise RequestError("ANTHROPIC_API_KEY not set")
        try:
            message = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=instruction,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            self.status.log(f"claude_llm: API error: {e}")
            raise RequestError(str(e)) from e

        return "".join(block.text for block in message.content if block.type == "text")
