"""
OpenAI-compatible chat completions adapter.

Works against api.openai.com or any server speaking the same protocol
(local proxies, scripts/fake_llm_server.py). Requires OPENAI_API_KEY in
llm_arena/.env or the environment; OPENAI_BASE_URL and LLM_MODEL override the
endpoint and model.

Uses httpx directly, no SDK.
"""
import os
import httpx
from llm_arena.adapters.llm.base import LLMAdapter
from llm_arena.orchestrator.errors import RequestError

OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"


class OpenAILLM(LLMAdapter):
    name = "openai"

    def __init__(self, status_store, api_key: str | None = None, base_url: str | None = None,
                 model: str | None = None, timeout: float = 30.0, max_tokens: int = 256,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.status = status_store
        self._api_key = api_key if api_key is not None else os.getenv("OPENAI_API_KEY")
        self.base_url = (base_url or os.getenv("OPENAI_BASE_URL") or OPENAI_BASE_URL).rstrip("/")
        self.model = model or os.getenv("LLM_MODEL") or DEFAULT_MODEL
        self.timeout = timeout
        self.max_tokens = max_tokens
        self._transport = transport
        if self.ready:
            self.status.log(f"openai_llm: ready (model={self.model} url={self.base_url} timeout={self.timeout}s)")
        else:
            self.status.log("openai_llm: OPENAI_API_KEY not set")

    @property
    def ready(self) -> bool:
        return bool(self._api_key)

    async def complete(self, instruction: str, prompt: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": instruction},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": 0,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}/chat/completions"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            self.status.log(f"openai_llm: request error {type(e).__name__}: {e}")
            raise RequestError(f"{type(e).__name__}: {e}") from e

        if not resp.is_success:
            self.status.log(f"openai_llm: HTTP {resp.status_code} — {resp.text[:300]}")
            raise RequestError(f"HTTP {resp.status_code} from {url}")

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            self.status.log(f"openai_llm: malformed completion body: {resp.text[:300]}")
            raise RequestError("malformed completion body") from e
        if not isinstance(content, str):
            raise RequestError("completion has no text content")
        return content
