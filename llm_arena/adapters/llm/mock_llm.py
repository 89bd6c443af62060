import asyncio
import json
import re
from llm_arena.adapters.llm.base import LLMAdapter
from llm_arena.orchestrator.errors import RequestError

_SHAPES = ["Circle", "Square", "Triangle"]
_NUMBER_WORDS = {"one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
                 "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10}


def keyword_reply(prompt: str) -> str:
    """Fenced JSON reply guessed from shape keywords and the first number in prompt."""
    text = prompt.lower()
    shape = next((s for s in _SHAPES if s.lower() in text), None)
    if shape is None:
        body = {"valid": False, "error": "no shape described", "shape": "None", "count": 0}
    else:
        m = re.search(r"-?\d+", text)
        if m:
            count = int(m.group())
        else:
            count = next((n for w, n in _NUMBER_WORDS.items() if re.search(rf"\b{w}\b", text)), 1)
        body = {"valid": True, "error": "", "shape": shape, "count": count}
    return "```json\n" + json.dumps(body) + "\n```"


class MockLLM(LLMAdapter):
    """Offline stand-in: canned reply if given, keyword guess otherwise."""

    name = "mock"

    def __init__(self, status_store, reply: str | None = None, delay_s: float = 0.0, fail: bool = False):
        self.status = status_store
        self.reply = reply
        self.delay_s = delay_s
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    async def complete(self, instruction: str, prompt: str) -> str:
        self.calls.append((instruction, prompt))
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.fail:
            self.status.log("mock_llm: simulated endpoint failure")
            raise RequestError("mock endpoint unreachable")
        raw = self.reply if self.reply is not None else keyword_reply(prompt)
        self.status.log(f"mock_llm: {len(raw)} chars")
        return raw
