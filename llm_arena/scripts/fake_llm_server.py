"""
Fake OpenAI-compatible LLM server for testing OpenAILLM without an API key.

Simulates POST /v1/chat/completions on port 9100. Each request logs, sleeps
briefly (simulating model latency), and answers with fenced JSON guessed from
shape keywords in the user message.

Usage:
    python -m llm_arena.scripts.fake_llm_server
    OPENAI_API_KEY=dummy OPENAI_BASE_URL=http://127.0.0.1:9100/v1 uvicorn llm_arena.web.app:app
"""

import asyncio
import uvicorn
from fastapi import FastAPI, Request

from llm_arena.adapters.llm.mock_llm import keyword_reply

app = FastAPI(title="fake-llm-server")

LATENCY_S = 0.8


@app.post("/v1/chat/completions")
async def chat_completions(request: Request):
    body = await request.json()
    user = next((m["content"] for m in reversed(body.get("messages", [])) if m.get("role") == "user"), "")
    print(f"[llm] model={body.get('model')} prompt={user!r} — thinking for {LATENCY_S:.1f}s ...")
    await asyncio.sleep(LATENCY_S)
    reply = keyword_reply(user)
    print(f"[llm] reply {reply!r}")
    return {
        "id": "chatcmpl-fake",
        "object": "chat.completion",
        "model": body.get("model", "fake"),
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": reply}, "finish_reason": "stop"}
        ],
    }


@app.get("/v1/models")
async def models():
    return {"object": "list", "data": [{"id": "fake", "object": "model"}]}


if __name__ == "__main__":
    print("Fake LLM server starting on http://localhost:9100")
    uvicorn.run(app, host="0.0.0.0", port=9100)
