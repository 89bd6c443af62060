import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from dotenv import load_dotenv
from llm_arena.services.models import (
    ClassifyRequest, ClassifyResponse, StatusResponse, HealthResponse,
    status_response,
)
from llm_arena.services.status_store import ResultStore
from llm_arena.orchestrator import errors
from llm_arena.orchestrator.classifier import ShapeClassifier
from llm_arena.orchestrator.dispatcher import ClassificationRuntime, Dispatcher
from llm_arena.adapters.llm.mock_llm import MockLLM

load_dotenv(dotenv_path="llm_arena/.env", override=False)


# runtime is also started at import: lifespan does not run when this app is mounted
@asynccontextmanager
async def lifespan(_app: FastAPI):
    runtime.start()
    yield
    runtime.stop()


app = FastAPI(title="llm-arena shape classifier", lifespan=lifespan)

status = ResultStore()

llm_timeout = float(os.getenv("LLM_TIMEOUT_S", "30"))
llm_max_tokens = int(os.getenv("LLM_MAX_TOKENS", "256"))
llm_debug = os.getenv("LLM_DEBUG", "0") == "1"

# LLM adapter: controlled by LLM_ADAPTER env var
# Values: openai | claude | mock  (default: openai)
_llm_adapter = os.getenv("LLM_ADAPTER", "openai").lower()

if _llm_adapter == "openai":
    from llm_arena.adapters.llm.openai_llm import OpenAILLM
    llm = OpenAILLM(status, timeout=llm_timeout, max_tokens=llm_max_tokens)
elif _llm_adapter == "claude":
    from llm_arena.adapters.llm.claude_llm import ClaudeLLM
    llm = ClaudeLLM(status, timeout=llm_timeout, max_tokens=llm_max_tokens)
else:
    llm = MockLLM(status)

if not llm.ready:
    status.log(f"llm: {type(llm).__name__} not ready, falling back to mock")
    llm = MockLLM(status)

status.log(f"llm adapter: {type(llm).__name__}")

classifier = ShapeClassifier(llm, status, debug=llm_debug)
runtime = ClassificationRuntime()
runtime.start()
dispatcher = Dispatcher(classifier, status, runtime)


@app.get("/status", response_model=StatusResponse)
def get_status():
    # single snapshot per poll; the outcome may change right after
    return status_response(status.busy, dispatcher.poll_result(), status.log_snapshot())


@app.post("/classify", response_model=ClassifyResponse)
def classify(req: ClassifyRequest):
    if not req.prompt.strip():
        return ClassifyResponse(ok=False, error=errors.ERR_EMPTY_PROMPT)
    try:
        queued = dispatcher.trigger(req.prompt)
    except RuntimeError as e:
        status.log(f"CLASSIFY rejected: {e}")
        return ClassifyResponse(ok=False, error=errors.ERR_RUNTIME_STOPPED)
    if queued is None:
        return ClassifyResponse(ok=False, error=errors.ERR_BUSY)
    status.log(f"CLASSIFY queued: {req.prompt[:80]!r}")
    return ClassifyResponse(ok=True, queued=True)


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        llm_adapter=type(llm).__name__,
        llm_ready=llm.ready,
        runtime_running=runtime.running,
        all_ok=llm.ready and runtime.running,
    )
