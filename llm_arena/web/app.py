from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from pathlib import Path

from llm_arena.services.api import app as api_app, runtime

root = Path(__file__).resolve().parent


# the mounted API app's own lifespan never runs, so this one owns the loop
@asynccontextmanager
async def lifespan(_app: FastAPI):
    runtime.start()
    yield
    runtime.stop()


app = FastAPI(title="llm-arena web", lifespan=lifespan)


# "/" must be registered BEFORE the catch-all mount("") or it gets intercepted
@app.get("/", response_class=HTMLResponse)
def index():
    return (root / "templates" / "index.html").read_text(encoding="utf-8")

# mount API sub-app last — catch-all prefix "" would shadow routes above it
app.mount("", api_app)
