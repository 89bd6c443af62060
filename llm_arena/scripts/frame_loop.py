"""
Synchronous per-frame consumer, the way a game loop uses the pipeline.

Triggers one classification, then ticks at a fixed frame rate, reading the
result store every frame without ever waiting on the network call.

Usage:
  LLM_ADAPTER=mock python -m llm_arena.scripts.frame_loop "three circles"
  python -m llm_arena.scripts.frame_loop --fps 30 --max-seconds 20 "a big square"
"""
import argparse
import os
import sys
import time

from dotenv import load_dotenv

from llm_arena.orchestrator.classifier import ShapeClassifier
from llm_arena.orchestrator.dispatcher import ClassificationRuntime, Dispatcher
from llm_arena.services.models import status_text
from llm_arena.services.status_store import ResultStore
from llm_arena.adapters.llm.mock_llm import MockLLM


def build_llm(status: ResultStore, timeout: float):
    adapter = os.getenv("LLM_ADAPTER", "openai").lower()
    if adapter == "openai":
        from llm_arena.adapters.llm.openai_llm import OpenAILLM
        llm = OpenAILLM(status, timeout=timeout)
    elif adapter == "claude":
        from llm_arena.adapters.llm.claude_llm import ClaudeLLM
        llm = ClaudeLLM(status, timeout=timeout)
    else:
        llm = MockLLM(status, delay_s=0.5)
    if not llm.ready:
        print(f"[frame_loop] {type(llm).__name__} not ready, using MockLLM")
        llm = MockLLM(status, delay_s=0.5)
    return llm


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Poll the classification result every frame")
    ap.add_argument("prompt")
    ap.add_argument("--fps", type=float, default=60.0)
    ap.add_argument("--max-seconds", type=float, default=30.0)
    args = ap.parse_args(argv)

    load_dotenv(dotenv_path="llm_arena/.env", override=False)
    status = ResultStore()
    llm = build_llm(status, timeout=float(os.getenv("LLM_TIMEOUT_S", "30")))
    runtime = ClassificationRuntime()
    runtime.start()
    dispatcher = Dispatcher(ShapeClassifier(llm, status), status, runtime)

    frame_s = 1.0 / args.fps
    frames = 0
    last_line = None
    t0 = time.time()
    try:
        if dispatcher.trigger(args.prompt) is None:
            print("[frame_loop] trigger ignored (empty prompt?)")
            return 1
        while time.time() - t0 < args.max_seconds:
            frames += 1
            line = status_text(dispatcher.poll_result())
            if line != last_line:
                print(f"[frame {frames:5d}] {line}")
                last_line = line
            if not dispatcher.is_busy() and dispatcher.poll_result() is not None:
                break
            time.sleep(frame_s)
        else:
            print(f"[frame_loop] no result after {args.max_seconds:.0f}s")
            return 1
    finally:
        runtime.stop()

    print(f"[frame_loop] {frames} frames rendered while waiting")
    outcome = dispatcher.poll_result()
    return 0 if outcome is not None and outcome.ok else 1


if __name__ == "__main__":
    sys.exit(main())
