import asyncio
import threading
import time
from concurrent.futures import Future
from llm_arena.orchestrator.contracts import ClassificationOutcome
from llm_arena.orchestrator.errors import ClassificationError, RequestError


class ClassificationRuntime:
    """One asyncio loop on a daemon thread, alive for the whole app."""

    def __init__(self):
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name="classification-loop", daemon=True)
        self._thread.start()

    def _run(self):
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()
        self._loop.close()

    def submit(self, coro) -> Future:
        if not self.running:
            coro.close()
            raise RuntimeError("classification runtime is not running")
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    async def _cancel_pending(self):
        tasks = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def stop(self, timeout: float = 5.0):
        if not self.running:
            return
        # cancelled tasks run their finally blocks, releasing the busy flag
        asyncio.run_coroutine_threadsafe(self._cancel_pending(), self._loop).result(timeout)
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout)
        self._thread = None


class Dispatcher:
    """
    Turns a UI trigger into a classification task on the runtime loop.

    Policy: a trigger that arrives while a classification is in flight is
    ignored; empty prompts are ignored too. Each accepted trigger writes
    exactly one outcome to the store.
    """

    def __init__(self, classifier, status_store, runtime: ClassificationRuntime):
        self.classifier = classifier
        self.status = status_store
        self.runtime = runtime

    def is_busy(self) -> bool:
        return self.status.busy

    def trigger(self, prompt: str) -> Future | None:
        prompt = str(prompt)
        if not prompt.strip():
            self.status.log("dispatch: empty prompt ignored")
            return None
        if not self.status.try_claim(prompt):
            self.status.log("dispatch: rejected, classification in flight")
            return None
        try:
            return self.runtime.submit(self._run(prompt))
        except RuntimeError:
            self.status.set_busy(False)
            raise

    def poll_result(self) -> ClassificationOutcome | None:
        return self.status.read()

    async def _run(self, prompt: str) -> ClassificationOutcome:
        t0 = time.time()
        try:
            try:
                result = await self.classifier.classify(prompt)
                outcome = ClassificationOutcome.success(result)
            except ClassificationError as e:
                outcome = ClassificationOutcome.failure(e)
            except Exception as e:
                # adapter bug or unexpected SDK error: still the request failed
                outcome = ClassificationOutcome.failure(RequestError(f"{type(e).__name__}: {e}"))
            self.status.write(outcome)
            dt = int((time.time() - t0) * 1000)
            if outcome.ok:
                self.status.log(f"dispatch: done dt={dt}ms")
            else:
                self.status.log(f"dispatch: failed {outcome.error.code} dt={dt}ms: {outcome.error}")
            return outcome
        finally:
            self.status.set_busy(False)
