import threading

from llm_arena.orchestrator.contracts import ClassificationOutcome, ClassificationResult, ShapeKind
from llm_arena.orchestrator.errors import RequestError
from llm_arena.services.status_store import MAX_LOGS, ResultStore


def _outcome(n: int) -> ClassificationOutcome:
    return ClassificationOutcome.success(
        ClassificationResult(valid=True, error="", shape=ShapeKind.CIRCLE, count=n)
    )


def test_empty_until_first_write(store):
    assert store.read() is None
    assert store.read() is None


def test_write_overwrites_unconditionally(store):
    first = _outcome(1)
    store.write(first)
    assert store.read() is first

    failure = ClassificationOutcome.failure(RequestError("down"))
    store.write(failure)
    assert store.read() is failure


def test_concurrent_writers_never_tear(store):
    written = [_outcome(n) for n in range(200)]
    seen = []
    stop = threading.Event()

    def writer(chunk):
        for o in chunk:
            store.write(o)

    def reader():
        while not stop.is_set():
            seen.append(store.read())

    r = threading.Thread(target=reader)
    r.start()
    writers = [threading.Thread(target=writer, args=(written[i::4],)) for i in range(4)]
    for w in writers:
        w.start()
    for w in writers:
        w.join()
    stop.set()
    r.join()

    ids = {id(o) for o in written}
    assert all(o is None or id(o) in ids for o in seen)
    assert store.read() in written


def test_try_claim_is_exclusive(store):
    assert store.try_claim("three circles")
    assert store.busy
    assert store.last_prompt == "three circles"
    assert not store.try_claim("two squares")
    store.set_busy(False)
    assert store.try_claim("two squares")


def test_logs_are_bounded(store):
    for i in range(MAX_LOGS + 50):
        store.log(f"line {i}")
    logs = store.log_snapshot()
    assert len(logs) == MAX_LOGS
    assert logs[-1] == f"line {MAX_LOGS + 49}"
