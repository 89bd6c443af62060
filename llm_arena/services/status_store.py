import threading
from dataclasses import dataclass, field
from typing import Optional, List

from llm_arena.orchestrator.contracts import ClassificationOutcome

MAX_LOGS = 200


@dataclass
class ResultStore:
    """
    Single-slot mailbox between the classification loop (writer) and the
    polling UI (reader). Every access goes through the lock; outcomes are
    immutable, so a reader gets either the old or the new value.
    """
    busy: bool = False
    last_prompt: Optional[str] = None
    logs: List[str] = field(default_factory=list)
    _outcome: Optional[ClassificationOutcome] = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def write(self, outcome: ClassificationOutcome):
        with self._lock:
            self._outcome = outcome

    def read(self) -> Optional[ClassificationOutcome]:
        with self._lock:
            return self._outcome

    def try_claim(self, prompt: str) -> bool:
        """Mark busy unless a classification is already running."""
        with self._lock:
            if self.busy:
                return False
            self.busy = True
            self.last_prompt = prompt
            return True

    def set_busy(self, v: bool):
        with self._lock:
            self.busy = v

    def log(self, msg: str):
        with self._lock:
            self.logs.append(msg)
            if len(self.logs) > MAX_LOGS:
                self.logs = self.logs[-MAX_LOGS:]

    def log_snapshot(self) -> List[str]:
        with self._lock:
            return list(self.logs)
