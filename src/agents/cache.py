"""Time-bounded cache for generated patterns."""
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from src.config import AGENT_CACHE_TTL


def normalize_prompt(prompt: str) -> str:
    return prompt.strip().lower()


class TTLCache:
    """Prompt-keyed cache whose entries expire after ``ttl`` seconds.

    Keys are normalized prompts, so ``" Dark Bass "`` and ``"dark bass"``
    share an entry. Expired entries are dropped on read and on every write.
    Safe to share between threads.
    """

    def __init__(
        self,
        ttl: float = AGENT_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, prompt: str) -> Optional[Any]:
        key = normalize_prompt(prompt)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at >= self.ttl:
                del self._entries[key]
                return None
            return value

    def set(self, prompt: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            expired = [
                key for key, (stored_at, _) in self._entries.items()
                if now - stored_at >= self.ttl
            ]
            for key in expired:
                del self._entries[key]
            self._entries[normalize_prompt(prompt)] = (now, value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
