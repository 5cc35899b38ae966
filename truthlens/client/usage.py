import math
from typing import Optional, Union

from truthlens.config import USAGE_CONFIG, logger
from .auth import AuthSession, AuthState
from .storage import KeyValueStore


class UsageLimiter:
    """Client-side cap on anonymous analyses.

    Advisory only: the count lives in local storage and nothing on the server
    enforces it.
    """

    def __init__(
        self,
        store: KeyValueStore,
        auth: AuthState,
        cap: int = USAGE_CONFIG.MAX_FREE_USES,
        key: str = USAGE_CONFIG.STORAGE_KEY,
    ):
        self.store = store
        self.auth = auth
        self.cap = cap
        self.key = key
        self._count = self._load()
        self._unsubscribe = auth.subscribe(self._on_session_change)

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated

    def can_use(self) -> bool:
        if self.is_authenticated:
            return True
        return self._count < self.cap

    def remaining(self) -> Union[int, float]:
        if self.is_authenticated:
            return math.inf
        return max(0, self.cap - self._count)

    def increment(self) -> int:
        if self.is_authenticated:
            return 0
        self._count += 1
        self.store.set(self.key, str(self._count))
        return self._count

    def close(self) -> None:
        self._unsubscribe()

    def _load(self) -> int:
        raw = self.store.get(self.key)
        if raw is None:
            return 0
        try:
            value = int(raw)
        except ValueError:
            logger.warning("Ignoring malformed usage count %r", raw)
            return 0
        return max(0, value)

    def _on_session_change(self, session: Optional[AuthSession]) -> None:
        if session is not None:
            self.store.remove(self.key)
            self._count = 0
        else:
            self._count = self._load()
