from typing import Optional

import httpx

from truthlens.config import settings
from .analysis import AnalysisClient
from .auth import AuthState
from .chat import ChatClient
from .dashboard import DashboardStats
from .functions import FunctionsClient
from .history import HistoryClient
from .notify import LoggingNotifier, Notifier
from .storage import JsonFileStore, KeyValueStore
from .usage import UsageLimiter
from .verification import SourceVerifier


class TruthLensApp:
    """Wires the client components around one auth state and one usage store."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        anon_key: Optional[str] = None,
        store: Optional[KeyValueStore] = None,
        notifier: Optional[Notifier] = None,
        auth: Optional[AuthState] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.auth = auth or AuthState()
        self.notifier = notifier or LoggingNotifier()
        self.store = store or JsonFileStore(settings.USAGE_STORE_PATH)
        self.limiter = UsageLimiter(self.store, self.auth, cap=settings.MAX_FREE_USES)

        self.functions = FunctionsClient(base_url, anon_key, transport=transport)
        self.history = HistoryClient(self.auth, self.notifier, base_url, anon_key, transport=transport)
        self.analysis = AnalysisClient(
            self.functions, self.limiter, self.notifier, history=self.history, auth=self.auth
        )
        self.chat = ChatClient(self.notifier, self.limiter, base_url, anon_key, transport=transport)
        self.verifier = SourceVerifier(self.functions)

    async def dashboard(self) -> Optional[DashboardStats]:
        """Stats over the full history; None when signed out."""
        if not self.auth.is_authenticated:
            return None
        items = await self.history.list("all")
        return DashboardStats.from_history(items)
