from .storage import KeyValueStore, MemoryStore, JsonFileStore
from .auth import AuthSession, AuthState
from .notify import Notifier, LoggingNotifier
from .errors import ErrorKind, classify_error
from .functions import FunctionsClient
from .usage import UsageLimiter
from .history import HistoryClient
from .analysis import AnalysisClient, load_image
from .streaming import EventStreamParser
from .chat import ChatClient, ChatStreamError, greeting
from .verification import SourceVerifier
from .dashboard import DashboardStats
from .app import TruthLensApp

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "AuthSession",
    "AuthState",
    "Notifier",
    "LoggingNotifier",
    "ErrorKind",
    "classify_error",
    "FunctionsClient",
    "UsageLimiter",
    "HistoryClient",
    "AnalysisClient",
    "load_image",
    "EventStreamParser",
    "ChatClient",
    "ChatStreamError",
    "greeting",
    "SourceVerifier",
    "DashboardStats",
    "TruthLensApp",
]
