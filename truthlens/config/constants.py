from dataclasses import dataclass

@dataclass(frozen=True)
class LLMConfig:
    ANALYZE_TEMPERATURE: float = 0.3
    ANALYZE_MAX_TOKENS: int = 1500
    VERIFY_TEMPERATURE: float = 0.3
    VERIFY_MAX_TOKENS: int = 1500
    CHAT_TEMPERATURE: float = 0.7
    CHAT_MAX_TOKENS: int = 1000
    REQUEST_TIMEOUT: float = 60.0
    STREAM_TIMEOUT: float = 120.0

@dataclass(frozen=True)
class UsageConfig:
    STORAGE_KEY: str = "truthlens_usage_count"
    MAX_FREE_USES: int = 3

@dataclass(frozen=True)
class ImageConfig:
    """Client-side image upload limits."""
    MAX_BYTES: int = 10 * 1024 * 1024
    ACCEPTED_FORMATS: frozenset = frozenset({"PNG", "JPEG", "GIF", "WEBP"})
    DEFAULT_MIME: str = "application/octet-stream"

@dataclass(frozen=True)
class HistoryConfig:
    """Remote history table and dashboard settings."""
    TABLE: str = "analysis_history"
    ACTIVITY_DAYS: int = 7
    REQUEST_TIMEOUT: float = 30.0

LLM_CONFIG = LLMConfig()
USAGE_CONFIG = UsageConfig()
IMAGE_CONFIG = ImageConfig()
HISTORY_CONFIG = HistoryConfig()
