import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()

# cache_duration value meaning "never expire"
INDEFINITE = -1

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant integrated within a spreadsheet application. "
    "Your task is to provide accurate, concise, and user-friendly responses to user prompts. "
    "Explanation is not needed, just provide the best answer you can."
)


def _parse_duration(raw: str | None) -> int:
    """Parse CACHE_DURATION: seconds, 0/empty to disable, -1 or 'indefinite'."""
    if raw is None or raw.strip() == "":
        return 0
    if raw.strip().lower() in ("indefinite", "forever"):
        return INDEFINITE
    return int(raw)


def _parse_bool(raw: str | None, default: bool = False) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    A ``Settings`` instance is passed to the pipeline at construction time;
    nothing below reads module-level state once built.
    """

    # OpenAI-compatible endpoint
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    api_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "30"))

    # Generation defaults
    default_model: str = os.getenv("DEFAULT_MODEL", "gpt-3.5-turbo")
    premium_model: str = os.getenv("PREMIUM_MODEL", "gpt-4")
    default_max_tokens: int = int(os.getenv("DEFAULT_MAX_TOKENS", "150"))  # short answers
    default_temperature: float = float(os.getenv("DEFAULT_TEMPERATURE", "0.0"))  # deterministic
    seed: int = int(os.getenv("SEED", "0"))
    system_prompt: str = os.getenv("SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT)
    user_id: str | None = os.getenv("USER_ID")

    # Cache
    cache_duration: int = _parse_duration(os.getenv("CACHE_DURATION", "21600"))  # 6 hours default
    cache_key_includes_system_prompt: bool = _parse_bool(os.getenv("CACHE_KEY_INCLUDES_SYSTEM_PROMPT"))
    cache_namespace: str = os.getenv("CACHE_NAMESPACE", "sheet_completions")
    document_id: str | None = os.getenv("DOCUMENT_ID")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Credentials file used by DotenvCredentialStore
    credentials_path: str = os.getenv(
        "CREDENTIALS_PATH",
        os.path.join(os.path.expanduser("~"), ".sheet_completions.env"),
    )

    @property
    def caching_enabled(self) -> bool:
        """Check if responses should be cached at all."""
        return self.cache_duration != 0

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_duration < INDEFINITE:
            raise ValueError(
                f"CACHE_DURATION must be a positive number of seconds, 0 or -1, got {self.cache_duration}"
            )

        if self.default_max_tokens <= 0:
            raise ValueError(f"DEFAULT_MAX_TOKENS must be positive, got {self.default_max_tokens}")

        if not self.default_model or not self.premium_model:
            raise ValueError("DEFAULT_MODEL and PREMIUM_MODEL must not be empty")

        if self.http_timeout <= 0:
            raise ValueError(f"HTTP_TIMEOUT must be positive, got {self.http_timeout}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create a Redis client instance."""
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=True,
    )
