"""Runtime settings loaded from the environment."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from infrastructure.errors import ConfigurationError

DEFAULT_USER_AGENT = "ContestTracker/1.0 (+https://github.com/contest-tracker)"
DEFAULT_CLIST_API_URL = "https://clist.by/api/v4/contest/"
DEFAULT_KONTESTS_API_URL = "https://kontests.net/api/v1"
DEFAULT_CLIST_RESOURCES = ("codeforces.com", "codechef.com", "leetcode.com")


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _get_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Service configuration.

    Credentials are optional: a missing CLIST username or key only disables
    the primary aggregator, it never prevents startup.
    """

    clist_username: str | None = None
    clist_api_key: str | None = None
    clist_api_url: str = DEFAULT_CLIST_API_URL
    clist_resources: tuple[str, ...] = DEFAULT_CLIST_RESOURCES
    kontests_api_url: str = DEFAULT_KONTESTS_API_URL
    source_timeout: float = 3.5
    resolve_budget: float = 9.0
    past_window_months: int = 2
    log_level: str = "INFO"
    user_agent: str = DEFAULT_USER_AGENT
    cors_allow_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))

    @property
    def has_clist_credentials(self) -> bool:
        return bool(self.clist_username and self.clist_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (and a local .env file)."""
        load_dotenv()

        return cls(
            clist_username=os.getenv("CLIST_USERNAME") or None,
            clist_api_key=os.getenv("CLIST_API_KEY") or None,
            clist_api_url=os.getenv("CLIST_API_URL", DEFAULT_CLIST_API_URL),
            clist_resources=_get_list("CLIST_RESOURCES", DEFAULT_CLIST_RESOURCES),
            kontests_api_url=os.getenv("KONTESTS_API_URL", DEFAULT_KONTESTS_API_URL).rstrip("/"),
            source_timeout=_get_float("SOURCE_TIMEOUT_SECONDS", 3.5),
            resolve_budget=_get_float("RESOLVE_BUDGET_SECONDS", 9.0),
            past_window_months=_get_int("PAST_WINDOW_MONTHS", 2),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
            cors_allow_origins=_get_list("CORS_ALLOW_ORIGINS", ("*",)),
        )
