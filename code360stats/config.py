"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic_settings import BaseSettings


class CacheBackend(str, Enum):
    """Cache backend type."""
    MEMORY = "memory"
    SQLITE = "sqlite"
    NONE = "none"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class ScraperConfig(BaseSettings):
    """Configuration for the Code360 profile scraper and API."""

    # Browser settings
    headless: bool = True
    browser_args: list[str] = ["--no-sandbox", "--disable-dev-shm-usage"]
    user_agent: str = DEFAULT_USER_AGENT
    viewport_width: int = 1366
    viewport_height: int = 768

    # Target page
    profile_url_template: str = "https://www.naukri.com/code360/profile/{username}"

    # Timeouts (milliseconds)
    navigation_timeout_ms: int = 45000
    stats_wait_timeout_ms: int = 20000
    streak_wait_timeout_ms: int = 10000
    xp_wait_timeout_ms: int = 5000

    # Extraction
    joined_date_selectors: list[str] = [
        ".profile-header-meta .member-since-text",
        ".some-class-for-joined-date-text",
        ".profile-details-section p.join-date",
    ]
    page_content_chars: int = 1000

    # Cache settings
    cache_backend: CacheBackend = CacheBackend.MEMORY
    cache_ttl_seconds: int = 600
    sqlite_path: str = ".code360_cache.db"

    # Rate limiting
    rate_limit_requests: int = 50
    rate_limit_window_seconds: int = 900

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    model_config = {
        "env_prefix": "CODE360_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def profile_url(self, username: str) -> str:
        """Build the public profile URL for a username."""
        return self.profile_url_template.format(username=username)
