"""Profile fetcher - coordinates extraction and normalization."""

from code360stats.config import ScraperConfig
from code360stats.core.fetcher import extract_profile
from code360stats.core.transformer import normalize_stats
from code360stats.exceptions import InvalidInputError
from code360stats.logging import get_logger
from code360stats.models.stats import NormalizedProfileStats


class ProfileFetcher:
    """
    Fetches typed statistics for one Code360 profile per call.

    Each call drives a single browser session; failures propagate to the
    caller without retry.

    Example:
        fetcher = ProfileFetcher()
        stats = await fetcher.fetch("Codushan")
        print(stats.total_solved)
    """

    def __init__(self, config: ScraperConfig | None = None):
        """
        Initialize fetcher with optional configuration.

        Args:
            config: ScraperConfig instance, uses defaults if None
        """
        self.config = config or ScraperConfig()
        self._log = get_logger("profile_fetcher")

    async def fetch(self, username: str) -> NormalizedProfileStats:
        """
        Extract and normalize statistics for a username.

        Args:
            username: Code360 username

        Returns:
            NormalizedProfileStats, possibly all zero

        Raises:
            InvalidInputError: If username is empty
            NavigationTimeoutError, ProfileNotFoundError, FetchError:
                From the page extractor, unchanged
        """
        if not username or not username.strip():
            raise InvalidInputError("Username is required")

        try:
            raw = await extract_profile(username, self.config)
        except Exception as e:
            self._log.error("profile_fetch_failed", username=username, error=str(e))
            raise

        stats = normalize_stats(raw)

        if stats.is_empty:
            self._log.warning(
                "profile_stats_empty",
                username=username,
                hint="profile may be private or selectors need updating; see debug field",
                missing_fields=raw.missing_fields,
            )
        else:
            self._log.info(
                "profile_fetch_complete",
                username=username,
                total_solved=stats.total_solved,
                missing_fields=raw.missing_fields,
            )

        return stats
