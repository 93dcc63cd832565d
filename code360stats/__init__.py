"""code360stats - Code360 profile statistics scraper."""

__version__ = "0.1.0"

from code360stats.models import RawProfileStats, NormalizedProfileStats, PublicProfileResponse
from code360stats.config import ScraperConfig
from code360stats.core.orchestrator import ProfileFetcher
from code360stats.core.formatter import format_response

__all__ = [
    # Main interface
    "ProfileFetcher",
    "ScraperConfig",
    "format_response",
    # Models
    "RawProfileStats",
    "NormalizedProfileStats",
    "PublicProfileResponse",
    "__version__",
]
