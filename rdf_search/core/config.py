"""
Application configuration management.

This module centralizes all configuration settings for the application,
loading values from environment variables with sensible defaults.

Configuration categories:
- SPARQL endpoint connection settings
- Search limits and query length bounds
- Response cache parameters
- HTTP server settings (CORS, logging)
"""

from dataclasses import dataclass
from typing import List, Optional
from dotenv import load_dotenv
import os

from rdf_search.core.errors import ConfigurationError

load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


@dataclass
class Config:
    """
    Central configuration for the RDF paper search service.

    All configuration values are loaded from environment variables.
    This class serves as the single source of truth for application settings.

    Attributes:
        SPARQL_ENDPOINT: URL of the graph query endpoint (required).
        SPARQL_TIMEOUT: Outbound request timeout in seconds; the httpx
            default applies when unset.
        SEARCH_CACHE_TTL_SECONDS: Age after which a cached search is stale.
        SEARCH_CACHE_MAX_ENTRIES: Size above which the cache is wiped.
        SEARCH_RESULT_LIMIT: Row cap for search queries.
        SEARCH_MIN_LENGTH: Queries shorter than this return no items.
        SEARCH_MAX_LENGTH: Upper bound for combined (``q``) queries.
        TITLE_SEARCH_MAX_LENGTH: Upper bound for legacy ``title`` queries.
        CORS_ORIGINS: Comma-separated list of allowed origins.
        LOG_LEVEL: Root logging level.
    """

    SPARQL_ENDPOINT: Optional[str] = os.getenv("SPARQL_ENDPOINT") or None
    SPARQL_TIMEOUT: Optional[float] = _optional_float("SPARQL_TIMEOUT")

    SEARCH_CACHE_TTL_SECONDS: float = float(os.getenv("SEARCH_CACHE_TTL_SECONDS", "60"))
    SEARCH_CACHE_MAX_ENTRIES: int = int(os.getenv("SEARCH_CACHE_MAX_ENTRIES", "300"))

    SEARCH_RESULT_LIMIT: int = int(os.getenv("SEARCH_RESULT_LIMIT", "25"))
    SEARCH_MIN_LENGTH: int = int(os.getenv("SEARCH_MIN_LENGTH", "3"))
    SEARCH_MAX_LENGTH: int = int(os.getenv("SEARCH_MAX_LENGTH", "300"))
    TITLE_SEARCH_MAX_LENGTH: int = int(os.getenv("TITLE_SEARCH_MAX_LENGTH", "120"))

    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def require_sparql_endpoint(self) -> str:
        """Return the endpoint URL or fail if it is not configured."""
        if not self.SPARQL_ENDPOINT:
            raise ConfigurationError("Missing env var: SPARQL_ENDPOINT")
        return self.SPARQL_ENDPOINT

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Config()
