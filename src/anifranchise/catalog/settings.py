"""Settings loader for the AniList catalog client.

Loads the endpoint and transport options from environment variables or a .env
file. Every key is optional; the defaults target the public AniList API.

Recognised .env keys:
- ANILIST_API_URL
- ANILIST_TIMEOUT
- ANILIST_USER_AGENT
- ANILIST_PAGE_SIZE
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from anifranchise.__about__ import __version__
from anifranchise.catalog.queries import DEFAULT_PAGE_SIZE


class CatalogSettings(BaseSettings):
    """Endpoint and transport settings for the catalog client."""

    ANILIST_API_URL: str = "https://graphql.anilist.co"
    ANILIST_TIMEOUT: float = 10.0
    ANILIST_USER_AGENT: str = f"anifranchise/{__version__}"
    ANILIST_PAGE_SIZE: int = DEFAULT_PAGE_SIZE

    model_config = SettingsConfigDict(extra="ignore", env_file=".env")

    def headers(self) -> dict[str, str]:
        """Return the headers sent with every request."""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.ANILIST_USER_AGENT,
        }
