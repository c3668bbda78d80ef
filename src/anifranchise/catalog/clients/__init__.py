"""Client implementations for catalog providers."""

from anifranchise.catalog.clients.anilist import AniListClient

__all__ = ["AniListClient"]
