"""Catalog access for anifranchise.

This package holds everything that talks to (or models) the remote anime
catalog: the data records, the GraphQL query shapes, response decoding, the
shared rate limiter and the AniList client.
"""

from anifranchise.catalog.base import CatalogClient
from anifranchise.catalog.errors import (
    BuildAbortedError,
    DecodeError,
    FetchError,
    ServiceError,
    TransportError,
)

__all__ = [
    "BuildAbortedError",
    "CatalogClient",
    "DecodeError",
    "FetchError",
    "ServiceError",
    "TransportError",
]
