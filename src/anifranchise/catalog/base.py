"""Base abstraction for catalog clients.

Defines the two query shapes the franchise builder needs from a catalog: the
user's completed list and a paginated lookup of titles by id. The AniList client
implements it; tests substitute in-memory fakes.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from anifranchise.catalog.models import PageResult, TitleRecord


class CatalogClient(ABC):
    """Abstract base class for catalog clients."""

    @abstractmethod
    async def fetch_list(
        self, username: str, *, deadline: float | None = None
    ) -> list[TitleRecord]:
        """Fetch the titles of a user's completed anime list.

        Args:
            username: The catalog user name.
            deadline: Optional monotonic time after which the request must not
                be sent.

        Returns:
            The user's titles with their relation edges.

        Raises:
            FetchError: If the list cannot be fetched or decoded. BuildAbortedError
                when the deadline passes first.
        """
        raise NotImplementedError

    @abstractmethod
    async def fetch_page(
        self, ids: Iterable[int], page: int, *, deadline: float | None = None
    ) -> PageResult:
        """Fetch one page of titles by id.

        Args:
            ids: The title ids to look up.
            page: 1-based page number.
            deadline: Optional monotonic time after which the request must not
                be sent.

        Returns:
            The titles on this page and whether another page follows.

        Raises:
            FetchError: If the page cannot be fetched or decoded. BuildAbortedError
                when the deadline passes first.
        """
        raise NotImplementedError
