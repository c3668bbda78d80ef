"""AniList GraphQL catalog client.

Implements the CatalogClient interface against the public AniList GraphQL API.
AniList does not require authentication for reading public lists.
"""

from collections.abc import Iterable
from typing import Any

import httpx

from anifranchise.catalog.base import CatalogClient
from anifranchise.catalog.errors import DecodeError, ServiceError, TransportError
from anifranchise.catalog.models import PageResult, TitleRecord
from anifranchise.catalog.queries import QueryShape
from anifranchise.catalog.rate_limit import RateLimiter
from anifranchise.catalog.response import (
    CatalogResponse,
    ErrorResponse,
    MediaListResponse,
    MediaPageResponse,
    decode_response,
)
from anifranchise.catalog.settings import CatalogSettings
from anifranchise.utils.debug import debug


class AniListClient(CatalogClient):
    """Async client for the AniList GraphQL API.

    Both query shapes go through one RateLimiter, so the list query and every
    lookup page count against the same per-minute budget.
    """

    def __init__(
        self,
        settings: CatalogSettings | None = None,
        *,
        query_shape: QueryShape | None = None,
        rate_limiter: RateLimiter | None = None,
        http_client: httpx.AsyncClient | None = None,
        list_status: str = "COMPLETED",
    ) -> None:
        """Initialize the AniList client.

        Args:
            settings: Endpoint and transport settings; loaded from the
                environment when omitted.
            query_shape: Fields requested for each media object.
            rate_limiter: Limiter shared by every request of this client.
            http_client: Optional pre-built client, used as-is (not closed).
            list_status: Media list status fetched by ``fetch_list``.
        """
        self.settings = settings or CatalogSettings()
        self.query_shape = query_shape or QueryShape(
            page_size=self.settings.ANILIST_PAGE_SIZE
        )
        self.rate_limiter = rate_limiter or RateLimiter()
        self.list_status = list_status
        self._http_client = http_client

    async def fetch_list(
        self, username: str, *, deadline: float | None = None
    ) -> list[TitleRecord]:
        """Fetch the user's anime list with the configured status.

        Args:
            username: The AniList user name.
            deadline: Optional monotonic time checked once the rate limiter
                admits the request.

        Returns:
            Every title of the collection, de-duplicated by id.

        Raises:
            FetchError: On transport, decode or service errors.
        """
        debug(f"AniList list query for user={username!r}")
        response = await self._post(
            self.query_shape.list_query(self.list_status),
            {"userName": username},
            deadline=deadline,
        )
        if isinstance(response, MediaListResponse):
            return response.to_records()
        if isinstance(response, ErrorResponse):
            raise response.to_error()
        raise DecodeError()

    async def fetch_page(
        self, ids: Iterable[int], page: int, *, deadline: float | None = None
    ) -> PageResult:
        """Fetch one page of the lookup query for *ids*.

        Args:
            ids: The AniList media ids to look up.
            page: 1-based page number.
            deadline: Optional monotonic time checked once the rate limiter
                admits the request.

        Returns:
            The page of titles and the ``hasNextPage`` flag.

        Raises:
            FetchError: On transport, decode or service errors.
        """
        id_list = sorted(ids)
        debug(f"AniList lookup query page={page} ids={len(id_list)}")
        response = await self._post(
            self.query_shape.lookup_query(),
            {"ids": id_list, "page": page},
            deadline=deadline,
        )
        if isinstance(response, MediaPageResponse):
            return response.to_page_result()
        if isinstance(response, ErrorResponse):
            raise response.to_error()
        raise DecodeError()

    async def _post(
        self,
        query: str,
        variables: dict[str, Any],
        *,
        deadline: float | None = None,
    ) -> CatalogResponse:
        """Send one rate-limited GraphQL request and decode the body."""
        await self.rate_limiter.acquire(deadline)
        body = {"query": query, "variables": variables}
        try:
            if self._http_client is not None:
                response = await self._send(self._http_client, body)
            else:
                async with httpx.AsyncClient(
                    headers=self.settings.headers(),
                    timeout=self.settings.ANILIST_TIMEOUT,
                ) as client:
                    response = await self._send(client, body)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(
                f"request to {self.settings.ANILIST_API_URL} failed: {e}"
            ) from e

        try:
            decoded = decode_response(response.json())
        except (ValueError, DecodeError) as e:
            if not response.is_success:
                raise ServiceError(response.status_code, response.reason_phrase) from e
            if isinstance(e, DecodeError):
                raise
            raise DecodeError(f"error decoding response body: {e}") from e

        # An error envelope without entries says nothing beyond the HTTP status.
        if (
            isinstance(decoded, ErrorResponse)
            and not decoded.errors
            and not response.is_success
        ):
            raise ServiceError(response.status_code, response.reason_phrase)
        return decoded

    async def _send(self, client: httpx.AsyncClient, body: dict[str, Any]) -> httpx.Response:
        return await client.post(
            self.settings.ANILIST_API_URL,
            json=body,
            headers=self.settings.headers(),
        )
