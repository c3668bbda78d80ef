"""Decoding of AniList GraphQL response bodies.

A response body is one of three shapes: a page of media (lookup query), a media
list collection (list query) or an error envelope. decode_response tries each
shape in that order and returns the first one that validates, so callers match
on an explicit type instead of probing dictionaries.
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from anifranchise.catalog.errors import DecodeError, ServiceError
from anifranchise.catalog.models import (
    FuzzyDate,
    MediaKind,
    MediaRelation,
    PageResult,
    RelationEdge,
    TitleRecord,
)


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiMediaTitle(_ApiModel):
    user_preferred: str | None = None


class ApiMediaNode(_ApiModel):
    id: int
    type: MediaKind | None = None


class ApiMediaEdge(_ApiModel):
    relation_type: MediaRelation
    node: ApiMediaNode


class ApiMediaConnection(_ApiModel):
    edges: list[ApiMediaEdge] = Field(default_factory=list)


class ApiMedia(_ApiModel):
    """A ``Media`` object as returned by either query."""

    id: int
    title: ApiMediaTitle | None = None
    start_date: FuzzyDate | None = None
    relations: ApiMediaConnection | None = None

    def to_record(self) -> TitleRecord:
        """Convert the wire object into an immutable TitleRecord."""
        edges = self.relations.edges if self.relations else []
        return TitleRecord(
            id=self.id,
            title=(self.title.user_preferred or "") if self.title else "",
            start_date=self.start_date or FuzzyDate(),
            relations=tuple(
                RelationEdge(
                    relation_type=edge.relation_type,
                    related_id=edge.node.id,
                    related_kind=edge.node.type,
                )
                for edge in edges
            ),
        )


class ApiPageInfo(_ApiModel):
    has_next_page: bool


class ApiPage(_ApiModel):
    page_info: ApiPageInfo
    media: list[ApiMedia] = Field(default_factory=list)


class ApiMediaData(_ApiModel):
    page: ApiPage = Field(alias="Page")


class MediaPageResponse(_ApiModel):
    """Successful lookup query response."""

    data: ApiMediaData

    def to_page_result(self) -> PageResult:
        """Convert the page into a PageResult."""
        page = self.data.page
        return PageResult(
            has_next_page=page.page_info.has_next_page,
            titles=[media.to_record() for media in page.media],
        )


class ApiMediaListEntry(_ApiModel):
    media: ApiMedia


class ApiMediaListGroup(_ApiModel):
    entries: list[ApiMediaListEntry] = Field(default_factory=list)


class ApiMediaListCollection(_ApiModel):
    lists: list[ApiMediaListGroup] = Field(default_factory=list)


class ApiMediaListData(_ApiModel):
    media_list_collection: ApiMediaListCollection = Field(alias="MediaListCollection")


class MediaListResponse(_ApiModel):
    """Successful list query response."""

    data: ApiMediaListData

    def to_records(self) -> list[TitleRecord]:
        """Flatten every list of the collection, keeping the first occurrence."""
        seen: set[int] = set()
        records: list[TitleRecord] = []
        for group in self.data.media_list_collection.lists:
            for entry in group.entries:
                if entry.media.id in seen:
                    continue
                seen.add(entry.media.id)
                records.append(entry.media.to_record())
        return records


class ApiError(_ApiModel):
    status: int = 0
    message: str


class ErrorResponse(_ApiModel):
    """Error envelope reported by the service."""

    errors: list[ApiError]

    def to_error(self) -> ServiceError | DecodeError:
        """Return the error describing the first entry."""
        if not self.errors:
            return DecodeError()
        first = self.errors[0]
        return ServiceError(first.status, first.message)


CatalogResponse = Union[MediaPageResponse, MediaListResponse, ErrorResponse]

# Order matters: success shapes are tried before the error envelope because
# partial successes may carry both ``data`` and ``errors``.
_RESPONSE_SHAPES: tuple[type[_ApiModel], ...] = (
    MediaPageResponse,
    MediaListResponse,
    ErrorResponse,
)


def decode_response(payload: Any) -> CatalogResponse:
    """Decode a JSON payload into the first response shape it matches.

    Args:
        payload: The parsed JSON body.

    Returns:
        A MediaPageResponse, MediaListResponse or ErrorResponse.

    Raises:
        DecodeError: If the payload matches none of the known shapes.
    """
    for shape in _RESPONSE_SHAPES:
        try:
            return shape.model_validate(payload)  # type: ignore[return-value]
        except ValidationError:
            continue
    raise DecodeError()
