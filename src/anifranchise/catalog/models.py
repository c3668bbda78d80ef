"""Data models for catalog titles and franchises.

This module defines the records the franchise pipeline passes around once a
catalog response has been decoded.
- TitleRecord is the unit fetched from the catalog (one anime title plus its
  relation edges).
- Franchise and FranchiseEntry are the final, display-ready output.

Design:
- MediaRelation and MediaKind mirror the catalog's enum values so decoded
  payloads validate directly into them.
- FuzzyDate carries a total order in which missing components sort last, so
  titles with unknown dates never appear to be the earliest entry.
- Records are frozen: once fetched they are shared between the graph builder and
  the extractor without copying.
"""

from enum import Enum
from functools import total_ordering

from pydantic import BaseModel, ConfigDict, Field


class MediaRelation(str, Enum):
    """Type of relation between two catalog titles."""

    ADAPTATION = "ADAPTATION"
    PREQUEL = "PREQUEL"
    SEQUEL = "SEQUEL"
    PARENT = "PARENT"
    SIDE_STORY = "SIDE_STORY"
    CHARACTER = "CHARACTER"
    SUMMARY = "SUMMARY"
    ALTERNATIVE = "ALTERNATIVE"
    SPIN_OFF = "SPIN_OFF"
    OTHER = "OTHER"
    SOURCE = "SOURCE"
    COMPILATION = "COMPILATION"
    CONTAINS = "CONTAINS"


class MediaKind(str, Enum):
    """Kind of the title on the other end of a relation."""

    ANIME = "ANIME"
    MANGA = "MANGA"


@total_ordering
class FuzzyDate(BaseModel):
    """Approximate release date where any component may be unknown.

    Ordering compares year, then month, then day. A missing component sorts
    after every concrete value at the same position, so ``2020`` sorts after
    ``2020-01`` and a date without a year sorts after every dated title.
    """

    model_config = ConfigDict(frozen=True)

    year: int | None = None
    month: int | None = None
    day: int | None = None

    def sort_key(self) -> tuple[tuple[bool, int], ...]:
        """Return a tuple key implementing the missing-is-latest order."""
        return tuple(
            (part is None, part or 0) for part in (self.year, self.month, self.day)
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FuzzyDate):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        if self.year is None:
            return "?"
        parts = [f"{self.year:04d}"]
        if self.month is not None:
            parts.append(f"{self.month:02d}")
            if self.day is not None:
                parts.append(f"{self.day:02d}")
        return "-".join(parts)


class RelationEdge(BaseModel):
    """A directed relation from a title to another catalog title."""

    model_config = ConfigDict(frozen=True)

    relation_type: MediaRelation
    related_id: int
    related_kind: MediaKind | None = None
    """Kind of the related title; None when the query did not request it."""


class TitleRecord(BaseModel):
    """A catalog title as fetched by either the list or the lookup query."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = ""
    """Display title; empty when titles were not requested."""
    start_date: FuzzyDate = Field(default_factory=FuzzyDate)
    relations: tuple[RelationEdge, ...] = ()


class PageResult(BaseModel):
    """One page of the lookup query."""

    has_next_page: bool
    titles: list[TitleRecord] = Field(default_factory=list)


class FranchiseEntry(BaseModel):
    """Display data for one title of a franchise."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    start_date: FuzzyDate

    @classmethod
    def from_record(cls, record: TitleRecord) -> "FranchiseEntry":
        """Build an entry from a fetched title record."""
        return cls(id=record.id, title=record.title, start_date=record.start_date)


class Franchise(BaseModel):
    """A connected group of titles, ordered by release date."""

    model_config = ConfigDict(frozen=True)

    title: str
    """Representative title (the earliest entry's title)."""
    entries: tuple[FranchiseEntry, ...]
