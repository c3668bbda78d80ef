"""GraphQL query shapes for the AniList catalog.

The list query (a user's completed anime) and the lookup query (a page of titles
by id) share one media selection. QueryShape decides which optional fields that
selection requests, so the client only asks for what the active relation policy
and the franchise output actually use.
"""

from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 50


@dataclass(frozen=True)
class QueryShape:
    """Fields requested for every media object.

    Attributes:
        include_title: Request ``title { userPreferred }`` for display.
        include_start_date: Request ``startDate`` for entry ordering.
        include_related_kind: Request the related node's ``type``.
        page_size: Titles per lookup page.
    """

    include_title: bool = True
    include_start_date: bool = True
    include_related_kind: bool = True
    page_size: int = DEFAULT_PAGE_SIZE

    def media_fields(self, indent: int = 0) -> str:
        """Return the media selection set, indented by *indent* spaces."""
        lines = ["id"]
        if self.include_title:
            lines += ["title {", "  userPreferred", "}"]
        if self.include_start_date:
            lines += ["startDate {", "  year", "  month", "  day", "}"]
        node = ["node {", "  id"]
        if self.include_related_kind:
            node.append("  type")
        node.append("}")
        lines += [
            "relations {",
            "  edges {",
            "    relationType (version: 2)",
            *(f"    {line}" for line in node),
            "  }",
            "}",
        ]
        pad = " " * indent
        return "\n".join(pad + line for line in lines)

    def lookup_query(self) -> str:
        """Return the paginated lookup-by-ids query."""
        return (
            "query ($ids: [Int], $page: Int) {\n"
            f"  Page (page: $page, perPage: {self.page_size}) {{\n"
            "    pageInfo {\n"
            "      hasNextPage\n"
            "    }\n"
            "    media (id_in: $ids) {\n"
            f"{self.media_fields(indent=6)}\n"
            "    }\n"
            "  }\n"
            "}\n"
        )

    def list_query(self, status: str = "COMPLETED") -> str:
        """Return the query fetching a user's anime list with *status*."""
        return (
            "query ($userName: String) {\n"
            f"  MediaListCollection (userName: $userName, type: ANIME, status: {status}) {{\n"
            "    lists {\n"
            "      entries {\n"
            "        media {\n"
            f"{self.media_fields(indent=10)}\n"
            "        }\n"
            "      }\n"
            "    }\n"
            "  }\n"
            "}\n"
        )
