"""End-to-end franchise computation for one catalog user."""

import time

from anifranchise.catalog.base import CatalogClient
from anifranchise.catalog.errors import BuildAbortedError
from anifranchise.catalog.models import Franchise
from anifranchise.catalog.queries import DEFAULT_PAGE_SIZE, QueryShape
from anifranchise.core.extractor import extract_franchises
from anifranchise.core.graph_builder import FranchiseGraphBuilder
from anifranchise.core.relation_filter import RelationFilter
from anifranchise.utils.debug import debug, info


async def get_franchises(
    client: CatalogClient,
    username: str,
    relation_filter: RelationFilter | None = None,
    *,
    deadline: float | None = None,
) -> list[Franchise]:
    """Fetch *username*'s list and group it into franchises.

    Only the user's own titles become franchise entries; related titles fetched
    while expanding the graph merely connect them.

    Args:
        client: Catalog client used for both query shapes.
        username: The catalog user name.
        relation_filter: Predicate selecting franchise edges.
        deadline: Optional monotonic deadline, checked before every request.

    Returns:
        Franchises sorted by representative title.

    Raises:
        FetchError: If any request fails. BuildAbortedError once the deadline
            has passed.
    """
    relation_filter = relation_filter or RelationFilter()
    if deadline is not None and time.monotonic() >= deadline:
        raise BuildAbortedError("franchise build exceeded its deadline")
    seeds = await client.fetch_list(username, deadline=deadline)
    info(f"Fetched {len(seeds)} titles for {username}")

    builder = FranchiseGraphBuilder(client, relation_filter, deadline=deadline)
    graph = await builder.build(seeds)
    seed_ids = {seed.id for seed in seeds}
    debug(
        f"Resolved graph: {graph.number_of_nodes()} titles, "
        f"{graph.number_of_edges()} relations, {builder.rounds} round(s), "
        f"{len(builder.records.keys() - seed_ids)} related titles fetched"
    )
    return extract_franchises(graph, seeds)


def franchise_query_shape(
    relation_filter: RelationFilter,
    *,
    include_titles: bool = True,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> QueryShape:
    """Return the query shape requesting exactly what the pipeline uses.

    The related node's kind is only requested when the relation policy looks at
    it; titles and start dates only when the franchises are displayed.
    """
    return QueryShape(
        include_title=include_titles,
        include_start_date=include_titles,
        include_related_kind=relation_filter.requires_related_kind,
        page_size=page_size,
    )
