"""Franchise graph builder.

Expands the relation graph of a user's titles until every vertex has been
fetched. The graph is undirected: vertices are catalog title ids and an edge
joins two titles whenever either side lists an accepted relation to the other.

Design:
- The seed titles come from the list query, so they are visited from the
  start. Every related id that is not yet visited forms the frontier of the
  next round, which is resolved through the paginated lookup query.
- After each round the whole frontier is marked visited, including ids the
  catalog did not return, so a silently missing title is never requested twice
  and the loop always terminates.
- Any fetch error aborts the build; a partially expanded graph is never
  returned.
"""

import time
from collections.abc import Callable, Iterable

import networkx as nx

from anifranchise.catalog.base import CatalogClient
from anifranchise.catalog.errors import BuildAbortedError
from anifranchise.catalog.models import TitleRecord
from anifranchise.core.relation_filter import RelationFilter
from anifranchise.utils.debug import debug


class FranchiseGraphBuilder:
    """Builds the fully resolved franchise graph for a set of seed titles."""

    def __init__(
        self,
        client: CatalogClient,
        relation_filter: RelationFilter | None = None,
        *,
        deadline: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the builder.

        Args:
            client: Catalog client used for the lookup query.
            relation_filter: Predicate selecting franchise edges.
            deadline: Optional ``clock()`` value after which no further request
                is started. It is also handed to the client, which checks it
                again once its rate limiter admits the request.
            clock: Monotonic clock compared against *deadline*.
        """
        self.client = client
        self.relation_filter = relation_filter or RelationFilter()
        self.deadline = deadline
        self._clock = clock
        self.visited: set[int] = set()
        self.records: dict[int, TitleRecord] = {}
        self.rounds = 0

    def _add_title(self, graph: nx.Graph, record: TitleRecord) -> None:
        graph.add_node(record.id)
        for edge in record.relations:
            if self.relation_filter.is_franchise_edge(
                edge.relation_type, edge.related_kind
            ):
                graph.add_edge(record.id, edge.related_id)
        self.visited.add(record.id)
        self.records.setdefault(record.id, record)

    def _check_deadline(self) -> None:
        if self.deadline is not None and self._clock() >= self.deadline:
            raise BuildAbortedError("franchise build exceeded its deadline")

    def frontier(self, graph: nx.Graph) -> set[int]:
        """Return the vertices of *graph* that have not been fetched yet."""
        return set(graph.nodes) - self.visited

    async def build(self, seed_titles: Iterable[TitleRecord]) -> nx.Graph:
        """Build the resolved franchise graph.

        Args:
            seed_titles: The user's titles, already fetched with their edges.

        Returns:
            An undirected graph whose vertices are all visited title ids.

        Raises:
            FetchError: If any lookup page fails; no partial graph is returned.
        """
        graph = nx.Graph()
        self.visited = set()
        self.records = {}
        self.rounds = 0
        for record in seed_titles:
            self._add_title(graph, record)

        while True:
            frontier = self.frontier(graph)
            if not frontier:
                break
            self.rounds += 1
            pages = await self._resolve(graph, frontier)
            # Mark the whole frontier, even ids the catalog did not return.
            self.visited |= frontier
            debug(
                f"Round {self.rounds}: resolved {len(frontier)} ids in {pages} page(s), "
                f"graph has {graph.number_of_nodes()} titles"
            )

        return graph

    async def _resolve(self, graph: nx.Graph, frontier: set[int]) -> int:
        """Fetch every lookup page for *frontier*; return the page count."""
        page = 1
        while True:
            self._check_deadline()
            result = await self.client.fetch_page(
                frontier, page, deadline=self.deadline
            )
            for record in result.titles:
                self._add_title(graph, record)
            if not result.has_next_page:
                return page
            page += 1
