"""Tests for the franchise graph builder.

Covers the closure loop (frontier rounds, pagination order, ids the catalog
never returns), termination on random cyclic relation sets, error propagation
and the optional deadline.
"""

import random

import pytest

from anifranchise.catalog.errors import BuildAbortedError, DecodeError, ServiceError
from anifranchise.catalog.models import MediaKind, MediaRelation
from anifranchise.core.graph_builder import FranchiseGraphBuilder
from anifranchise.core.relation_filter import RelationFilter, RelationPolicy
from tests.helpers.fake_catalog import FakeCatalogClient, make_title

PREQUEL = MediaRelation.PREQUEL
SEQUEL = MediaRelation.SEQUEL


@pytest.mark.asyncio
async def test_resolves_unknown_related_title() -> None:
    """A related id outside the seeds is fetched and joined to its seed."""
    seeds = [make_title(1, relations=[(PREQUEL, 4)]), make_title(2), make_title(3)]
    client = FakeCatalogClient(seeds, [make_title(4)])
    builder = FranchiseGraphBuilder(client)

    graph = await builder.build(seeds)

    assert set(graph.nodes) == {1, 2, 3, 4}
    assert {frozenset(edge) for edge in graph.edges} == {frozenset({1, 4})}
    assert client.page_calls == [((4,), 1)]
    assert builder.visited == {1, 2, 3, 4}
    assert builder.rounds == 1
    assert set(builder.records) == {1, 2, 3, 4}


@pytest.mark.asyncio
async def test_no_requests_when_seeds_are_closed() -> None:
    """Seeds that only relate to each other need no lookup."""
    seeds = [make_title(1, relations=[(SEQUEL, 2)]), make_title(2, relations=[(PREQUEL, 1)])]
    client = FakeCatalogClient(seeds)

    graph = await FranchiseGraphBuilder(client).build(seeds)

    assert client.page_calls == []
    assert graph.number_of_edges() == 1


@pytest.mark.asyncio
async def test_expands_in_rounds() -> None:
    """Ids discovered in one round are fetched in the next."""
    seeds = [make_title(1, relations=[(SEQUEL, 2)])]
    catalog = [
        make_title(2, relations=[(SEQUEL, 3), (PREQUEL, 1)]),
        make_title(3, relations=[(SEQUEL, 4)]),
        make_title(4),
    ]
    client = FakeCatalogClient(seeds, catalog)
    builder = FranchiseGraphBuilder(client)

    graph = await builder.build(seeds)

    assert client.page_calls == [((2,), 1), ((3,), 1), ((4,), 1)]
    assert builder.rounds == 3
    assert set(graph.nodes) == {1, 2, 3, 4}


@pytest.mark.asyncio
async def test_pages_fetched_in_order_until_last() -> None:
    """A large frontier is paged from 1 while has_next_page is set."""
    seeds = [make_title(0, relations=[(SEQUEL, i) for i in range(1, 8)])]
    client = FakeCatalogClient(seeds, [make_title(i) for i in range(1, 8)], page_size=3)

    graph = await FranchiseGraphBuilder(client).build(seeds)

    assert [page for _, page in client.page_calls] == [1, 2, 3]
    assert all(ids == tuple(range(1, 8)) for ids, _ in client.page_calls)
    assert graph.number_of_nodes() == 8


@pytest.mark.asyncio
async def test_missing_titles_are_not_requested_again() -> None:
    """An id the catalog never returns is marked visited after its round."""
    seeds = [make_title(1, relations=[(SEQUEL, 404)])]
    client = FakeCatalogClient(seeds)
    builder = FranchiseGraphBuilder(client)

    graph = await builder.build(seeds)

    assert client.page_calls == [((404,), 1)]
    assert 404 in builder.visited
    assert 404 not in builder.records
    assert graph.has_edge(1, 404)


@pytest.mark.asyncio
async def test_filter_applies_to_fetched_titles() -> None:
    """Edges of fetched titles go through the relation filter too."""
    seeds = [make_title(1, relations=[(SEQUEL, 2)])]
    catalog = [
        make_title(2, relations=[(MediaRelation.ADAPTATION, 3), (SEQUEL, 5)], kind=MediaKind.MANGA)
    ]
    client = FakeCatalogClient(seeds, catalog)

    graph = await FranchiseGraphBuilder(client).build(seeds)

    # Title 2's edges point at manga, so the kind-aware policy drops them.
    assert set(graph.nodes) == {1, 2}


@pytest.mark.asyncio
async def test_isolated_seeds_are_vertices() -> None:
    """Seeds without accepted edges are still graph vertices."""
    seeds = [make_title(1, relations=[(SEQUEL, 2)], kind=MediaKind.MANGA), make_title(7)]
    client = FakeCatalogClient(seeds)

    graph = await FranchiseGraphBuilder(client).build(seeds)

    assert set(graph.nodes) == {1, 7}
    assert graph.number_of_edges() == 0
    assert client.page_calls == []


@pytest.mark.asyncio
async def test_duplicate_and_reverse_edges_collapse() -> None:
    """(a, b) and (b, a) are one undirected edge."""
    seeds = [
        make_title(1, relations=[(SEQUEL, 2), (SEQUEL, 2)]),
        make_title(2, relations=[(PREQUEL, 1)]),
    ]
    graph = await FranchiseGraphBuilder(FakeCatalogClient(seeds)).build(seeds)
    assert graph.number_of_edges() == 1


@pytest.mark.asyncio
async def test_service_error_aborts_build() -> None:
    """A service error on a lookup page aborts the whole build."""
    seeds = [make_title(1, relations=[(SEQUEL, 2)])]
    client = FakeCatalogClient(seeds, [make_title(2)], fail_with=ServiceError(500, "boom"))

    with pytest.raises(ServiceError) as exc_info:
        await FranchiseGraphBuilder(client).build(seeds)

    assert (exc_info.value.status, exc_info.value.message) == (500, "boom")


@pytest.mark.asyncio
async def test_error_in_later_round_aborts_build() -> None:
    """Errors after successful rounds still fail the build."""
    seeds = [make_title(1, relations=[(SEQUEL, 2)])]
    catalog = [make_title(2, relations=[(SEQUEL, 3)]), make_title(3)]
    client = FakeCatalogClient(seeds, catalog, fail_with=DecodeError(), fail_on_call=2)

    with pytest.raises(DecodeError):
        await FranchiseGraphBuilder(client).build(seeds)
    assert len(client.page_calls) == 2


@pytest.mark.asyncio
async def test_deadline_checked_before_each_request() -> None:
    """A passed deadline aborts before the next page is requested."""
    seeds = [make_title(1, relations=[(SEQUEL, 2)])]
    client = FakeCatalogClient(seeds, [make_title(2)])
    builder = FranchiseGraphBuilder(client, deadline=10.0, clock=lambda: 10.0)

    with pytest.raises(BuildAbortedError):
        await builder.build(seeds)
    assert client.page_calls == []


@pytest.mark.asyncio
async def test_deadline_not_reached() -> None:
    """A build finishing before its deadline is unaffected."""
    seeds = [make_title(1, relations=[(SEQUEL, 2)])]
    client = FakeCatalogClient(seeds, [make_title(2)])
    builder = FranchiseGraphBuilder(client, deadline=10.0, clock=lambda: 1.0)

    graph = await builder.build(seeds)
    assert graph.has_edge(1, 2)
    assert client.deadlines == [10.0]


@pytest.mark.asyncio
async def test_builder_is_reusable() -> None:
    """State from one build does not leak into the next."""
    seeds = [make_title(1, relations=[(SEQUEL, 2)])]
    client = FakeCatalogClient(seeds, [make_title(2)])
    builder = FranchiseGraphBuilder(client)

    await builder.build(seeds)
    await builder.build(seeds)

    assert client.page_calls == [((2,), 1), ((2,), 1)]
    assert builder.rounds == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(25))
async def test_terminates_on_random_relation_sets(seed: int) -> None:
    """Random cyclic, self-referencing and dangling relations always terminate."""
    rng = random.Random(seed)
    universe = range(1, 60)
    # Some ids are never returned by the catalog.
    known = [i for i in universe if rng.random() < 0.8]

    def random_title(title_id: int):
        relations = [
            (rng.choice([PREQUEL, SEQUEL, MediaRelation.SIDE_STORY]), rng.choice(universe))
            for _ in range(rng.randint(0, 4))
        ]
        if rng.random() < 0.1:
            relations.append((SEQUEL, title_id))
        return make_title(title_id, relations=relations)

    catalog = [random_title(i) for i in known]
    seeds = rng.sample(catalog, k=min(5, len(catalog)))
    client = FakeCatalogClient(seeds, catalog, page_size=7)
    builder = FranchiseGraphBuilder(client, RelationFilter(RelationPolicy.KIND_BLIND))

    graph = await builder.build(seeds)

    assert set(graph.nodes) <= builder.visited
    assert builder.rounds <= len(universe)
    requested = [i for ids, page in client.page_calls if page == 1 for i in ids]
    assert len(requested) == len(set(requested))
