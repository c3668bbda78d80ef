"""Component extraction: turn a resolved franchise graph into franchises."""

from collections.abc import Iterable

import networkx as nx

from anifranchise.catalog.models import Franchise, FranchiseEntry, TitleRecord


def extract_franchises(
    graph: nx.Graph, title_records: Iterable[TitleRecord]
) -> list[Franchise]:
    """Group *title_records* by the connected components of *graph*.

    Entries of a franchise are ordered by start date (unknown dates last), ties
    keeping the order of *title_records*. The representative title is the first
    entry's title. Franchises are sorted by representative title, then by the
    first entry's id, so the output does not depend on graph insertion order.

    Args:
        graph: The fully resolved franchise graph.
        title_records: The titles to place into franchises.

    Returns:
        One Franchise per component containing at least one of the titles;
        titles without a vertex in the graph form singleton franchises.
    """
    records = list(title_records)
    component_of: dict[int, int] = {}
    for index, component in enumerate(nx.connected_components(graph)):
        for title_id in component:
            component_of[title_id] = index

    groups: dict[object, list[TitleRecord]] = {}
    for record in records:
        key: object = component_of.get(record.id, ("isolated", record.id))
        groups.setdefault(key, []).append(record)

    franchises = []
    for members in groups.values():
        ordered = sorted(members, key=lambda record: record.start_date.sort_key())
        entries = tuple(FranchiseEntry.from_record(record) for record in ordered)
        franchises.append(Franchise(title=entries[0].title, entries=entries))

    franchises.sort(key=lambda franchise: (franchise.title, franchise.entries[0].id))
    return franchises
