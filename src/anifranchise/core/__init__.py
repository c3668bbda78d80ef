"""Core functionality for anifranchise.

This package exposes the franchise pipeline for use by the CLI and other
modules.
- RelationFilter: decides which catalog relations join two titles.
- FranchiseGraphBuilder: expands the relation graph until every title is fetched.
- extract_franchises: turns the resolved graph into ordered franchises.
- get_franchises: runs the whole pipeline for one user.
"""

from anifranchise.core.extractor import extract_franchises
from anifranchise.core.franchises import franchise_query_shape, get_franchises
from anifranchise.core.graph_builder import FranchiseGraphBuilder
from anifranchise.core.relation_filter import RelationFilter, RelationPolicy

__all__ = [
    "FranchiseGraphBuilder",
    "RelationFilter",
    "RelationPolicy",
    "extract_franchises",
    "franchise_query_shape",
    "get_franchises",
]
