"""Relation filter deciding which catalog relations join a franchise.

A relation edge joins two titles into the same franchise only if the active
policy accepts its (relation type, related kind) pair. Policies:

- ``kind-aware``: story relations (prequel, sequel, parent, side story, summary,
  alternative, spin-off) pointing at another anime.
- ``kind-blind``: the same story relations regardless of the related kind.
- ``exclusion``: everything except adaptation, character and source relations.
"""

from enum import Enum

from anifranchise.catalog.models import MediaKind, MediaRelation

STORY_RELATIONS = frozenset(
    {
        MediaRelation.PREQUEL,
        MediaRelation.SEQUEL,
        MediaRelation.PARENT,
        MediaRelation.SIDE_STORY,
        MediaRelation.SUMMARY,
        MediaRelation.ALTERNATIVE,
        MediaRelation.SPIN_OFF,
    }
)

EXCLUDED_RELATIONS = frozenset(
    {
        MediaRelation.ADAPTATION,
        MediaRelation.CHARACTER,
        MediaRelation.SOURCE,
    }
)


class RelationPolicy(str, Enum):
    """Selectable franchise edge policies."""

    KIND_AWARE = "kind-aware"
    KIND_BLIND = "kind-blind"
    EXCLUSION = "exclusion"


class RelationFilter:
    """Pure predicate over (relation type, related kind) pairs."""

    def __init__(self, policy: RelationPolicy = RelationPolicy.KIND_AWARE) -> None:
        """Initialize the filter with an explicit *policy*."""
        self.policy = RelationPolicy(policy)

    @classmethod
    def from_name(cls, name: object) -> "RelationFilter":
        """Build a filter from a policy name such as ``"kind-blind"``.

        Names read from config files may not be strings; they are matched by
        their text.

        Raises:
            ValueError: If *name* is not a known policy.
        """
        try:
            policy = RelationPolicy(str(name).strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in RelationPolicy)
            raise ValueError(
                f"Invalid relation policy {name!r}. Must be one of: {valid}"
            ) from None
        return cls(policy)

    @property
    def requires_related_kind(self) -> bool:
        """Whether the related node's kind must be fetched for this policy."""
        return self.policy is RelationPolicy.KIND_AWARE

    def is_franchise_edge(
        self, relation: MediaRelation, related_kind: MediaKind | None
    ) -> bool:
        """Return True if the relation joins both titles into one franchise."""
        if self.policy is RelationPolicy.KIND_AWARE:
            return relation in STORY_RELATIONS and related_kind == MediaKind.ANIME
        if self.policy is RelationPolicy.KIND_BLIND:
            return relation in STORY_RELATIONS
        return relation not in EXCLUDED_RELATIONS

    __call__ = is_franchise_edge

    def __repr__(self) -> str:
        return f"RelationFilter({self.policy.value!r})"
