"""
Parent/child property relationships and the blocks they propagate.
"""

import logging
import time
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional

from ... import config
from ..core.interval import Interval, PropagatedBlock

logger = logging.getLogger(__name__)


class PropertyRelationships:
    """Lookup maps between parent properties and their child units."""

    def __init__(self, parent_to_children: Dict[object, List[object]] = None,
                 child_to_parent: Dict[object, object] = None):
        self.parent_to_children = {k: list(v) for k, v in (parent_to_children or {}).items()}
        self.child_to_parent = dict(child_to_parent or {})

    @classmethod
    def from_properties(cls, properties: Iterable) -> "PropertyRelationships":
        parent_to_children = defaultdict(list)
        child_to_parent = {}
        for prop in properties:
            parent_id = getattr(prop, "parent_id", None)
            if parent_id is None:
                continue
            child_to_parent[prop.id] = parent_id
            if prop.id not in parent_to_children[parent_id]:
                parent_to_children[parent_id].append(prop.id)
        return cls(parent_to_children, child_to_parent)

    def is_parent(self, property_id) -> bool:
        return bool(self.parent_to_children.get(property_id))

    def children_of(self, property_id) -> List[object]:
        return list(self.parent_to_children.get(property_id, []))

    def parent_of(self, property_id) -> Optional[object]:
        return self.child_to_parent.get(property_id)

    def related_ids(self, property_id) -> List[object]:
        """Children of a parent, or the parent of a child."""
        if self.is_parent(property_id):
            return self.children_of(property_id)
        parent_id = self.parent_of(property_id)
        return [parent_id] if parent_id is not None else []

    def are_related(self, a, b) -> bool:
        return self.child_to_parent.get(a) == b or self.child_to_parent.get(b) == a

    def are_siblings(self, a, b) -> bool:
        parent_a = self.child_to_parent.get(a)
        return a != b and parent_a is not None and parent_a == self.child_to_parent.get(b)

    def __repr__(self):
        return f"PropertyRelationships({len(self.parent_to_children)} parents, {len(self.child_to_parent)} children)"


class RelationshipCache:
    """
    Holds the relationship maps between render passes.

    The cache is an explicit object handed to whoever needs it; entries are
    rebuilt with `loader()` on first use and once `ttl_seconds` have passed.
    """

    def __init__(self, loader: Callable[[], PropertyRelationships], ttl_seconds: int = None,
                 clock: Callable[[], float] = time.monotonic):
        self.loader = loader
        self.ttl_seconds = config.RELATIONSHIP_CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self.clock = clock
        self._value: Optional[PropertyRelationships] = None
        self._loaded_at: Optional[float] = None

    @property
    def is_fresh(self) -> bool:
        if self._value is None:
            return False
        return self.clock() - self._loaded_at < self.ttl_seconds

    def get(self) -> PropertyRelationships:
        if not self.is_fresh:
            self._value = self.loader()
            self._loaded_at = self.clock()
            logger.debug(f"Relationship cache refreshed: {self._value}")
        return self._value

    def clear(self):
        self._value = None
        self._loaded_at = None


def related_block_id(source_id, property_id) -> str:
    return f"{source_id}:block:{property_id}"


def generate_related_blocks(source: Interval, relationships: PropertyRelationships) -> List[PropagatedBlock]:
    """
    Blocks caused by a booking on a related property: a booking on a parent
    blocks every child, a booking on a child blocks its parent only.
    """
    blocked_ids = []
    if relationships.is_parent(source.scope_key):
        blocked_ids.extend(relationships.children_of(source.scope_key))
    parent_id = relationships.parent_of(source.scope_key)
    if parent_id is not None:
        blocked_ids.append(parent_id)

    return [
        PropagatedBlock(related_block_id(source.id, property_id), property_id,
                        source.start, source.end, source_id=source.id)
        for property_id in blocked_ids
    ]
