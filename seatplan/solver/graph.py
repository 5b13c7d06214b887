import logging
from typing import Collection, Iterator, List, Optional, Set

import networkx as nx

from seatplan.errors import InvalidRelationshipError
from seatplan.models import Relationship, RelationshipType

logger = logging.getLogger(__name__)


class RelationshipGraph:
    """
    Symmetric view over the accepted relationships.

    Each edge of the underlying ``nx.Graph`` carries the original
    ``Relationship`` under the ``relationship`` key, so lookups work no
    matter which side of the pair was stored as ``guest_id``.
    """

    def __init__(self, graph: nx.Graph, relationships: List[Relationship]):
        self.graph = graph
        self.relationships = relationships  # accepted, in input order

    def relationship_between(self, a: str, b: str) -> Optional[Relationship]:
        edge = self.graph.get_edge_data(a, b)
        if edge is None:
            return None
        return edge["relationship"]

    def of_type(self, relationship_type: RelationshipType) -> List[Relationship]:
        return [r for r in self.relationships if r.relationship_type == relationship_type]

    def couple_members(self) -> Set[str]:
        members: Set[str] = set()
        for r in self.of_type("couple"):
            members.add(r.guest_id)
            members.add(r.related_guest_id)
        return members

    def __iter__(self) -> Iterator[Relationship]:
        return iter(self.relationships)

    def __len__(self) -> int:
        return len(self.relationships)


def build_relationship_graph(
    relationships: List[Relationship],
    attendee_ids: Optional[Collection[str]] = None,
) -> RelationshipGraph:
    """
    Normalizes relationship records into a RelationshipGraph.

    Self-relationships raise InvalidRelationshipError. For a pair that
    appears more than once the first-seen record wins and the rest are
    dropped. When ``attendee_ids`` is given, relationships touching anyone
    outside it are skipped.
    """
    G = nx.Graph()
    accepted: List[Relationship] = []
    if attendee_ids is not None:
        G.add_nodes_from(attendee_ids)

    for r in relationships:
        a, b = r.guest_id, r.related_guest_id
        if a == b:
            raise InvalidRelationshipError(f"Relationship of {a} with itself is not allowed")

        if attendee_ids is not None and (a not in G or b not in G):
            logger.debug("Skipping %s relationship %s-%s: attendee not eligible", r.relationship_type, a, b)
            continue

        if G.has_edge(a, b):
            kept = G[a][b]["relationship"]
            logger.warning(
                "Duplicate relationship %s-%s (%s) ignored, keeping first-seen %s",
                a, b, r.relationship_type, kept.relationship_type,
            )
            continue

        G.add_edge(a, b, relationship=r, conflict=(r.relationship_type == "conflict"), weight=r.strength)
        accepted.append(r)

    return RelationshipGraph(G, accepted)
