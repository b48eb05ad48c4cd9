"""
Directed relationship graph between inhabitants.

``relationships[a][b]`` is a's relationship toward b and may differ from
``relationships[b][a]``. Edges are created only when two inhabitants are
present at the same time; message processing never creates an edge lazily.
Edges survive departures so history persists.

Update rules:
- Broadcast from F: every existing ``F -> O`` edge toward an active O gains one
  interaction; promotion to non-default once interactions exceed 2; no
  entanglement and no reciprocal update (broadcast exposure is one-way).
- Direct message F -> T: ``F -> T`` gains one interaction and 0.10
  entanglement, ``T -> F`` gains one interaction and 0.05 entanglement
  (being addressed entangles less than addressing); each is promoted once its
  interactions exceed 1.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from .schemas import RelationshipEdge

ADDRESSER_ENTANGLEMENT_STEP = 0.10
ADDRESSEE_ENTANGLEMENT_STEP = 0.05
DIRECT_PROMOTION_THRESHOLD = 1
BROADCAST_PROMOTION_THRESHOLD = 2


def _touch(
    edge: RelationshipEdge,
    *,
    sequence: int,
    threshold: int,
    entanglement_step: float = 0.0,
) -> None:
    edge.interactions += 1
    edge.last_interaction = sequence
    if entanglement_step:
        edge.entanglement = min(1.0, max(0.0, edge.entanglement + entanglement_step))
    if edge.interactions > threshold:
        edge.model = "non-default"


class RelationshipGraph:
    """Adjacency map ``{from_id: {to_id: RelationshipEdge}}``."""

    def __init__(self) -> None:
        self._edges: Dict[str, Dict[str, RelationshipEdge]] = {}

    def reset_outgoing(self, inhabitant_id: str) -> None:
        """Start ``inhabitant_id`` with an empty outgoing map (entry/re-entry)."""

        self._edges[inhabitant_id] = {}

    def connect(self, a: str, b: str) -> None:
        """Create fresh default edges ``a -> b`` and ``b -> a``."""

        self._edges.setdefault(a, {})[b] = RelationshipEdge()
        if b in self._edges:
            self._edges[b][a] = RelationshipEdge()

    def has_node(self, inhabitant_id: str) -> bool:
        return inhabitant_id in self._edges

    def edge(self, a: str, b: str) -> Optional[RelationshipEdge]:
        """Live edge ``a -> b`` or ``None`` (internal use; do not hand out)."""

        return self._edges.get(a, {}).get(b)

    def outgoing(self, inhabitant_id: str) -> Dict[str, RelationshipEdge]:
        """Copies of every outgoing edge of ``inhabitant_id``."""

        return {
            other_id: edge.model_copy()
            for other_id, edge in self._edges.get(inhabitant_id, {}).items()
        }

    def record_broadcast(self, sender_id: str, audience: Iterable[str], sequence: int) -> int:
        """Apply a broadcast from ``sender_id``; returns the number of edges touched."""

        touched = 0
        outgoing = self._edges.get(sender_id)
        if outgoing is None:
            return touched
        for other_id in audience:
            if other_id == sender_id:
                continue
            edge = outgoing.get(other_id)
            if edge is None:
                continue
            _touch(edge, sequence=sequence, threshold=BROADCAST_PROMOTION_THRESHOLD)
            touched += 1
        return touched

    def record_direct(self, sender_id: str, target_id: str, sequence: int) -> int:
        """Apply a direct message; returns the number of edges touched (0-2)."""

        touched = 0
        forward = self.edge(sender_id, target_id)
        if forward is not None:
            _touch(
                forward,
                sequence=sequence,
                threshold=DIRECT_PROMOTION_THRESHOLD,
                entanglement_step=ADDRESSER_ENTANGLEMENT_STEP,
            )
            touched += 1

        reciprocal = self.edge(target_id, sender_id)
        if reciprocal is not None:
            _touch(
                reciprocal,
                sequence=sequence,
                threshold=DIRECT_PROMOTION_THRESHOLD,
                entanglement_step=ADDRESSEE_ENTANGLEMENT_STEP,
            )
            touched += 1
        return touched
