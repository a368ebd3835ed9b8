"""
edge.py — Graph Edge
====================
One logical edge of the editor graph.  Carries a weight and a
directed / undirected flag; the snapshot layer expands undirected edges
into two algorithm-facing records.

Design decisions:
  - `source` and `target` are integer node ids, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1 for unweighted graphs — algorithms that ignore
    weights simply never read it.
  - `directed` is stored per-edge so a single Graph can mix directed and
    undirected edges (cycle detection and Prim's care about this).
"""

from enum import Enum


class EdgeType(Enum):
    DIRECTED   = "directed"
    UNDIRECTED = "undirected"


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        source   : ID of the tail node.
        target   : ID of the head node.
        weight   : Numeric cost (default 1). Can be negative for Bellman-Ford demos.
        directed : If False, traversal works in both directions.
    """

    __slots__ = ("source", "target", "weight", "directed")

    def __init__(
        self,
        source: int,
        target: int,
        weight: float = 1,
        directed: bool = False,
    ):
        self.source:   int   = source
        self.target:   int   = target
        self.weight:   float = weight
        self.directed: bool  = directed

    @property
    def type(self) -> EdgeType:
        return EdgeType.DIRECTED if self.directed else EdgeType.UNDIRECTED

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=int(data["source"]),
            target=int(data["target"]),
            weight=data.get("weight", 1),
            directed=data.get("directed", False),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Edge)
            and self.source == other.source
            and self.target == other.target
            and self.directed == other.directed
        )

    def __hash__(self) -> int:
        return hash((self.source, self.target, self.directed))
