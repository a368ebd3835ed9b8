from typing import Optional


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Immutable identity (id), mutable position and label.

    Attributes:
        id     : Unique integer identifier, assigned by the Graph's counter
                 unless the caller supplies one.
        label  : Human-readable name shown on the canvas.  Trace messages
                 refer to nodes by id; the UI swaps in the label.
        x, y   : Canvas coordinates (caller decides the unit).
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        node_id: int,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
    ):
        self.id:    int   = node_id
        self.label: str   = label or str(node_id)
        self.x:     float = x
        self.y:     float = y

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            node_id=int(data["id"]),
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            label=data.get("label"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
