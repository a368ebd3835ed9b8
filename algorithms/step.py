"""
step.py — Algorithm Step
=========================
Every algorithm is a generator that yields AlgorithmStep objects.
A step is one atomic, ordered unit of progress:

    • VISIT   – the algorithm reached `edge.target` via `edge`
    • RESULT  – `edge` is part of the final answer (shortest path)
    • CYCLE   – `edge` is part of the detected cycle

`edge.source == -1` (EdgeRef.ROOT) means "no predecessor": the edge is
the algorithm's own starting node.

Design decisions:
  - Steps are frozen dataclasses.  The algorithm generator is the only
    writer; the stepper / renderer are pure readers.
  - `trace` is for the side panel only (narration + a snapshot of the
    queue / stack / priority queue / distance table).  The replay engine
    never looks inside it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class StepType(Enum):
    VISIT  = "visit"
    RESULT = "result"
    CYCLE  = "cycle"


@dataclass(frozen=True)
class EdgeRef:
    """`source -> target`; source == ROOT marks the starting node."""

    ROOT = -1

    source: int
    target: int

    @property
    def is_root(self) -> bool:
        return self.source == EdgeRef.ROOT

    def to_dict(self) -> Dict[str, int]:
        return {"from": self.source, "to": self.target}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EdgeRef":
        return cls(int(data["from"]), int(data["to"]))

    @classmethod
    def root(cls, node_id: int) -> "EdgeRef":
        return cls(cls.ROOT, node_id)


@dataclass(frozen=True)
class TraceItem:
    id:    int
    value: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"id": self.id}
        if self.value is not None:
            d["value"] = self.value
        return d


@dataclass(frozen=True)
class DataStructureSnapshot:
    """
    Attributes:
        kind       : "queue" | "stack" | "priority-queue" | "recursion-stack" | "distances"
        items      : contents in display order (queue front first, stack bottom first)
        processing : the item being handled in this step
        just_added : node ids pushed / updated during this step
    """

    kind:       str
    items:      List[TraceItem]      = field(default_factory=list)
    processing: Optional[TraceItem]  = None
    just_added: Optional[List[int]]  = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type":  self.kind,
            "items": [i.to_dict() for i in self.items],
        }
        if self.processing is not None:
            d["processing"] = self.processing.to_dict()
        if self.just_added:
            d["justAdded"] = list(self.just_added)
        return d


@dataclass(frozen=True)
class StepTrace:
    message:         str
    data_structure:  Optional[DataStructureSnapshot] = None
    pseudocode_line: Optional[int]                   = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"message": self.message}
        if self.data_structure is not None:
            d["dataStructure"] = self.data_structure.to_dict()
        if self.pseudocode_line is not None:
            d["pseudocodeLine"] = self.pseudocode_line
        return d


@dataclass(frozen=True)
class AlgorithmStep:
    type:  StepType
    edge:  EdgeRef
    trace: Optional[StepTrace] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"type": self.type.value, "edge": self.edge.to_dict()}
        if self.trace is not None:
            d["trace"] = self.trace.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlgorithmStep":
        # trace is display-only; a restored history replays without it
        # unless the message survived serialisation.
        trace = None
        if data.get("trace"):
            raw = data["trace"]
            trace = StepTrace(message=raw.get("message", ""), pseudocode_line=raw.get("pseudocodeLine"))
        return cls(StepType(data["type"]), EdgeRef.from_dict(data["edge"]), trace)


# ---------------------------------------------------------------------------
# Helpers used by the algorithm generators
# ---------------------------------------------------------------------------
def nid(node_id: int) -> str:
    """
    Mark a node id inside a trace message.  The trace panel swaps the
    placeholder for the node's label, falling back to the id.  Distances,
    weights and counts are embedded as plain numbers.
    """
    return f"{{n:{node_id}}}"


def items_of(node_ids: List[int]) -> List[TraceItem]:
    return [TraceItem(n) for n in node_ids]


def fmt_dist(value: float) -> str:
    if value == float("inf"):
        return "∞"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
