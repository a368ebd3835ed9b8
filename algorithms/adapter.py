"""
adapter.py — Algorithm Adapter Contract
========================================
One adapter per algorithm.  An adapter is a metadata card plus ONE
generator function; everything else is derived from that generator.

    adapter.generator(snapshot)  →  lazy AlgorithmStep sequence (step-through)
    adapter.execute(snapshot)    →  AlgorithmResult           (auto mode)

`execute` drains the generator and buckets the steps by type, so the two
entry points can never disagree.  Failures are reported through
`AlgorithmResult.error`; `execute` does not raise for graphs the algorithm
cannot handle.  The generator signals the same failures by simply not
yielding any RESULT / CYCLE steps.

Adding an algorithm: write the generator, build an AlgorithmAdapter around
it, add it to DEFAULT_ADAPTERS in algorithms/__init__.py.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional

from graph import GraphSnapshot
from algorithms.step import AlgorithmStep, EdgeRef, StepType

StepGenerator = Iterator[AlgorithmStep]

END_NODE_REQUIRED = "End node is required for pathfinding."
GENERIC_FAILURE   = "Algorithm could not complete on this graph."


class AlgorithmType(Enum):
    """Determines node-selection behaviour in the UI."""
    TRAVERSAL   = "traversal"     # single start node
    PATHFINDING = "pathfinding"   # start and end node
    TREE        = "tree"          # single start node


@dataclass(frozen=True)
class Requirements:
    weighted:        bool = False
    undirected_only: bool = False
    connected_only:  bool = False


@dataclass(frozen=True)
class AlgorithmMetadata:
    id:               str
    name:             str
    type:             AlgorithmType
    tagline:          str                  = ""
    description:      str                  = ""
    input_step_hints: List[str]            = field(default_factory=list)
    failure_message:  Optional[str]        = None
    requirements:     Requirements         = field(default_factory=Requirements)
    pseudocode:       List[str]            = field(default_factory=list)
    complexity_time:  str                  = ""
    complexity_space: str                  = ""


@dataclass
class AlgorithmResult:
    visited_edges:    List[EdgeRef]           = field(default_factory=list)
    result_edges:     Optional[List[EdgeRef]] = None
    result_step_type: Optional[StepType]      = None
    error:            Optional[str]           = None

    @property
    def ok(self) -> bool:
        return self.error is None


def partition_steps(steps: Iterable[AlgorithmStep]) -> AlgorithmResult:
    """Bucket a drained step sequence into the non-lazy result form."""
    visited: List[EdgeRef] = []
    results: List[EdgeRef] = []
    result_type: Optional[StepType] = None
    for step in steps:
        if step.type is StepType.VISIT:
            visited.append(step.edge)
        else:
            results.append(step.edge)
            if step.type is StepType.CYCLE:
                result_type = StepType.CYCLE
    return AlgorithmResult(
        visited_edges=visited,
        result_edges=results or None,
        result_step_type=result_type,
    )


# Checks run by execute().  A precheck sees only the snapshot and short
# circuits before the generator runs; a postcheck inspects the drained
# result.  Both return an error string or None.
Precheck  = Callable[[GraphSnapshot], Optional[str]]
Postcheck = Callable[[GraphSnapshot, AlgorithmResult], Optional[str]]


@dataclass
class AlgorithmAdapter:
    metadata:  AlgorithmMetadata
    generator: Callable[[GraphSnapshot], StepGenerator]
    precheck:  Optional[Precheck]  = None
    postcheck: Optional[Postcheck] = None

    @property
    def id(self) -> str:
        return self.metadata.id

    def execute(self, snapshot: GraphSnapshot) -> AlgorithmResult:
        if self.metadata.type is AlgorithmType.PATHFINDING and snapshot.end_node_id is None:
            return AlgorithmResult(error=END_NODE_REQUIRED)
        if self.precheck is not None:
            error = self.precheck(snapshot)
            if error:
                return AlgorithmResult(error=error)

        result = partition_steps(self.generator(snapshot))

        if self.postcheck is not None:
            result.error = self.postcheck(snapshot, result)
        return result

    def __repr__(self) -> str:
        return f"AlgorithmAdapter({self.metadata.id!r}, type={self.metadata.type.value})"


# ---------------------------------------------------------------------------
# Reusable postchecks
# ---------------------------------------------------------------------------
def require_result(message: str, same_endpoints_ok: bool = True) -> Postcheck:
    """Fail with `message` when the run produced no RESULT / CYCLE steps.

    A pathfinder asked for a path from a node to itself has nothing to
    report and still succeeds; pass ``same_endpoints_ok=False`` for
    algorithms where the end node carries no meaning.
    """

    def check(snapshot: GraphSnapshot, result: AlgorithmResult) -> Optional[str]:
        if result.result_edges:
            return None
        if (
            same_endpoints_ok
            and snapshot.end_node_id is not None
            and snapshot.start_node_id == snapshot.end_node_id
        ):
            return None
        return message

    return check
