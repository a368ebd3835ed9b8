"""
algorithms/__init__.py — Algorithm Catalogue
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import registry, get_algorithm

    adapter = get_algorithm("dijkstra")
    result  = adapter.execute(snapshot)          # auto mode
    steps   = adapter.generator(snapshot)        # step-through mode

Each entry below is an AlgorithmAdapter: a metadata card plus the
generator from its module.  Adding a new algorithm is: write the
generator, add one entry to DEFAULT_ADAPTERS.  Registration order is the
order the dropdown shows.

The six core families (BFS, DFS, Dijkstra, Bellman-Ford, Prim's, cycle
detection) are joined by the BFS/DFS pathfinding variants and
Floyd-Warshall, giving nine entries, so every generator in this package
is reachable from the dropdown.
"""

from typing import List, Optional

from algorithms.adapter import (
    END_NODE_REQUIRED,
    GENERIC_FAILURE,
    AlgorithmAdapter,
    AlgorithmMetadata,
    AlgorithmResult,
    AlgorithmType,
    Requirements,
    StepGenerator,
    partition_steps,
    require_result,
)
from algorithms.registry import AlgorithmRegistry
from algorithms.step import (
    AlgorithmStep,
    DataStructureSnapshot,
    EdgeRef,
    StepTrace,
    StepType,
    TraceItem,
)

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bfs             import bfs             as _bfs,  bfs_path as _bfs_path, PSEUDOCODE as _bfs_pc,  PATH_PSEUDOCODE as _bfs_path_pc
from algorithms.dfs             import dfs             as _dfs,  dfs_path as _dfs_path, PSEUDOCODE as _dfs_pc,  PATH_PSEUDOCODE as _dfs_path_pc
from algorithms.dijkstra        import dijkstra        as _dijkstra,                     PSEUDOCODE as _dij_pc
from algorithms.bellman_ford    import bellman_ford    as _bf,                           PSEUDOCODE as _bf_pc
from algorithms.prims           import prims           as _prims,                        PSEUDOCODE as _prims_pc
from algorithms.prims           import check_connected, check_undirected
from algorithms.cycle_detection import cycle_detection as _cycle,                        PSEUDOCODE as _cycle_pc
from algorithms.floyd_warshall  import floyd_warshall  as _fw,                           PSEUDOCODE as _fw_pc
from algorithms.floyd_warshall  import NO_PATHS_ERROR, check_has_nodes, check_paths_found


_SOURCE_HINT   = ["Select a node"]
_PATH_HINTS    = ["Select the source node", "Now select the destination node"]

NO_PATH_FOUND       = "No path found between the selected nodes."
DIJKSTRA_NO_PATH    = "Path is not possible for the given vertices."
BELLMAN_FORD_FAILED = "Path is not possible or negative cycle detected."
NO_CYCLE_FOUND      = "No cycle found in the graph."


# ---------------------------------------------------------------------------
# THE CATALOGUE
# ---------------------------------------------------------------------------
DEFAULT_ADAPTERS: List[AlgorithmAdapter] = [

    AlgorithmAdapter(
        AlgorithmMetadata(
            id="bfs", name="BFS", type=AlgorithmType.TRAVERSAL,
            tagline="Explore level by level",
            description="Explores layer-by-layer from the selected node.",
            input_step_hints=_SOURCE_HINT, pseudocode=_bfs_pc,
            complexity_time="O(V + E)", complexity_space="O(V)",
        ),
        _bfs,
    ),

    AlgorithmAdapter(
        AlgorithmMetadata(
            id="dfs", name="DFS", type=AlgorithmType.TRAVERSAL,
            tagline="Dive deep, then backtrack",
            description="Dives deep before backtracking.",
            input_step_hints=_SOURCE_HINT, pseudocode=_dfs_pc,
            complexity_time="O(V + E)", complexity_space="O(V)",
        ),
        _dfs,
    ),

    AlgorithmAdapter(
        AlgorithmMetadata(
            id="bfs-pathfinding", name="BFS Path", type=AlgorithmType.PATHFINDING,
            tagline="Shortest path (unweighted)",
            description="Finds the path with the fewest edges.",
            input_step_hints=_PATH_HINTS, failure_message=NO_PATH_FOUND,
            pseudocode=_bfs_path_pc,
            complexity_time="O(V + E)", complexity_space="O(V)",
        ),
        _bfs_path,
        postcheck=require_result(NO_PATH_FOUND),
    ),

    AlgorithmAdapter(
        AlgorithmMetadata(
            id="dfs-pathfinding", name="DFS Path", type=AlgorithmType.PATHFINDING,
            tagline="Find a path",
            description="Finds a path by diving deep. Does NOT guarantee the shortest path.",
            input_step_hints=_PATH_HINTS, failure_message=NO_PATH_FOUND,
            pseudocode=_dfs_path_pc,
            complexity_time="O(V + E)", complexity_space="O(V)",
        ),
        _dfs_path,
        postcheck=require_result(NO_PATH_FOUND),
    ),

    AlgorithmAdapter(
        AlgorithmMetadata(
            id="dijkstra", name="Dijkstra's", type=AlgorithmType.PATHFINDING,
            tagline="Find the shortest path",
            description="Greedily settles the closest node. Optimal for non-negative weights.",
            input_step_hints=_PATH_HINTS, failure_message=DIJKSTRA_NO_PATH,
            requirements=Requirements(weighted=True), pseudocode=_dij_pc,
            complexity_time="O(V²)", complexity_space="O(V)",
        ),
        _dijkstra,
        postcheck=require_result(DIJKSTRA_NO_PATH),
    ),

    AlgorithmAdapter(
        AlgorithmMetadata(
            id="bellman-ford", name="Bellman-Ford", type=AlgorithmType.PATHFINDING,
            tagline="Handle negative weights",
            description="Handles negative edges. Detects negative cycles. Slower than Dijkstra.",
            input_step_hints=_PATH_HINTS, failure_message=BELLMAN_FORD_FAILED,
            requirements=Requirements(weighted=True), pseudocode=_bf_pc,
            complexity_time="O(V · E)", complexity_space="O(V)",
        ),
        _bf,
        postcheck=require_result(BELLMAN_FORD_FAILED),
    ),

    AlgorithmAdapter(
        AlgorithmMetadata(
            id="prims", name="Prim's MST", type=AlgorithmType.TREE,
            tagline="Build minimum spanning tree",
            description="Click on any node to see the minimum spanning tree.",
            input_step_hints=_SOURCE_HINT,
            failure_message="Graph violates the requirements of the algorithm.",
            requirements=Requirements(undirected_only=True, connected_only=True),
            pseudocode=_prims_pc,
            complexity_time="O(V²)", complexity_space="O(V)",
        ),
        _prims,
        precheck=check_undirected,
        postcheck=check_connected,
    ),

    AlgorithmAdapter(
        AlgorithmMetadata(
            id="cycle-detection", name="Cycle Detection", type=AlgorithmType.TRAVERSAL,
            tagline="Find loops in graph",
            description="DFS with white/gray/black colouring. Stops at the first back edge.",
            input_step_hints=_SOURCE_HINT, failure_message=NO_CYCLE_FOUND,
            pseudocode=_cycle_pc,
            complexity_time="O(V + E)", complexity_space="O(V)",
        ),
        _cycle,
        postcheck=require_result(NO_CYCLE_FOUND, same_endpoints_ok=False),
    ),

    AlgorithmAdapter(
        AlgorithmMetadata(
            id="floyd-warshall", name="Floyd-Warshall", type=AlgorithmType.TRAVERSAL,
            tagline="All-pairs shortest paths",
            description="Click on a node to see shortest paths to all other nodes.",
            input_step_hints=_SOURCE_HINT, failure_message=NO_PATHS_ERROR,
            requirements=Requirements(weighted=True), pseudocode=_fw_pc,
            complexity_time="O(V³)", complexity_space="O(V²)",
        ),
        _fw,
        precheck=check_has_nodes,
        postcheck=check_paths_found,
    ),
]


def build_registry(adapters: Optional[List[AlgorithmAdapter]] = None) -> AlgorithmRegistry:
    """Create a registry populated with `adapters` (DEFAULT_ADAPTERS by default)."""
    reg = AlgorithmRegistry()
    for adapter in DEFAULT_ADAPTERS if adapters is None else adapters:
        reg.register(adapter)
    return reg


# Process-wide registry, populated once at import time.
registry: AlgorithmRegistry = build_registry()


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(algo_id: str) -> Optional[AlgorithmAdapter]:
    """Return the adapter registered under `algo_id`, or None."""
    return registry.get(algo_id)


def list_algorithms() -> List[AlgorithmAdapter]:
    """Return all registered algorithms in registration order."""
    return registry.get_all()


def algorithms_by_type(algo_type: AlgorithmType) -> List[AlgorithmAdapter]:
    return registry.get_by_type(algo_type)


__all__ = [
    "AlgorithmAdapter",
    "AlgorithmMetadata",
    "AlgorithmRegistry",
    "AlgorithmResult",
    "AlgorithmStep",
    "AlgorithmType",
    "DataStructureSnapshot",
    "DEFAULT_ADAPTERS",
    "END_NODE_REQUIRED",
    "EdgeRef",
    "GENERIC_FAILURE",
    "Requirements",
    "StepGenerator",
    "StepTrace",
    "StepType",
    "TraceItem",
    "algorithms_by_type",
    "build_registry",
    "get_algorithm",
    "list_algorithms",
    "partition_steps",
    "registry",
]
