"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, EdgeType
    from graph import GraphSnapshot, EdgeInfo, NodeInfo
"""

from graph.node     import Node
from graph.edge     import Edge, EdgeType
from graph.snapshot import GraphSnapshot, EdgeInfo, NodeInfo
from graph.graph    import Graph, GraphFormatError

__all__ = [
    "Node",
    "Edge",          "EdgeType",
    "GraphSnapshot", "EdgeInfo", "NodeInfo",
    "Graph",         "GraphFormatError",
]
