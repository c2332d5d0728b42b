"""Read-only capability interface over caller-owned graphs.

The layout engine never takes ownership of a graph and never converts it into
a canonical graph type. Callers adapt their own representation by implementing
GraphView, or use one of the adapters below:

- NetworkXGraphView: zero-copy view over any networkx graph (multigraphs included)
- EdgeListGraphView: view over plain node and edge sequences (JSON tool input)
"""

from abc import ABC, abstractmethod
from typing import Dict, Hashable, Iterable, Iterator, List, Sequence, Tuple

import networkx as nx

NodeId = Hashable
Edge = Tuple[Hashable, Hashable]


class GraphView(ABC):
    """Abstract read-only view of a graph.

    Enumeration order of nodes() and edges() must be stable: layouts are
    deterministic given a deterministic enumeration.
    """

    @property
    @abstractmethod
    def directed(self) -> bool:
        """Whether edges are ordered (source, target) pairs."""
        ...

    @abstractmethod
    def nodes(self) -> Iterable[NodeId]:
        """Enumerate node identifiers."""
        ...

    @abstractmethod
    def edges(self) -> Iterable[Edge]:
        """Enumerate edges as (source, target) pairs, parallel edges individually."""
        ...

    @abstractmethod
    def neighbors(self, node: NodeId) -> Iterable[NodeId]:
        """Adjacent nodes irrespective of edge direction, without duplicates."""
        ...

    @abstractmethod
    def degree(self, node: NodeId) -> int:
        """Number of edge endpoints at node (self-loops count twice)."""
        ...

    def node_count(self) -> int:
        return sum(1 for _ in self.nodes())

    def edge_count(self) -> int:
        return sum(1 for _ in self.edges())


class NetworkXGraphView(GraphView):
    """GraphView over a networkx Graph, DiGraph, MultiGraph or MultiDiGraph.

    Example:
        graph = nx.path_graph(5)
        positions = compute_layout(NetworkXGraphView(graph), CircularLayout(), Settings())
    """

    def __init__(self, graph: nx.Graph):
        self._graph = graph

    @property
    def graph(self) -> nx.Graph:
        return self._graph

    @property
    def directed(self) -> bool:
        return self._graph.is_directed()

    def nodes(self) -> Iterator[NodeId]:
        return iter(self._graph.nodes)

    def edges(self) -> Iterator[Edge]:
        # Multigraph edges() yields one (u, v) per parallel edge
        for source, target in self._graph.edges():
            yield (source, target)

    def neighbors(self, node: NodeId) -> Iterator[NodeId]:
        if not self._graph.is_directed():
            return iter(self._graph.neighbors(node))
        seen = dict.fromkeys(self._graph.successors(node))
        seen.update(dict.fromkeys(self._graph.predecessors(node)))
        return iter(seen)

    def degree(self, node: NodeId) -> int:
        return self._graph.degree(node)

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()


class EdgeListGraphView(GraphView):
    """GraphView over explicit node and edge sequences.

    Nodes that appear only in edges are appended after the listed nodes, in
    order of first appearance.

    Args:
        nodes: Node identifiers in enumeration order
        edges: (source, target) pairs; parallel edges and self-loops allowed
        directed: Whether the edge pairs are ordered
    """

    def __init__(
        self,
        nodes: Sequence[NodeId],
        edges: Sequence[Edge],
        directed: bool = False,
    ):
        self._directed = directed
        self._edges: List[Edge] = [(source, target) for source, target in edges]
        self._adjacency: Dict[NodeId, Dict[NodeId, None]] = {}
        self._degree: Dict[NodeId, int] = {}

        for node in nodes:
            self._add_node(node)
        for source, target in self._edges:
            self._add_node(source)
            self._add_node(target)
            self._adjacency[source][target] = None
            self._adjacency[target][source] = None
            self._degree[source] += 1
            self._degree[target] += 1

    def _add_node(self, node: NodeId) -> None:
        if node not in self._adjacency:
            self._adjacency[node] = {}
            self._degree[node] = 0

    @property
    def directed(self) -> bool:
        return self._directed

    def nodes(self) -> Iterator[NodeId]:
        return iter(self._adjacency)

    def edges(self) -> Iterator[Edge]:
        return iter(self._edges)

    def neighbors(self, node: NodeId) -> Iterator[NodeId]:
        return iter(self._adjacency[node])

    def degree(self, node: NodeId) -> int:
        return self._degree[node]

    def node_count(self) -> int:
        return len(self._adjacency)

    def edge_count(self) -> int:
        return len(self._edges)


def as_graph_view(graph: object) -> GraphView:
    """Wrap a supported graph object in a GraphView.

    Args:
        graph: A GraphView (returned unchanged) or a networkx graph

    Raises:
        TypeError: If the graph type has no adapter
    """
    if isinstance(graph, GraphView):
        return graph
    if isinstance(graph, nx.Graph):
        return NetworkXGraphView(graph)
    raise TypeError(
        f"No GraphView adapter for {type(graph).__name__}. "
        f"Implement visgraph.core.graph_view.GraphView or pass a networkx graph."
    )
