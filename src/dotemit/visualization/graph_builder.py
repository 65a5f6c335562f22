"""Ready-made DotGraph implementations."""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import networkx as nx

from ..core.escaping import Id, LabelText
from ..core.graph import DotGraph
from ..core.models import GraphEdge, GraphNode, RankDir

logger = logging.getLogger(__name__)


class SimpleGraph(DotGraph):
    """An in-memory graph assembled node by node and edge by edge.

    Nodes and edges are kept in insertion order. Duplicates are kept too;
    the DOT output mirrors exactly what was added.
    """

    def __init__(
        self,
        name: str = "G",
        directed: bool = True,
        rank_dir: Optional[RankDir] = None,
        graph_attributes: Optional[Dict[str, Any]] = None,
    ):
        """Initialize an empty graph.

        Args:
            name: Graph identifier.
            directed: Whether edges are directed.
            rank_dir: Optional layout direction.
            graph_attributes: Graph-level DOT attributes.
        """
        self.name = name
        self.directed = directed
        self._rank_dir = rank_dir
        self._graph_attributes: Dict[str, Any] = dict(graph_attributes or {})
        self.node_list: List[GraphNode] = []
        self.edge_list: List[GraphEdge] = []

    def add_node(self, node_id: Any, label: Any = None, **attributes: Any) -> GraphNode:
        """Add a node.

        Args:
            node_id: Node identifier.
            label: Optional label (``str`` or ``LabelText``).
            **attributes: Extra DOT attributes.

        Returns:
            The created node.
        """
        node = GraphNode(id=node_id, label=label, attributes=attributes)
        self.node_list.append(node)
        return node

    def add_edge(self, source: Any, target: Any, label: Any = None, **attributes: Any) -> GraphEdge:
        """Add an edge between two node identifiers.

        Args:
            source: Source node identifier.
            target: Target node identifier.
            label: Optional label (``str`` or ``LabelText``).
            **attributes: Extra DOT attributes.

        Returns:
            The created edge.
        """
        edge = GraphEdge(source=source, target=target, label=label, attributes=attributes)
        self.edge_list.append(edge)
        return edge

    def graph_id(self) -> str:
        return self.name

    def nodes(self) -> Iterable[GraphNode]:
        return list(self.node_list)

    def edges(self) -> Iterable[GraphEdge]:
        return list(self.edge_list)

    def is_directed(self) -> bool:
        return self.directed

    def rank_dir(self) -> Optional[RankDir]:
        return self._rank_dir

    def graph_attributes(self) -> Mapping[str, Any]:
        return self._graph_attributes

    def node_id(self, node: Any) -> Any:
        # Edges refer to nodes by raw identifier, nodes() yields GraphNode.
        if isinstance(node, GraphNode):
            node = node.id
        return node if isinstance(node, Id) else str(node)

    def node_label(self, node: GraphNode) -> Any:
        return node.label

    def node_attributes(self, node: GraphNode) -> Mapping[str, Any]:
        return node.attributes

    def edge_label(self, edge: GraphEdge) -> Any:
        return edge.label

    def edge_attributes(self, edge: GraphEdge) -> Mapping[str, Any]:
        return edge.attributes


class NetworkXGraph(DotGraph):
    """Adapts a NetworkX graph to the DotGraph interface.

    Works with ``Graph``, ``DiGraph``, ``MultiGraph`` and ``MultiDiGraph``.
    A ``label`` entry in node or edge data becomes the label; every other
    entry becomes a DOT attribute, except ``None`` values which are skipped.
    """

    def __init__(self, graph: nx.Graph, name: Optional[str] = None):
        """Wrap a NetworkX graph.

        Args:
            graph: NetworkX graph to expose.
            name: Graph identifier. Falls back to ``graph.graph["name"]``,
                then to ``"G"``.
        """
        self.graph = graph
        self.name = name or graph.graph.get("name") or "G"
        logger.debug(
            f"Wrapping NetworkX graph with {graph.number_of_nodes()} nodes "
            f"and {graph.number_of_edges()} edges",
        )

    def graph_id(self) -> str:
        return self.name

    def nodes(self) -> Iterable[Any]:
        return iter(self.graph.nodes)

    def edges(self) -> Iterable[Any]:
        if self.graph.is_multigraph():
            return iter(self.graph.edges(keys=True, data=True))
        return iter(self.graph.edges(data=True))

    def is_directed(self) -> bool:
        return self.graph.is_directed()

    def node_id(self, node: Any) -> Any:
        return node if isinstance(node, Id) else str(node)

    def node_label(self, node: Any) -> Optional[LabelText]:
        return _label(self.graph.nodes[node])

    def node_attributes(self, node: Any) -> Mapping[str, Any]:
        return _attributes(self.graph.nodes[node])

    def edge_label(self, edge: Any) -> Optional[LabelText]:
        return _label(edge[-1])

    def edge_attributes(self, edge: Any) -> Mapping[str, Any]:
        return _attributes(edge[-1])

    def graph_attributes(self) -> Mapping[str, Any]:
        return {key: value for key, value in self.graph.graph.items() if key != "name"}


def _label(data: Mapping[str, Any]) -> Optional[LabelText]:
    label = data.get("label")
    if label is None:
        return None
    return LabelText.coerce(label)


def _attributes(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        key: value
        for key, value in data.items()
        if key != "label" and value is not None
    }
