"""The read-only interface a graph must provide to be written as DOT."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from .escaping import Id, LabelText
from .models import Arrow, Kind, RankDir, Style


class DotGraph(ABC):
    """Base class for graphs that can be rendered to DOT.

    Subclasses supply ``graph_id``, ``nodes`` and ``edges``. Every other
    hook has a default that leaves the corresponding attribute out. Edges
    are ``(source, target)`` pairs unless ``source`` and ``target`` are
    overridden.

    Nothing here is called with the intent to mutate; the renderer only
    reads, and iterates ``nodes()`` and ``edges()`` once each per render.
    """

    @abstractmethod
    def graph_id(self) -> str | Id:
        """Name written after the ``graph``/``digraph`` keyword."""

    @abstractmethod
    def nodes(self) -> Iterable[Any]:
        """Nodes in emission order."""

    @abstractmethod
    def edges(self) -> Iterable[Any]:
        """Edges in emission order."""

    def source(self, edge: Any) -> Any:
        return edge[0]

    def target(self, edge: Any) -> Any:
        return edge[1]

    def is_directed(self) -> bool:
        return True

    def kind(self) -> Kind:
        return Kind.DIGRAPH if self.is_directed() else Kind.GRAPH

    def node_id(self, node: Any) -> str | Id:
        return str(node)

    def node_label(self, node: Any) -> LabelText | str | None:
        """Label for a node; None means the node's own identifier."""
        return None

    def edge_label(self, edge: Any) -> LabelText | str | None:
        return None

    def node_style(self, node: Any) -> Style:
        return Style.NONE

    def edge_style(self, edge: Any) -> Style:
        return Style.NONE

    def node_color(self, node: Any) -> LabelText | str | None:
        return None

    def edge_color(self, edge: Any) -> LabelText | str | None:
        return None

    def node_shape(self, node: Any) -> LabelText | str | None:
        return None

    def edge_start_arrow(self, edge: Any) -> Arrow:
        return Arrow.default()

    def edge_end_arrow(self, edge: Any) -> Arrow:
        return Arrow.default()

    def node_attributes(self, node: Any) -> Mapping[str, Any]:
        return {}

    def edge_attributes(self, edge: Any) -> Mapping[str, Any]:
        return {}

    def graph_attributes(self) -> Mapping[str, Any]:
        return {}

    def rank_dir(self) -> RankDir | None:
        return None
