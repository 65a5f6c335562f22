"""DOT language generation from DotGraph implementations."""

import io
import logging
from typing import Any, Iterable, List, Optional, TextIO, Tuple

from ..core.errors import DotError, InvalidIdentifier, SinkWriteFailure
from ..core.escaping import Id, LabelText, check_key, format_value, quote_id
from ..core.graph import DotGraph
from ..core.models import RenderConfig, RenderOption

logger = logging.getLogger(__name__)


class _SinkWriter:
    """Forwards text to the caller's sink and reports rejected writes."""

    def __init__(self, sink: TextIO):
        self.sink = sink

    def write(self, text: str) -> None:
        try:
            self.sink.write(text)
        except (OSError, ValueError) as e:
            raise SinkWriteFailure(f"Output sink rejected a write: {e}") from e


class DOTGenerator:
    """Generates DOT language text from a DotGraph."""

    def __init__(self, config: Optional[RenderConfig] = None):
        """Initialize DOT generator with configuration.

        Args:
            config: Render configuration. Defaults to ``RenderConfig()``.
        """
        self.config = config or RenderConfig()
        self.indent = " " * self.config.indent

    def generate(self, graph: DotGraph) -> str:
        """Generate the DOT program for a graph as a string.

        Args:
            graph: Graph to render.

        Returns:
            DOT language string.
        """
        buffer = io.StringIO()
        self.write(graph, buffer)
        return buffer.getvalue()

    def write(self, graph: DotGraph, sink: TextIO) -> None:
        """Stream the DOT program for a graph into a sink.

        Statements are written one at a time, in the order the graph yields
        its nodes and edges. If an error aborts the render, whatever was
        already written stays in the sink.

        Args:
            graph: Graph to render.
            sink: Any object with a ``write(str)`` method.

        Raises:
            InvalidIdentifier: An identifier, key or label cannot be written.
            SinkWriteFailure: The sink raised while writing.
        """
        out = _SinkWriter(sink)
        kind = graph.kind()
        node_count = 0
        edge_count = 0

        try:
            graph_token = self._identifier(graph.graph_id(), "graph")
            logger.info(f"Generating DOT language for {kind.keyword} {graph_token}")

            prefix = "strict " if self.config.strict else ""
            out.write(f"{prefix}{kind.keyword} {graph_token} {{\n")

            for line in self._generate_graph_attributes(graph):
                out.write(line)

            for node in graph.nodes():
                out.write(self._format_node(graph, node))
                node_count += 1

            for edge in graph.edges():
                out.write(self._format_edge(graph, edge, kind.edge_op))
                edge_count += 1

            out.write("}\n")
        except DotError as e:
            logger.error(
                f"DOT generation aborted after {node_count} nodes and {edge_count} edges: {e}",
            )
            raise

        logger.info(
            f"DOT language generation completed ({node_count} nodes, {edge_count} edges)",
        )

    def _identifier(self, value: Any, entity: str) -> str:
        """Return the DOT token for an identifier, naming the entity on failure."""
        if isinstance(value, Id):
            return value.token
        try:
            return quote_id(str(value))
        except InvalidIdentifier as e:
            raise e.with_entity(entity) from e

    def _generate_graph_attributes(self, graph: DotGraph) -> List[str]:
        """Generate graph-level attribute statements."""
        attrs: List[Tuple[str, Any]] = []
        rank_dir = graph.rank_dir()
        if rank_dir is not None:
            attrs.append(("rankdir", rank_dir))
        attrs.extend(graph.graph_attributes().items())

        lines = []
        for key, token in self._format_attributes(attrs, "graph"):
            lines.append(f"{self.indent}{key}={token};\n")
        return lines

    def _format_node(self, graph: DotGraph, node: Any) -> str:
        """Format a node statement.

        Args:
            graph: Graph the node belongs to.
            node: Node as yielded by ``graph.nodes()``.

        Returns:
            Node statement line.
        """
        raw_id = graph.node_id(node)
        entity = f"node {_id_text(raw_id)!r}"
        node_token = self._identifier(raw_id, entity)

        attrs: List[Tuple[str, Any]] = []
        if not self.config.has(RenderOption.NO_NODE_LABELS):
            label = graph.node_label(node)
            if label is None and self.config.always_label:
                label = _id_text(raw_id)
            if label is not None:
                attrs.append(("label", LabelText.coerce(label)))
        if not self.config.has(RenderOption.NO_NODE_STYLES):
            attrs.append(("style", graph.node_style(node)))
        if not self.config.has(RenderOption.NO_NODE_COLORS):
            attrs.append(("color", graph.node_color(node)))
        attrs.append(("shape", graph.node_shape(node)))
        attrs.extend(graph.node_attributes(node).items())

        return f"{self.indent}{node_token}{self._attribute_list(attrs, entity)};\n"

    def _format_edge(self, graph: DotGraph, edge: Any, edge_op: str) -> str:
        """Format an edge statement.

        Args:
            graph: Graph the edge belongs to.
            edge: Edge as yielded by ``graph.edges()``.
            edge_op: ``->`` or ``--``.

        Returns:
            Edge statement line.
        """
        source = graph.source(edge)
        target = graph.target(edge)
        source_id = graph.node_id(source)
        target_id = graph.node_id(target)
        entity = f"edge {_id_text(source_id)!r} {edge_op} {_id_text(target_id)!r}"
        source_token = self._identifier(source_id, entity)
        target_token = self._identifier(target_id, entity)

        attrs: List[Tuple[str, Any]] = []
        if not self.config.has(RenderOption.NO_EDGE_LABELS):
            label = graph.edge_label(edge)
            if label is None and self.config.always_label:
                label = ""
            if label is not None:
                attrs.append(("label", LabelText.coerce(label)))
        if not self.config.has(RenderOption.NO_EDGE_STYLES):
            attrs.append(("style", graph.edge_style(edge)))
        if not self.config.has(RenderOption.NO_EDGE_COLORS):
            attrs.append(("color", graph.edge_color(edge)))
        if not self.config.has(RenderOption.NO_ARROWS):
            end_arrow = graph.edge_end_arrow(edge)
            start_arrow = graph.edge_start_arrow(edge)
            if not end_arrow.is_default:
                attrs.append(("arrowhead", end_arrow))
            if not start_arrow.is_default:
                attrs.append(("dir", "both"))
                attrs.append(("arrowtail", start_arrow))
        attrs.extend(graph.edge_attributes(edge).items())

        statement = f"{source_token} {edge_op} {target_token}"
        return f"{self.indent}{statement}{self._attribute_list(attrs, entity)};\n"

    def _attribute_list(self, attrs: Iterable[Tuple[str, Any]], entity: str) -> str:
        """Build a bracketed attribute list, or an empty string if nothing is set."""
        parts = [f"{key}={token}" for key, token in self._format_attributes(attrs, entity)]
        if not parts:
            return ""
        return f" [{', '.join(parts)}]"

    def _format_attributes(
        self, attrs: Iterable[Tuple[str, Any]], entity: str
    ) -> List[Tuple[str, str]]:
        """Validate keys and format values, dropping unset attributes."""
        formatted = []
        for key, value in attrs:
            try:
                check_key(key)
                token = format_value(value)
            except InvalidIdentifier as e:
                raise e.with_entity(f"attribute {key!r} of {entity}") from e
            if token is not None:
                formatted.append((key, token))
        return formatted


def _id_text(raw_id: Any) -> str:
    """Text of an identifier as the graph supplied it, before quoting."""
    return raw_id.name if isinstance(raw_id, Id) else str(raw_id)


def render(graph: DotGraph, sink: TextIO, config: Optional[RenderConfig] = None) -> None:
    """Write the DOT program for ``graph`` into ``sink``."""
    DOTGenerator(config).write(graph, sink)


def render_opts(graph: DotGraph, sink: TextIO, options: Iterable[RenderOption]) -> None:
    """Like ``render``, taking only a collection of suppression flags."""
    DOTGenerator(RenderConfig.from_options(options)).write(graph, sink)


def to_string(graph: DotGraph, config: Optional[RenderConfig] = None) -> str:
    """Return the DOT program for ``graph`` as a string."""
    return DOTGenerator(config).generate(graph)
