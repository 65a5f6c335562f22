"""Tests for DOT generation."""

import io
import logging

import pytest

from dotemit import (
    Arrow,
    ArrowShape,
    DOTGenerator,
    DotGraph,
    Id,
    InvalidIdentifier,
    LabelText,
    RankDir,
    RenderConfig,
    RenderOption,
    Side,
    SinkWriteFailure,
    Style,
    render,
    render_opts,
    to_string,
)


class PairGraph(DotGraph):
    """Graph whose edges are plain (source, target) pairs."""

    def __init__(self, name, nodes, edges, directed=True, labels=None, attributes=None):
        self.name = name
        self._nodes = nodes
        self._edges = edges
        self.directed = directed
        self.labels = labels or {}
        self.attributes = attributes or {}

    def graph_id(self):
        return self.name

    def nodes(self):
        return iter(self._nodes)

    def edges(self):
        return iter(self._edges)

    def is_directed(self):
        return self.directed

    def node_label(self, node):
        return self.labels.get(node)

    def edge_label(self, edge):
        return self.labels.get(edge)

    def node_attributes(self, node):
        return self.attributes.get(node, {})

    def edge_attributes(self, edge):
        return self.attributes.get(edge, {})


class Edge:
    def __init__(self, source, target, label, style=Style.NONE, color=None,
                 start_arrow=None, end_arrow=None):
        self.source = source
        self.target = target
        self.label = label
        self.style = style
        self.color = color
        self.start_arrow = start_arrow or Arrow.default()
        self.end_arrow = end_arrow or Arrow.default()


class LabelledGraph(DotGraph):
    """Numbered nodes N0..Nn with optional labels and styles per node."""

    def __init__(self, name, node_labels, edges, node_styles=None, escaped=False):
        self.name = name
        self.node_labels = node_labels
        self.edge_list = edges
        self.node_styles = node_styles or [Style.NONE] * len(node_labels)
        self.escaped = escaped

    def graph_id(self):
        return Id(self.name)

    def nodes(self):
        return range(len(self.node_labels))

    def edges(self):
        return self.edge_list

    def source(self, edge):
        return edge.source

    def target(self, edge):
        return edge.target

    def node_id(self, node):
        return Id(f"N{node}")

    def node_label(self, node):
        label = self.node_labels[node]
        if label is None:
            return LabelText.label(f"N{node}")
        return LabelText.escaped(label) if self.escaped else LabelText.label(label)

    def edge_label(self, edge):
        return LabelText.label(edge.label)

    def node_style(self, node):
        return self.node_styles[node]

    def edge_style(self, edge):
        return edge.style

    def edge_color(self, edge):
        return edge.color

    def edge_start_arrow(self, edge):
        return edge.start_arrow

    def edge_end_arrow(self, edge):
        return edge.end_arrow


class RecordingSink:
    """Sink that records every write and can fail on a given call."""

    def __init__(self, fail_on=None, error=None):
        self.writes = []
        self.fail_on = fail_on
        self.error = error or OSError("stream closed")

    def write(self, text):
        if self.fail_on is not None and len(self.writes) == self.fail_on:
            raise self.error
        self.writes.append(text)


def test_directed_graph_with_labelled_edge():
    """Test the two-node directed graph with one labelled edge."""
    graph = PairGraph("G", ["A", "B"], [("A", "B")], labels={("A", "B"): "go"})
    assert to_string(graph) == 'digraph G {\n    A;\n    B;\n    A -> B [label="go"];\n}\n'


def test_label_with_quotes():
    """Test that quotes inside a label are backslash-escaped."""
    graph = PairGraph("G", ["n"], [], labels={"n": 'He said "hi"'})
    assert '    n [label="He said \\"hi\\""];\n' in to_string(graph)


def test_undirected_graph_without_edges():
    """Test that an undirected graph without edges has only node statements."""
    graph = PairGraph("G", ["A", "B"], [], directed=False)
    output = to_string(graph)
    assert output == "graph G {\n    A;\n    B;\n}\n"
    assert "--" not in output


@pytest.mark.parametrize("directed,expected", [(True, "digraph G {\n}\n"), (False, "graph G {\n}\n")])
def test_empty_graph(directed, expected):
    """Test that an empty graph is a minimal valid program."""
    assert to_string(PairGraph("G", [], [], directed=directed)) == expected


@pytest.mark.parametrize("directed", [True, False])
def test_edge_operator_follows_kind(directed):
    """Test that every edge uses the operator of the graph kind."""
    edges = [("a", "b"), ("b", "c"), ("c", "a"), ("a", "a")]
    output = to_string(PairGraph("G", ["a", "b", "c"], edges, directed=directed))
    lines = output.splitlines()
    assert lines[0] == ("digraph G {" if directed else "graph G {")
    edge_lines = [line for line in lines if "->" in line or "--" in line]
    assert len(edge_lines) == 4
    op, other = ("->", "--") if directed else ("--", "->")
    assert all(op in line and other not in line for line in edge_lines)


def test_order_is_preserved_and_nothing_deduplicated():
    """Test that nodes and edges are written exactly as yielded."""
    nodes = ["z", "a", "m", "a"]
    edges = [("m", "z"), ("a", "m"), ("m", "z")]
    output = to_string(PairGraph("G", nodes, edges))
    assert output.splitlines()[1:-1] == [
        "    z;",
        "    a;",
        "    m;",
        "    a;",
        "    m -> z;",
        "    a -> m;",
        "    m -> z;",
    ]


def test_render_is_idempotent():
    """Test that rendering the same graph twice gives identical output."""
    graph = PairGraph(
        "G",
        ["A", "B"],
        [("A", "B")],
        labels={"A": "first\nline", ("A", "B"): "x"},
        attributes={"A": {"color": "red", "shape": "box"}},
    )
    assert to_string(graph) == to_string(graph)


def test_attributes_follow_mapping_order():
    """Test that extra attributes come after the label in mapping order."""
    graph = PairGraph(
        "G",
        ["A"],
        [],
        labels={"A": "Alpha"},
        attributes={"A": {"shape": "box", "color": "#00ff00", "penwidth": 2, "skip": None}},
    )
    assert '    A [label="Alpha", shape=box, color="#00ff00", penwidth=2];\n' in to_string(graph)


def test_identifiers_are_quoted_when_needed():
    """Test quoting of graph, node and edge identifiers."""
    graph = PairGraph("my graph", ["first node", "2nd", "ok"], [("first node", "ok")])
    assert to_string(graph) == (
        'digraph "my graph" {\n'
        '    "first node";\n'
        '    "2nd";\n'
        "    ok;\n"
        '    "first node" -> ok;\n'
        "}\n"
    )


def test_lazy_node_sequence():
    """Test that generators are accepted for nodes and edges."""

    class LazyGraph(PairGraph):
        def nodes(self):
            for i in range(3):
                yield i

        def edges(self):
            yield from ((i, i + 1) for i in range(2))

    output = to_string(LazyGraph("G", None, None))
    assert output == "digraph G {\n    0;\n    1;\n    2;\n    0 -> 1;\n    1 -> 2;\n}\n"


def test_single_node():
    """Test a single labelled node."""
    output = to_string(LabelledGraph("single_node", [None], []))
    assert output == 'digraph single_node {\n    N0 [label="N0"];\n}\n'


def test_single_node_with_style():
    """Test a single node with a style."""
    output = to_string(LabelledGraph("single_node", [None], [], [Style.DASHED]))
    assert output == 'digraph single_node {\n    N0 [label="N0", style=dashed];\n}\n'


def test_single_edge_with_style_and_color():
    """Test an edge with label, style and color."""
    graph = LabelledGraph("single_edge", [None, None], [Edge(0, 1, "E", Style.BOLD, "red")])
    assert to_string(graph) == (
        "digraph single_edge {\n"
        '    N0 [label="N0"];\n'
        '    N1 [label="N1"];\n'
        '    N0 -> N1 [label="E", style=bold, color=red];\n'
        "}\n"
    )


def test_some_nodes_labelled():
    """Test a mix of explicit and default labels."""
    graph = LabelledGraph(
        "test_some_labelled",
        ["A", None],
        [Edge(0, 1, "A-1")],
        [Style.NONE, Style.DOTTED],
    )
    assert to_string(graph) == (
        "digraph test_some_labelled {\n"
        '    N0 [label="A"];\n'
        '    N1 [label="N1", style=dotted];\n'
        '    N0 -> N1 [label="A-1"];\n'
        "}\n"
    )


def test_hasse_diagram():
    """Test labels with braces and commas and colored edges."""
    graph = LabelledGraph(
        "hasse_diagram",
        ["{x,y}", "{x}", "{y}", "{}"],
        [
            Edge(0, 1, "", color="green"),
            Edge(0, 2, "", color="blue"),
            Edge(1, 3, "", color="red"),
            Edge(2, 3, "", color="black"),
        ],
    )
    assert to_string(graph) == (
        "digraph hasse_diagram {\n"
        '    N0 [label="{x,y}"];\n'
        '    N1 [label="{x}"];\n'
        '    N2 [label="{y}"];\n'
        '    N3 [label="{}"];\n'
        '    N0 -> N1 [label="", color=green];\n'
        '    N0 -> N2 [label="", color=blue];\n'
        '    N1 -> N3 [label="", color=red];\n'
        '    N2 -> N3 [label="", color=black];\n'
        "}\n"
    )


def test_utf8_labels():
    """Test that non-ASCII labels are written as UTF-8 text."""
    graph = LabelledGraph("utf8_diagram", ["Λ", "ι"], [Edge(0, 1, "☕")])
    assert to_string(graph) == (
        "digraph utf8_diagram {\n"
        '    N0 [label="Λ"];\n'
        '    N1 [label="ι"];\n'
        '    N0 -> N1 [label="☕"];\n'
        "}\n"
    )


def test_left_aligned_text():
    """Test that escString labels keep Graphviz justification escapes."""
    graph = LabelledGraph(
        "syntax_tree",
        ["if test {\\l    branch1\\l} else {\\l    branch2\\l}\\lafterward\\l",
         "branch1", "branch2", "afterward"],
        [Edge(0, 1, "then"), Edge(0, 2, "else"), Edge(1, 3, ";"), Edge(2, 3, ";")],
        escaped=True,
    )
    output = to_string(graph)
    assert '    N0 [label="if test {\\l    branch1\\l} else {\\l    branch2\\l}\\lafterward\\l"];\n' in output
    assert '    N1 -> N3 [label=";"];\n' in output


def test_single_end_arrow():
    """Test an edge with a custom arrow head."""
    edge = Edge(0, 1, "A-1", end_arrow=Arrow.from_shapes([ArrowShape.crow()]))
    output = to_string(LabelledGraph("g", ["A", None], [edge]))
    assert '    N0 -> N1 [label="A-1", arrowhead="crow"];\n' in output


def test_start_and_end_arrows():
    """Test an edge with both arrow ends set."""
    edge = Edge(
        0,
        1,
        "A-1",
        start_arrow=Arrow.from_shapes([ArrowShape.tee()]),
        end_arrow=Arrow.from_shapes([ArrowShape.crow(Side.LEFT)]),
    )
    output = to_string(LabelledGraph("g", ["A", None], [edge]))
    assert '    N0 -> N1 [label="A-1", arrowhead="lcrow", dir=both, arrowtail="tee"];\n' in output


def test_render_options_suppress_attributes():
    """Test that render options drop the matching attribute groups."""
    edge = Edge(0, 1, "E", Style.BOLD, "red", end_arrow=Arrow.none())
    graph = LabelledGraph("g", ["A"] * 2, [edge], [Style.FILLED, Style.NONE])
    sink = io.StringIO()
    render_opts(
        graph,
        sink,
        [
            RenderOption.NO_NODE_LABELS,
            RenderOption.NO_NODE_STYLES,
            RenderOption.NO_EDGE_LABELS,
            RenderOption.NO_EDGE_STYLES,
            RenderOption.NO_EDGE_COLORS,
            RenderOption.NO_ARROWS,
        ],
    )
    assert sink.getvalue() == "digraph g {\n    N0;\n    N1;\n    N0 -> N1;\n}\n"


def test_always_label_writes_default_labels():
    """Test that always_label writes the identifier and empty edge labels."""
    graph = PairGraph("g", [0, 1], [(0, 1)], directed=False)
    output = to_string(graph, RenderConfig(always_label=True))
    assert output == 'graph g {\n    0 [label="0"];\n    1 [label="1"];\n    0 -- 1 [label=""];\n}\n'


def test_rank_dir_and_graph_attributes():
    """Test graph-level statements."""

    class Ranked(PairGraph):
        def rank_dir(self):
            return RankDir.LEFT_RIGHT

        def graph_attributes(self):
            return {"bgcolor": "white", "label": LabelText.label("My graph")}

    output = to_string(Ranked("di", ["a"], []))
    assert output == 'digraph di {\n    rankdir=LR;\n    bgcolor=white;\n    label="My graph";\n    a;\n}\n'


def test_strict_and_indent():
    """Test the strict prefix and custom indentation."""
    output = to_string(PairGraph("G", ["a"], [("a", "a")]), RenderConfig(strict=True, indent=2))
    assert output == "strict digraph G {\n  a;\n  a -> a;\n}\n"


def test_generator_writes_one_statement_per_call():
    """Test that output is streamed statement by statement."""
    sink = RecordingSink()
    render(PairGraph("G", ["a", "b"], [("a", "b")]), sink)
    assert sink.writes == ["digraph G {\n", "    a;\n", "    b;\n", "    a -> b;\n", "}\n"]


def test_sink_failure_keeps_partial_output():
    """Test that a failing sink aborts the render without rollback."""
    sink = RecordingSink(fail_on=2)
    with pytest.raises(SinkWriteFailure) as exc_info:
        render(PairGraph("G", ["a", "b", "c"], []), sink)
    assert sink.writes == ["digraph G {\n", "    a;\n"]
    assert isinstance(exc_info.value.__cause__, OSError)


def test_closed_stream_is_a_sink_failure():
    """Test that writing to a closed stream raises SinkWriteFailure."""
    sink = io.StringIO()
    sink.close()
    with pytest.raises(SinkWriteFailure):
        render(PairGraph("G", [], []), sink)


def test_empty_graph_id_is_rejected():
    """Test that an empty graph name aborts before anything is written."""
    sink = RecordingSink()
    with pytest.raises(InvalidIdentifier) as exc_info:
        render(PairGraph("", ["a"], []), sink)
    assert exc_info.value.entity == "graph"
    assert sink.writes == []


def test_invalid_node_id_names_the_node():
    """Test that an invalid node identifier identifies the node."""
    sink = RecordingSink()
    with pytest.raises(InvalidIdentifier) as exc_info:
        render(PairGraph("G", ["a", ""], []), sink)
    assert exc_info.value.entity == "node ''"
    assert sink.writes == ["digraph G {\n", "    a;\n"]


def test_invalid_edge_endpoint_names_the_edge():
    """Test that an invalid edge endpoint identifies the edge."""
    with pytest.raises(InvalidIdentifier) as exc_info:
        to_string(PairGraph("G", ["a"], [("a", "\x00")]))
    assert exc_info.value.entity == "edge 'a' -> '\\x00'"


def test_invalid_attribute_key():
    """Test that attribute names must be plain identifiers."""
    graph = PairGraph("G", ["a"], [], attributes={"a": {"bad key": "x"}})
    with pytest.raises(InvalidIdentifier) as exc_info:
        to_string(graph)
    assert exc_info.value.entity == "attribute 'bad key' of node 'a'"
    assert "bad key" in str(exc_info.value)


def test_invalid_label():
    """Test that a label containing NUL aborts the render."""
    graph = PairGraph("G", ["a", "b"], [("a", "b")], labels={("a", "b"): "nul\x00"})
    with pytest.raises(InvalidIdentifier) as exc_info:
        to_string(graph)
    assert exc_info.value.entity == "attribute 'label' of edge 'a' -> 'b'"


def test_generator_logs_progress(caplog):
    """Test that generation logs its start and completion."""
    with caplog.at_level(logging.INFO, logger="dotemit"):
        DOTGenerator().generate(PairGraph("G", ["a"], []))
    messages = [record.getMessage() for record in caplog.records]
    assert any("Generating DOT language" in m for m in messages)
    assert any("1 nodes, 0 edges" in m for m in messages)


def test_generator_logs_abort(caplog):
    """Test that an aborted render is logged as an error."""
    with caplog.at_level(logging.ERROR, logger="dotemit"):
        with pytest.raises(InvalidIdentifier):
            DOTGenerator().generate(PairGraph("G", [""], []))
    assert any(record.levelno == logging.ERROR for record in caplog.records)


def test_empty_and_blank_attribute_values():
    """Test that empty and whitespace-only values are written quoted."""
    graph = PairGraph("G", ["A"], [], attributes={"A": {"xlabel": "", "tooltip": "\n"}})
    assert '    A [xlabel="", tooltip="\\n"];\n' in to_string(graph)


def test_keyword_attribute_key_on_node():
    """Test that a keyword attribute name on a node aborts the render."""
    graph = PairGraph("G", ["A"], [], attributes={"A": {"edge": "y"}})
    with pytest.raises(InvalidIdentifier) as exc_info:
        to_string(graph)
    assert exc_info.value.entity == "attribute 'edge' of node 'A'"


def test_keyword_graph_attribute_key():
    """Test that a keyword graph attribute name aborts before any statement."""

    class WithDefaults(PairGraph):
        def graph_attributes(self):
            return {"node": "x"}

    sink = RecordingSink()
    with pytest.raises(InvalidIdentifier) as exc_info:
        render(WithDefaults("G", ["A"], []), sink)
    assert exc_info.value.entity == "attribute 'node' of graph"
    assert sink.writes == ["digraph G {\n"]


def test_error_entity_uses_node_identifier_text():
    """Test that errors name nodes by identifier, not by the node object."""
    from dotemit import SimpleGraph

    graph = SimpleGraph("G")
    graph.add_node("", label="empty")
    with pytest.raises(InvalidIdentifier) as exc_info:
        to_string(graph)
    assert exc_info.value.entity == "node ''"

    graph = LabelledGraph("g", [None], [])
    graph.node_labels = ["bad\x00"]
    with pytest.raises(InvalidIdentifier) as exc_info:
        to_string(graph)
    assert exc_info.value.entity == "attribute 'label' of node 'N0'"
