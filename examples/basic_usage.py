#!/usr/bin/env python3
"""Basic usage examples for dotemit."""

import io
import sys

import networkx as nx

from dotemit import (
    Arrow,
    ArrowShape,
    DotGraph,
    LabelText,
    NetworkXGraph,
    RankDir,
    RenderConfig,
    SimpleGraph,
    Style,
    render,
    to_string,
)


class CallGraph(DotGraph):
    """A caller-owned graph type exposed through the DotGraph interface."""

    def __init__(self, calls):
        self.calls = calls

    def graph_id(self):
        return "calls"

    def nodes(self):
        seen = []
        for caller, callee in self.calls:
            for name in (caller, callee):
                if name not in seen:
                    seen.append(name)
        return seen

    def edges(self):
        return self.calls

    def node_label(self, node):
        return LabelText.escaped(f"{node}()\\l")

    def edge_end_arrow(self, edge):
        return Arrow.from_shapes([ArrowShape.vee()])

    def rank_dir(self):
        return RankDir.LEFT_RIGHT


def main():
    """Demonstrate basic dotemit usage."""

    # Example 1: Build a small graph by hand and stream it to stdout
    graph = SimpleGraph("G")
    graph.add_node("A")
    graph.add_node("B", label='He said "hi"', style=Style.FILLED)
    graph.add_edge("A", "B", label="go")
    render(graph, sys.stdout)

    # Example 2: Implement the interface for your own graph type
    calls = CallGraph([("main", "parse"), ("main", "emit"), ("parse", "lex")])
    print(to_string(calls))

    # Example 3: Render a NetworkX graph, undirected, with strict mode
    g = nx.Graph(name="friends")
    g.add_edge("alice", "bob", label="met 2019")
    g.add_edge("bob", "carol")
    print(to_string(NetworkXGraph(g), RenderConfig(strict=True)))

    # Example 4: Write into any object with a write() method
    buffer = io.StringIO()
    render(graph, buffer, RenderConfig(always_label=True, indent=2))
    print(buffer.getvalue())


if __name__ == "__main__":
    main()
