"""Visualization module for DOT generation and Graphviz hand-off."""

from .dot_generator import DOTGenerator
from .graph_builder import NetworkXGraph, SimpleGraph
from .renderer import GraphvizBridge

__all__ = ["DOTGenerator", "GraphvizBridge", "NetworkXGraph", "SimpleGraph"]
