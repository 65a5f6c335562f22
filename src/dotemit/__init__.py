"""dotemit - Graphviz DOT emitter.

Renders any graph that implements the ``DotGraph`` interface as DOT text,
handling identifier classification, quoting and escaping.
"""

from .core.errors import DotError, InvalidIdentifier, SinkWriteFailure
from .core.escaping import Id, LabelText, escape_html
from .core.graph import DotGraph
from .core.models import Arrow, ArrowShape, Fill, Kind, RankDir, RenderConfig, RenderOption, Side, Style
from .visualization.dot_generator import DOTGenerator, render, render_opts, to_string
from .visualization.graph_builder import NetworkXGraph, SimpleGraph

__version__ = "0.1.0"
__all__ = [
    "Arrow",
    "ArrowShape",
    "DOTGenerator",
    "DotError",
    "DotGraph",
    "Fill",
    "Id",
    "InvalidIdentifier",
    "Kind",
    "LabelText",
    "NetworkXGraph",
    "RankDir",
    "RenderConfig",
    "RenderOption",
    "Side",
    "SimpleGraph",
    "SinkWriteFailure",
    "Style",
    "escape_html",
    "render",
    "render_opts",
    "to_string",
]
