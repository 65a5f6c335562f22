"""Core dotemit module."""

from .errors import DotError, InvalidIdentifier, SinkWriteFailure
from .escaping import Id, LabelKind, LabelText, escape_html, format_value, is_bare_id, quote_id, quote_value
from .graph import DotGraph
from .models import (
    Arrow,
    ArrowShape,
    Fill,
    GraphEdge,
    GraphNode,
    Kind,
    RankDir,
    RenderConfig,
    RenderOption,
    Side,
    Style,
)

__all__ = [
    "Arrow",
    "ArrowShape",
    "DotError",
    "DotGraph",
    "Fill",
    "GraphEdge",
    "GraphNode",
    "Id",
    "InvalidIdentifier",
    "Kind",
    "LabelKind",
    "LabelText",
    "RankDir",
    "RenderConfig",
    "RenderOption",
    "Side",
    "SinkWriteFailure",
    "Style",
    "escape_html",
    "format_value",
    "is_bare_id",
    "quote_id",
    "quote_value",
]
