"""Data models and enums for dotemit."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Kind(str, Enum):
    """Graph kinds."""

    DIGRAPH = "digraph"
    GRAPH = "graph"

    @property
    def keyword(self) -> str:
        return self.value

    @property
    def edge_op(self) -> str:
        return "->" if self is Kind.DIGRAPH else "--"


class Style(str, Enum):
    """Node and edge styles."""

    NONE = ""
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"
    BOLD = "bold"
    ROUNDED = "rounded"
    DIAGONALS = "diagonals"
    FILLED = "filled"
    STRIPED = "striped"
    WEDGED = "wedged"


class RankDir(str, Enum):
    """Graph layout direction."""

    TOP_BOTTOM = "TB"
    LEFT_RIGHT = "LR"
    BOTTOM_TOP = "BT"
    RIGHT_LEFT = "RL"


class RenderOption(str, Enum):
    """Flags that suppress groups of attributes in the output."""

    NO_EDGE_LABELS = "no-edge-labels"
    NO_NODE_LABELS = "no-node-labels"
    NO_EDGE_STYLES = "no-edge-styles"
    NO_EDGE_COLORS = "no-edge-colors"
    NO_NODE_STYLES = "no-node-styles"
    NO_NODE_COLORS = "no-node-colors"
    NO_ARROWS = "no-arrows"


class Fill(str, Enum):
    """Arrow fill modifier."""

    OPEN = "o"
    FILLED = ""


class Side(str, Enum):
    """Arrow side modifier."""

    LEFT = "l"
    RIGHT = "r"
    BOTH = ""


# Shapes that accept the "o" (open) modifier.
_FILLABLE = {"normal", "box", "icurve", "diamond", "dot", "inv"}
# Shapes that accept the "l"/"r" side modifier.
_SIDED = {"normal", "box", "crow", "curve", "icurve", "diamond", "inv", "tee", "vee"}


@dataclass(frozen=True)
class ArrowShape:
    """A single primitive arrow shape with its modifiers."""

    name: str
    fill: Fill = Fill.FILLED
    side: Side = Side.BOTH

    def __post_init__(self) -> None:
        if self.name != "none" and self.name not in _FILLABLE | _SIDED:
            raise ValueError(f"Unknown arrow shape: {self.name}")
        if self.fill is Fill.OPEN and self.name not in _FILLABLE:
            raise ValueError(f"Arrow shape {self.name} cannot be open")
        if self.side is not Side.BOTH and self.name not in _SIDED:
            raise ValueError(f"Arrow shape {self.name} cannot be clipped to one side")

    @classmethod
    def none(cls) -> ArrowShape:
        return cls("none")

    @classmethod
    def normal(cls, fill: Fill = Fill.FILLED, side: Side = Side.BOTH) -> ArrowShape:
        return cls("normal", fill, side)

    @classmethod
    def boxed(cls, fill: Fill = Fill.FILLED, side: Side = Side.BOTH) -> ArrowShape:
        return cls("box", fill, side)

    @classmethod
    def crow(cls, side: Side = Side.BOTH) -> ArrowShape:
        return cls("crow", side=side)

    @classmethod
    def curve(cls, side: Side = Side.BOTH) -> ArrowShape:
        return cls("curve", side=side)

    @classmethod
    def icurve(cls, fill: Fill = Fill.FILLED, side: Side = Side.BOTH) -> ArrowShape:
        return cls("icurve", fill, side)

    @classmethod
    def diamond(cls, fill: Fill = Fill.FILLED, side: Side = Side.BOTH) -> ArrowShape:
        return cls("diamond", fill, side)

    @classmethod
    def dot(cls, fill: Fill = Fill.FILLED) -> ArrowShape:
        return cls("dot", fill)

    @classmethod
    def inv(cls, fill: Fill = Fill.FILLED, side: Side = Side.BOTH) -> ArrowShape:
        return cls("inv", fill, side)

    @classmethod
    def tee(cls, side: Side = Side.BOTH) -> ArrowShape:
        return cls("tee", side=side)

    @classmethod
    def vee(cls, side: Side = Side.BOTH) -> ArrowShape:
        return cls("vee", side=side)

    def to_dot_string(self) -> str:
        """Return the DOT arrow-shape token, e.g. ``olnormal``."""
        return f"{self.fill.value}{self.side.value}{self.name}"


@dataclass(frozen=True)
class Arrow:
    """An arrow built from up to four stacked shapes.

    An empty arrow means "whatever Graphviz draws by default" and is never
    written to the output.
    """

    shapes: tuple[ArrowShape, ...] = ()

    def __post_init__(self) -> None:
        if len(self.shapes) > 4:
            raise ValueError("An arrow may combine at most four shapes")

    @classmethod
    def default(cls) -> Arrow:
        return cls()

    @classmethod
    def none(cls) -> Arrow:
        return cls((ArrowShape.none(),))

    @classmethod
    def normal(cls) -> Arrow:
        return cls((ArrowShape.normal(),))

    @classmethod
    def from_shapes(cls, shapes: Iterable[ArrowShape]) -> Arrow:
        return cls(tuple(shapes))

    @property
    def is_default(self) -> bool:
        return not self.shapes

    def to_dot_string(self) -> str:
        return "".join(shape.to_dot_string() for shape in self.shapes)


@dataclass
class GraphNode:
    """Graph node representation."""

    id: Any
    label: Any = None
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphEdge:
    """Graph edge representation."""

    source: Any
    target: Any
    label: Any = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, index: int) -> Any:
        return (self.source, self.target)[index]


class RenderConfig(BaseModel):
    """Configuration for DOT emission."""

    options: set[RenderOption] = Field(default_factory=set)
    indent: int = Field(default=4, ge=0)
    strict: bool = False
    always_label: bool = False

    @classmethod
    def from_options(cls, options: Iterable[RenderOption]) -> RenderConfig:
        """Build a config that only sets the given suppression flags."""
        return cls(options=set(options))

    def has(self, option: RenderOption) -> bool:
        return option in self.options
