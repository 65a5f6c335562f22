"""Hand-off of generated DOT text to Graphviz."""

import logging
import shutil
from typing import Optional

import graphviz

from ..core.graph import DotGraph
from ..core.models import RenderConfig
from .dot_generator import DOTGenerator

logger = logging.getLogger(__name__)


class GraphvizBridge:
    """Passes DOT text to the Graphviz tools through the ``graphviz`` package.

    Layout and drawing happen in the external ``dot`` process; this class
    only builds the source and collects the result.
    """

    def __init__(self, config: Optional[RenderConfig] = None, engine: str = "dot"):
        """Initialize the bridge.

        Args:
            config: Configuration used when generating DOT text.
            engine: Graphviz engine to use (dot, neato, fdp, sfdp, circo, twopi).
        """
        self.generator = DOTGenerator(config)
        self.engine = engine

    @staticmethod
    def is_available(engine: str = "dot") -> bool:
        """Check whether a Graphviz executable is on PATH."""
        return shutil.which(engine) is not None

    def to_source(self, graph: DotGraph) -> graphviz.Source:
        """Wrap the DOT program for a graph in a ``graphviz.Source``.

        Args:
            graph: Graph to render.

        Returns:
            Source object ready to be piped or rendered by Graphviz.
        """
        return graphviz.Source(self.generator.generate(graph), engine=self.engine)

    def render_to_bytes(self, graph: DotGraph, output_format: str = "svg") -> bytes:
        """Lay out and draw a graph with Graphviz, returning the output bytes.

        Args:
            graph: Graph to render.
            output_format: Graphviz output format (svg, png, pdf, json, ...).

        Returns:
            Rendered graph as bytes.
        """
        source = self.to_source(graph)
        logger.info(f"Piping DOT source through {self.engine} as {output_format}")
        try:
            return source.pipe(format=output_format)
        except graphviz.ExecutableNotFound as e:
            raise RuntimeError(f"Graphviz executable not found: {e}") from e
        except graphviz.CalledProcessError as e:
            raise RuntimeError(f"Graphviz failed to render graph: {e}") from e

    def validate_dot(self, dot_content: str) -> bool:
        """Check that Graphviz accepts a DOT program.

        Args:
            dot_content: DOT language content to validate.

        Returns:
            True if Graphviz parsed it, False otherwise.

        Raises:
            RuntimeError: The Graphviz executable is not installed, so no
                verdict is possible.
        """
        try:
            graphviz.Source(dot_content, engine=self.engine).pipe(format="canon")
            return True
        except graphviz.ExecutableNotFound as e:
            raise RuntimeError(f"Graphviz executable not found: {e}") from e
        except graphviz.CalledProcessError as e:
            logger.error(f"DOT validation failed: {e}")
            return False
