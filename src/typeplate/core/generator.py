"""Mesh generation orchestration.

This module ties the pipeline together: lay out the text with a font, then
assemble the solids for the requested topology.

Key components:
- MeshGenerator: Orchestrator with structured logging and run statistics
- generate_mesh: One-shot convenience function
"""

import time
import traceback

import structlog

from typeplate.config import MeshParams, TypeplateSettings
from typeplate.core.assembler import MeshAssembler
from typeplate.core.layout import layout_text, split_lines
from typeplate.domain import FontProvider, MeshResult, TextLayout
from typeplate.utils import GenerationLogger, GenerationStats, configure_logging


class MeshGenerator:
    """Orchestrates text layout and mesh assembly.

    Manages the complete workflow:
    1. Lay out the text (measurement, alignment, glyph decoding)
    2. Extrude and combine solids for the requested topology
    3. Record statistics for the run

    Each call is independent; hosts that regenerate on every settings change
    simply call ``generate`` again and keep the newest result.

    Example:
        settings = TypeplateSettings()
        generator = MeshGenerator(settings)
        with FontReader(Path("font.ttf")) as font:
            result = generator.generate(font, "Hello")
        print(result.dimensions)
    """

    def __init__(
        self,
        settings: TypeplateSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            settings: Typeplate settings (defaults if None)
            logger: Structured logger; logging is configured from
                ``settings.logging`` when omitted
        """
        self.settings = settings or TypeplateSettings()
        if logger is None:
            logger = configure_logging(
                log_file=self.settings.logging.log_file,
                console_level=self.settings.logging.log_level,
                file_level=self.settings.logging.file_log_level,
            )
        self.logger = logger
        self.assembler = MeshAssembler(self.settings.geometry)
        self._last_stats = GenerationStats()

    def layout(self, font: FontProvider, text: str, params: MeshParams | None = None) -> TextLayout:
        """Lay out text with the layout fields of ``params``."""
        params = params or self.settings.mesh
        return layout_text(
            font,
            text,
            size=params.size,
            spacing=params.spacing,
            line_spacing=params.line_spacing,
            align=params.align,
            max_workers=self.settings.processing.max_workers,
        )

    def generate(
        self,
        font: FontProvider,
        text: str,
        params: MeshParams | None = None,
    ) -> MeshResult:
        """Generate solids for a string.

        Args:
            font: Glyph outline provider
            text: Text to render, lines separated by newlines
            params: Mesh parameters (``settings.mesh`` if None)

        Returns:
            MeshResult with solids and dimensions

        Raises:
            ConfigurationError: If parameters are structurally invalid
        """
        params = params or self.settings.mesh
        generation_logger = GenerationLogger(self.logger)
        stats = generation_logger.stats
        stats.start_time = time.time()

        generation_logger.log_start(text, params.topology.value)

        try:
            layout = self.layout(font, text, params)
            stats.layout_time = time.time()
            generation_logger.log_layout(
                line_count=len(split_lines(text)),
                glyph_count=len(layout.glyphs),
                width=layout.bounds.width,
                height=layout.bounds.height,
            )

            result = self.assembler.assemble(layout, params)
        except Exception as e:
            generation_logger.log_error(e, traceback=traceback.format_exc())
            raise
        finally:
            stats.end_time = time.time()
            self._last_stats = stats

        solids = result.solids()
        generation_logger.log_complete(
            vertex_count=sum(len(s.vertices) for s in solids),
            face_count=sum(len(s.faces) for s in solids),
            duration_ms=stats.duration_seconds * 1000,
        )
        return result

    @property
    def last_stats(self) -> GenerationStats:
        """Statistics of the most recent ``generate`` call."""
        return self._last_stats


def generate_mesh(
    font: FontProvider,
    text: str,
    params: MeshParams | None = None,
    settings: TypeplateSettings | None = None,
) -> MeshResult:
    """Lay out and assemble text in one call, without logging setup."""
    settings = settings or TypeplateSettings()
    params = params or settings.mesh
    layout = layout_text(
        font,
        text,
        size=params.size,
        spacing=params.spacing,
        line_spacing=params.line_spacing,
        align=params.align,
        max_workers=settings.processing.max_workers,
    )
    return MeshAssembler(settings.geometry).assemble(layout, params)
