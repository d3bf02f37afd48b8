"""Logging utilities for Typeplate."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog

# Set on handlers installed here so reconfiguring replaces them.
_HANDLER_MARK = "_typeplate_handler"


@dataclass
class GenerationStats:
    """Statistics from one mesh generation run."""

    topology: str | None = None
    line_count: int = 0
    glyph_count: int = 0
    vertex_count: int = 0
    face_count: int = 0
    start_time: float | None = None
    layout_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate total duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def layout_seconds(self) -> float:
        """Calculate time spent laying out and decoding glyphs."""
        if self.start_time and self.layout_time:
            return self.layout_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_MARK, True)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(console_handler, _HANDLER_MARK, True)
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("typeplate")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class GenerationLogger:
    """Logger for tracking mesh generation progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = GenerationStats()

    def log_start(self, text: str, topology: str) -> None:
        """Log start of a generation run."""
        self._logger.info("Generating mesh", text=text, topology=topology)
        self._stats.topology = topology

    def log_layout(
        self,
        line_count: int,
        glyph_count: int,
        width: float,
        height: float,
    ) -> None:
        """Log text layout results."""
        self._logger.debug(
            "Text laid out",
            lines=line_count,
            glyphs=glyph_count,
            width=round(width, 3),
            height=round(height, 3),
        )
        self._stats.line_count = line_count
        self._stats.glyph_count = glyph_count

    def log_complete(
        self,
        vertex_count: int,
        face_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful assembly."""
        self._logger.info(
            "Mesh generated",
            vertices=vertex_count,
            faces=face_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.vertex_count = vertex_count
        self._stats.face_count = face_count

    def log_error(self, error: Exception, traceback: str | None = None) -> None:
        """Log a failed generation run."""
        self._logger.error(
            "Mesh generation failed",
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )

    @property
    def stats(self) -> GenerationStats:
        """Get current generation statistics."""
        return self._stats
