"""Configuration settings for Typeplate."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from typeplate.exceptions import warn_clamped

DEFAULT_SIZE = 20.0
DEFAULT_EXTRUDE_DEPTH = 50.0


class MeshTopology(str, Enum):
    """How text and support are combined into solids."""

    TEXT_ONLY = "text_only"
    TEXT_WITH_SUPPORT = "text_with_support"
    NEGATIVE_TEXT = "negative_text"
    VERTICAL_TEXT_WITH_SUPPORT = "vertical_text_with_support"

    @property
    def has_support(self) -> bool:
        """Whether this topology builds a backing plate."""
        return self is not MeshTopology.TEXT_ONLY


class Align(str, Enum):
    """Horizontal alignment of lines within a text block."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class SupportPadding(BaseModel):
    """Margins between the text ink box and the support edges."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    top: float = Field(default=10.0, description="Margin above the text")
    bottom: float = Field(default=10.0, description="Margin below the text")
    left: float = Field(default=10.0, description="Margin left of the text")
    right: float = Field(default=10.0, description="Margin right of the text")

    @classmethod
    def uniform(cls, value: float) -> "SupportPadding":
        """Create padding with the same margin on every side."""
        return cls(top=value, bottom=value, left=value, right=value)

    @field_validator("top", "bottom", "left", "right")
    @classmethod
    def _clamp_to_zero(cls, value: float, info: ValidationInfo) -> float:
        if value < 0:
            warn_clamped(f"support_padding.{info.field_name}", value, 0.0)
            return 0.0
        return value


class MeshParams(BaseModel):
    """Parameters for a single mesh generation call.

    Out-of-range values are clamped with an InvalidParameterWarning rather than
    rejected. NaN and infinite values fail validation.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    topology: MeshTopology = Field(
        default=MeshTopology.TEXT_WITH_SUPPORT,
        description="Mesh topology",
    )
    size: float = Field(
        default=DEFAULT_SIZE,
        description="Font size (em height) in output units",
    )
    extrude_depth: float = Field(
        default=DEFAULT_EXTRUDE_DEPTH,
        description="Extrusion depth of the text",
    )
    spacing: float = Field(
        default=0.1,
        description="Extra horizontal advance added after each glyph",
    )
    line_spacing: float = Field(
        default=1.0,
        description="Extra vertical gap between lines",
    )
    align: Align = Field(
        default=Align.LEFT,
        description="Line alignment",
    )
    support_depth: float = Field(
        default=10.0,
        description="Thickness of the support plate",
    )
    support_corner_radius: float = Field(
        default=10.0,
        description="Corner radius of the support plate (clamped to half the shorter side)",
    )
    support_padding: SupportPadding = Field(default_factory=SupportPadding)

    @field_validator("size")
    @classmethod
    def _default_negative_size(cls, value: float) -> float:
        if value < 0:
            warn_clamped("size", value, DEFAULT_SIZE)
            return DEFAULT_SIZE
        return value

    @field_validator("extrude_depth")
    @classmethod
    def _default_negative_depth(cls, value: float) -> float:
        if value < 0:
            warn_clamped("extrude_depth", value, DEFAULT_EXTRUDE_DEPTH)
            return DEFAULT_EXTRUDE_DEPTH
        return value

    @field_validator("support_depth", "support_corner_radius")
    @classmethod
    def _clamp_to_zero(cls, value: float, info: ValidationInfo) -> float:
        if value < 0:
            warn_clamped(info.field_name, value, 0.0)
            return 0.0
        return value


class GeometryConfig(BaseModel):
    """Tolerances used when flattening curves into polygons.

    Values are in output units (after font-unit scaling).
    """

    curve_tolerance: float = Field(
        default=0.05,
        ge=0.001,
        le=5.0,
        description="Maximum distance between a flattened curve and the true curve",
    )
    min_polygon_area: float = Field(
        default=1e-6,
        ge=0.0,
        description="Polygons with a smaller area are discarded before extrusion",
    )


class ProcessingConfig(BaseModel):
    """Configuration for glyph decoding."""

    max_workers: int = Field(
        default=1,
        ge=1,
        description="Worker processes for glyph decoding (1 = in-process)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class TypeplateSettings(BaseModel):
    """Main application settings."""

    mesh: MeshParams = Field(default_factory=MeshParams)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> TypeplateSettings:
    """Get default application settings."""
    return TypeplateSettings()
