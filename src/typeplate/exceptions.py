"""Exception hierarchy for Typeplate."""

import warnings


class TypeplateError(Exception):
    """Base exception for all Typeplate errors."""

    pass


class FontError(TypeplateError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontFormatError(FontError):
    """Unsupported or invalid font format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid font format '{path}': {details}")


class GlyphError(TypeplateError):
    """Errors related to glyph lookup."""

    pass


class GlyphNotFoundError(GlyphError):
    """The font has no glyph for a character."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"No glyph for character {char!r} (U+{ord(char):04X})")


class GeometryError(TypeplateError):
    """Errors in geometric construction."""

    pass


class MalformedContourError(GeometryError):
    """A contour has too few points to form a path."""

    def __init__(self, point_count: int) -> None:
        self.point_count = point_count
        super().__init__(f"Contour with {point_count} point(s) cannot form a path")


class ExtrusionError(GeometryError):
    """A 2D shape could not be triangulated and extruded."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Extrusion failed: {reason}")


class ConfigurationError(TypeplateError):
    """Structurally invalid mesh parameters."""

    def __init__(self, parameter: str, reason: str) -> None:
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"Invalid value for '{parameter}': {reason}")


class InvalidParameterWarning(UserWarning):
    """A parameter was out of range and has been clamped."""

    pass


def warn_clamped(parameter: str, value: float, clamped: float) -> None:
    """Emit an InvalidParameterWarning for a clamped parameter.

    Args:
        parameter: Name of the clamped parameter
        value: Value that was supplied
        clamped: Value actually used
    """
    warnings.warn(
        f"'{parameter}' = {value} is out of range, using {clamped}",
        InvalidParameterWarning,
        stacklevel=3,
    )
