"""Typeplate - Turn text into printable 3D solids.

Typeplate reads glyph outlines from a TrueType/OpenType font, lays out a
(possibly multi-line) string and extrudes it into a 3D mesh, optionally
standing on, or cut into, a rounded-rectangle backing plate.

Example:
    $ typeplate Roboto-Regular.ttf "Hello" --topology negative_text -o hello.stl

This will write hello.stl with the word punched out of a 10 mm plate.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
