"""Rich console output for the typeplate command.

Messages are short status lines; the generated assembly is summarized in a
borderless table.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from typeplate.domain import Dimensions

console = Console()

MARK_STEP = "▸"
MARK_DONE = "✓"
MARK_FAIL = "✗"
MARK_WARN = "!"
SEP = "·"


def print_header(version: str) -> None:
    """Print the program name and version above a rule."""
    console.print(f"\n[bold]Typeplate[/bold] v{version}")
    console.rule(style="dim")


def print_step(message: str) -> None:
    """Print the start of a pipeline stage."""
    console.print(f"\n{MARK_STEP} {escape(message)}")


def print_font_info(font_path: str, family: str, font_type: str, upm: int) -> None:
    """Print which font is in use.

    Args:
        font_path: Path to the font file
        family: Family name from the name table
        font_type: "TrueType" or "OpenType"
        upm: Units per em
    """
    # Paths may contain brackets, so build the line as plain Text.
    console.print(Text.assemble("  ", (font_path, "bold"), f" ({font_type})"))
    console.print(Text(f"  {family} {SEP} {upm:,} units/em", style="dim"))


def print_dimensions(dimensions: Dimensions, topology: str) -> None:
    """Print the summary dimensions of a generated assembly.

    Args:
        dimensions: Dimensions from the mesh result
        topology: Topology name
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(justify="right")

    table.add_row("Topology", topology)
    table.add_row("Support", f"{dimensions.width:.2f} × {dimensions.height:.2f}")
    table.add_row("Corner radius", f"{dimensions.border_radius:.2f}")
    table.add_row(
        "Text",
        f"{dimensions.text_width:.2f} × {dimensions.text_height:.2f} × {dimensions.text_depth:.2f}",
    )
    console.print(table)


def _elapsed(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    return f"{seconds:.2f} s"


def print_success(
    total_time_s: float,
    glyphs: int,
    vertices: int,
    faces: int,
    output_path: str | None = None,
    file_size: str | None = None,
) -> None:
    """Print the run summary.

    Args:
        total_time_s: Total generation time in seconds
        glyphs: Number of glyphs with outlines
        vertices: Total vertex count
        faces: Total face count
        output_path: Path of the exported mesh, if any
        file_size: Human-readable size of the exported file
    """
    console.print(f"\n[bold green]{MARK_DONE} Complete[/bold green] in {_elapsed(total_time_s)}")
    console.print(f"  {glyphs} glyphs {SEP} {vertices:,} vertices {SEP} {faces:,} faces")

    if output_path is not None:
        suffix = f" ({file_size})" if file_size else ""
        console.print(Text.assemble("  → ", (output_path, "bold"), suffix))


def print_warning(message: str) -> None:
    """Print a non-fatal problem."""
    console.print(f"  [yellow]{MARK_WARN}[/yellow] {escape(message)}")


def print_error(message: str, details: str | None = None) -> None:
    """Print an error and optional details below it."""
    console.print(f"\n[bold red]{MARK_FAIL} Error:[/bold red] {escape(message)}")
    if details:
        console.print(Text(f"  {details}"))
