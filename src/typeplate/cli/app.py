"""CLI application entry point for typeplate.

This module provides the main CLI interface using Typer.
"""

import warnings
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from typeplate import __version__
from typeplate.cli.output import (
    console,
    print_dimensions,
    print_error,
    print_font_info,
    print_header,
    print_step,
    print_success,
    print_warning,
)
from typeplate.config import (
    Align,
    LoggingConfig,
    MeshParams,
    MeshTopology,
    ProcessingConfig,
    SupportPadding,
    TypeplateSettings,
)
from typeplate.core import MeshGenerator
from typeplate.exceptions import FontError, FontLoadError, InvalidParameterWarning, TypeplateError
from typeplate.io import FontReader
from typeplate.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="typeplate",
    help="Turn text into extruded 3D solids, optionally on or cut into a backing plate.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Typeplate[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def generate(
    font_path: Annotated[
        Path,
        typer.Argument(
            help="Path to a TTF/OTF font file",
            show_default=False,
        ),
    ],
    text: Annotated[
        str,
        typer.Argument(
            help="Text to render; use \\n for line breaks",
            show_default=False,
        ),
    ],
    topology: Annotated[
        MeshTopology,
        typer.Option(
            "--topology",
            "-t",
            help="How text and support are combined",
            case_sensitive=False,
        ),
    ] = MeshTopology.TEXT_WITH_SUPPORT,
    size: Annotated[
        float,
        typer.Option("--size", "-s", help="Font size (em height)"),
    ] = 20.0,
    depth: Annotated[
        float,
        typer.Option("--depth", "-d", help="Text extrusion depth"),
    ] = 50.0,
    spacing: Annotated[
        float,
        typer.Option("--spacing", help="Extra advance after each glyph"),
    ] = 0.1,
    line_spacing: Annotated[
        float,
        typer.Option("--line-spacing", help="Extra gap between lines"),
    ] = 1.0,
    align: Annotated[
        Align,
        typer.Option("--align", "-a", help="Line alignment", case_sensitive=False),
    ] = Align.LEFT,
    support_depth: Annotated[
        float,
        typer.Option("--support-depth", help="Support plate thickness"),
    ] = 10.0,
    radius: Annotated[
        float,
        typer.Option("--radius", "-r", help="Support corner radius"),
    ] = 10.0,
    padding: Annotated[
        float,
        typer.Option("--padding", help="Support padding on every side"),
    ] = 10.0,
    padding_top: Annotated[
        float | None,
        typer.Option("--padding-top", help="Override top padding"),
    ] = None,
    padding_bottom: Annotated[
        float | None,
        typer.Option("--padding-bottom", help="Override bottom padding"),
    ] = None,
    padding_left: Annotated[
        float | None,
        typer.Option("--padding-left", help="Override left padding"),
    ] = None,
    padding_right: Annotated[
        float | None,
        typer.Option("--padding-right", help="Override right padding"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the merged solids to this file (format from suffix: .stl, .obj, .ply, .glb)",
        ),
    ] = None,
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            "-j",
            help="Worker processes for glyph decoding",
            min=1,
        ),
    ] = 1,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Generate a 3D mesh of TEXT set in FONT_PATH.

    Example:
        typeplate Roboto-Regular.ttf "Hello\\nWorld" --align center -o hello.stl

    This will write hello.stl with two centered lines standing on a plate.
    """
    if not font_path.exists():
        print_error(
            f"Input file not found: {font_path}",
            details=f"The file '{font_path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not font_path.is_file():
        print_error(
            f"Input path is not a file: {font_path}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    text = text.replace("\\n", "\n")

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", InvalidParameterWarning)
        try:
            params = MeshParams(
                topology=topology,
                size=size,
                extrude_depth=depth,
                spacing=spacing,
                line_spacing=line_spacing,
                align=align,
                support_depth=support_depth,
                support_corner_radius=radius,
                support_padding=SupportPadding(
                    top=padding if padding_top is None else padding_top,
                    bottom=padding if padding_bottom is None else padding_bottom,
                    left=padding if padding_left is None else padding_left,
                    right=padding if padding_right is None else padding_right,
                ),
            )
        except ValidationError as e:
            print_error("Invalid parameters", details=str(e))
            raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        for warning in caught:
            if issubclass(warning.category, InvalidParameterWarning):
                print_warning(str(warning.message))

    settings = TypeplateSettings(
        mesh=params,
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    try:
        if not quiet:
            print_step("Loading font")

        try:
            reader = FontReader(font_path)
            reader.load()
        except FileNotFoundError as e:
            raise FontLoadError(str(font_path), str(e)) from e

        try:
            if not quiet:
                print_font_info(
                    font_path=str(font_path),
                    family=reader.family_name,
                    font_type=reader.format,
                    upm=reader.units_per_em,
                )
                print_step("Generating mesh")

            generator = MeshGenerator(settings, logger=logger)
            result = generator.generate(reader, text, params)
        finally:
            reader.close()

        stats = generator.last_stats
        if not quiet:
            print_dimensions(result.dimensions, topology.value)
            if stats.glyph_count == 0:
                print_warning("No glyph outlines found; only the support was generated")

        exported: str | None = None
        file_size: str | None = None
        if output is not None:
            mesh = result.combined()
            if mesh.is_empty:
                print_warning("Nothing to export: the result has no geometry")
            else:
                mesh.export(str(output))
                exported = str(output)
                file_size = _format_file_size(output)

        if not quiet:
            print_success(
                total_time_s=stats.duration_seconds,
                glyphs=stats.glyph_count,
                vertices=stats.vertex_count,
                faces=stats.face_count,
                output_path=exported,
                file_size=file_size,
            )

    except FontError as e:
        print_error("Could not load font", details=str(e))
        raise typer.Exit(code=1)
    except TypeplateError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
