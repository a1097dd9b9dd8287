"""Typer CLI application."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ascii_studio.config import EditorConfig
from ascii_studio.core.palette import parse_color
from ascii_studio.render.composite import ExportRegion

FORMATS = ("json", "txt", "ans", "png")


def _parse_region(region: Optional[str], console: Console) -> Optional[ExportRegion]:
    if region is None:
        return None
    try:
        return ExportRegion.parse(region)
    except ValueError:
        console.print(f"[red]Invalid region {region!r}; expected x1,y1,x2,y2[/]")
        raise typer.Exit(1)


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="ascii-studio",
        help="Create, inspect and export layered ASCII/ANSI art documents.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()
    err_console = Console(stderr=True)

    def load_or_exit(path: Path):
        from ascii_studio.io.json_format import DocumentFormatError
        from ascii_studio.io.reader import load

        try:
            return load(path)
        except FileNotFoundError:
            err_console.print(f"[red]File not found: {path}[/]")
            raise typer.Exit(1)
        except DocumentFormatError as e:
            err_console.print(f"[red]Not a valid document: {path}: {e}[/]")
            raise typer.Exit(1)

    @app.callback()
    def main_options(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
    ) -> None:
        """Create, inspect and export layered ASCII/ANSI art documents."""
        if verbose:
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(message)s",
                handlers=[RichHandler(console=err_console, show_path=False)],
            )

    @app.command()
    def new(
        path: Annotated[Path, typer.Argument(help="Document file to create (.json)")],
        width: Annotated[Optional[int], typer.Option("--width", "-w", help="Columns")] = None,
        height: Annotated[Optional[int], typer.Option("--height", "-h", help="Rows")] = None,
    ) -> None:
        """Create an empty document."""
        from ascii_studio.document.document import Document
        from ascii_studio.io.writer import save

        config = EditorConfig.from_env()
        doc = Document(width or config.width, height or config.height)
        save(doc, path)
        console.print(f"[green]Created {path}[/] ({doc.width}x{doc.height})")

    @app.command()
    def info(
        path: Annotated[Path, typer.Argument(help="Document to inspect")],
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """Show size, layers and groups of a document."""
        doc = load_or_exit(path)
        manager = doc.layers

        if json_output:
            data = {
                "width": doc.width,
                "height": doc.height,
                "activeLayerId": manager.active_layer_id,
                "layers": [
                    {
                        "id": layer.id,
                        "name": layer.name,
                        "visible": layer.visible,
                        "locked": layer.locked,
                        "groupId": layer.group_id,
                        "cells": sum(1 for _ in layer.iter_cells()),
                    }
                    for layer in manager.layers
                ],
                "groups": [group.to_data() for group in manager.get_groups()],
            }
            print(json.dumps(data, indent=2))
            return

        console.print(f"[bold cyan]{path.name}[/]  {doc.width}x{doc.height}")
        table = Table(show_header=True, header_style="bold")
        table.add_column("")
        table.add_column("Name")
        table.add_column("Id", style="dim")
        table.add_column("Visible")
        table.add_column("Locked")
        table.add_column("Cells", justify="right")

        for entry in manager.display_entries():
            if entry.group is not None:
                group = entry.group
                table.add_row(
                    "▾" if not group.collapsed else "▸",
                    f"[bold]{group.name}[/]",
                    group.id,
                    "yes" if group.visible else "no",
                    "yes" if group.locked else "no",
                    "",
                )
            else:
                layer = entry.layer
                marker = "*" if layer.id == manager.active_layer_id else ""
                indent = "  " if manager.get_group(layer.group_id) else ""
                table.add_row(
                    marker,
                    f"{indent}{layer.name}",
                    layer.id,
                    "yes" if manager.is_layer_effectively_visible(layer) else "no",
                    "yes" if manager.is_layer_effectively_locked(layer) else "no",
                    str(sum(1 for _ in layer.iter_cells())),
                )
        console.print(table)

    @app.command()
    def render(
        path: Annotated[Path, typer.Argument(help="Document to render")],
        ansi: Annotated[bool, typer.Option("--ansi", "-a", help="Keep colours as ANSI escape codes")] = False,
        region: Annotated[Optional[str], typer.Option("--region", "-r", help="x1,y1,x2,y2 to render")] = None,
    ) -> None:
        """Print the flattened document to the terminal."""
        from ascii_studio.render.terminal import TerminalRenderer
        from ascii_studio.render.text import TextRenderer

        doc = load_or_exit(path)
        bounds = _parse_region(region, err_console)
        renderer = TerminalRenderer() if ansi else TextRenderer()
        try:
            output = renderer.render(doc, bounds)
        except ValueError as e:
            err_console.print(f"[red]{e}[/]")
            raise typer.Exit(1)
        print(output)

    @app.command()
    def export(
        source: Annotated[Path, typer.Argument(help="Document to export")],
        dest: Annotated[Path, typer.Argument(help="Output file")],
        fmt: Annotated[Optional[str], typer.Option("--format", "-f", help="json, txt, ans or png (default: from extension)")] = None,
        region: Annotated[Optional[str], typer.Option("--region", "-r", help="x1,y1,x2,y2 to export")] = None,
    ) -> None:
        """Export a document to another format."""
        from ascii_studio.io.writer import export as export_document

        doc = load_or_exit(source)
        bounds = _parse_region(region, err_console)
        fmt = (fmt or dest.suffix.lstrip('.') or "json").lower()
        if fmt not in FORMATS:
            err_console.print(f"[red]Unknown format: {fmt}[/]")
            raise typer.Exit(1)

        try:
            export_document(doc, dest, fmt, bounds)
        except ImportError:
            err_console.print("[red]PNG export requires Pillow. Install with: pip install pillow[/]")
            raise typer.Exit(1)
        except ValueError as e:
            err_console.print(f"[red]{e}[/]")
            raise typer.Exit(1)
        console.print(f"[green]Exported {source} → {dest}[/]")

    @app.command(name="import-text")
    def import_text(
        source: Annotated[Path, typer.Argument(help="Plain text file")],
        dest: Annotated[Path, typer.Argument(help="Document file to write (.json)")],
        width: Annotated[Optional[int], typer.Option("--width", "-w", help="Columns")] = None,
        height: Annotated[Optional[int], typer.Option("--height", "-h", help="Rows")] = None,
        fg: Annotated[str, typer.Option("--fg", help="Foreground colour name or palette index")] = "white",
        bg: Annotated[str, typer.Option("--bg", help="Background colour name or palette index")] = "black",
    ) -> None:
        """Create a document from a plain text file."""
        from ascii_studio.document.document import Document
        from ascii_studio.history.undo import UndoRedoManager
        from ascii_studio.io.text_import import import_plain_text
        from ascii_studio.io.writer import save

        if not source.exists():
            err_console.print(f"[red]File not found: {source}[/]")
            raise typer.Exit(1)
        try:
            fg_index, bg_index = parse_color(fg), parse_color(bg)
        except ValueError as e:
            err_console.print(f"[red]{e}[/]")
            raise typer.Exit(1)
        text = source.read_text(encoding='utf-8')
        lines = text.splitlines() or [""]
        config = EditorConfig.from_env()
        doc = Document(
            width or max(config.width, max(len(line) for line in lines)),
            height or max(config.height, len(lines)),
        )
        import_plain_text(doc, UndoRedoManager(), text, fg_index, bg_index)
        save(doc, dest)
        console.print(f"[green]Imported {source} → {dest}[/] ({doc.width}x{doc.height})")

    return app
