"""CLI interface for arcpick."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from arcpick import storage
from arcpick.core.errors import ArcpickError
from arcpick.core.reader_loader import load_readers
from arcpick.core.registry import ReaderRegistry
from arcpick.core.session import BrowseSession
from arcpick.models.extract_result import ExtractedFileDescriptor
from arcpick.models.tree import TreeNode
from arcpick.settings import Settings
from arcpick.utils import bytes_to_human


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_registry(settings: Settings) -> ReaderRegistry:
    registry = ReaderRegistry()
    load_readers(registry, settings)
    return registry


def _open_session(archive: Path, settings: Settings) -> BrowseSession:
    """Open ``archive`` or exit with an error message."""
    try:
        return BrowseSession.open(archive, _build_registry(settings), settings.content_types())
    except ArcpickError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _node_to_dict(node: TreeNode) -> dict[str, Any]:
    data: dict[str, Any] = {"name": node.name, "path": node.path, "kind": node.kind.value}
    if node.is_dir:
        data["children"] = [_node_to_dict(child) for child in node.children]
    else:
        data["size"] = node.size
    return data


def _descriptor_to_dict(d: ExtractedFileDescriptor) -> dict[str, Any]:
    return {
        "source_path": d.source_path,
        "destination_path": d.destination_path,
        "size": d.size,
        "content_kind": d.content_kind,
    }


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file to use instead of the default",
)
@click.pass_context
def main(ctx: click.Context, verbose: int, config_path: Path | None) -> None:
    """arcpick: browse an archive and extract only what you pick."""
    _setup_logging(verbose)
    ctx.obj = Settings(config_path)


# ── readers ──────────────────────────────────────────────────────────────

@main.command("readers")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def readers_cmd(settings: Settings, as_json: bool) -> None:
    """List available archive readers."""
    registry = _build_registry(settings)

    if as_json:
        data = [
            {
                "id": r.id,
                "name": r.name,
                "description": r.description,
                "extensions": list(r.extensions),
            }
            for r in registry
        ]
        click.echo(json.dumps(data, indent=2))
        return

    for reader in registry:
        exts = ", ".join(reader.extensions) or "(directories)"
        click.echo(f"  {click.style(reader.id, fg='cyan', bold=True):20s}  {reader.name}")
        click.echo(f"    {reader.description}  [{exts}]")


# ── tree ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("archive", type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def tree(settings: Settings, archive: Path, as_json: bool) -> None:
    """Show the contents of ARCHIVE as a tree."""
    session = _open_session(archive, settings)
    root = session.tree.root

    if as_json:
        click.echo(json.dumps([_node_to_dict(child) for child in root.children], indent=2))
        return

    click.echo(click.style(session.name, bold=True))

    def _print(node: TreeNode, depth: int) -> None:
        indent = "  " * depth
        if node.is_dir:
            click.echo(f"{indent}{click.style(node.name + '/', fg='blue', bold=True)}")
            for child in node.children:
                _print(child, depth + 1)
        else:
            size = click.style(bytes_to_human(node.size or 0), fg="bright_black")
            click.echo(f"{indent}{node.name}  {size}")

    for child in root.children:
        _print(child, 1)

    total = sum(node.size or 0 for node in session.tree.files())
    click.echo(f"\n{len(session.tree)} entries, {bytes_to_human(total)}")


# ── extract ──────────────────────────────────────────────────────────────

@main.command()
@click.argument("archive", type=click.Path(exists=True, path_type=Path))
@click.argument("paths", nargs=-1)
@click.option("--dest", "-d", "destination", default=None, help="Destination prefix for extracted paths")
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write the selected files into this directory",
)
@click.option("--restore", is_flag=True, help="Start from the saved selection for ARCHIVE")
@click.option("--save", is_flag=True, help="Save the resulting selection for ARCHIVE")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def extract(
    settings: Settings,
    archive: Path,
    paths: tuple[str, ...],
    destination: str | None,
    output: Path | None,
    restore: bool,
    save: bool,
    as_json: bool,
) -> None:
    """Toggle PATHS in ARCHIVE and extract the resulting selection.

    Each PATH is toggled in order, so naming a file inside an already
    toggled directory deselects just that file.
    """
    session = _open_session(archive, settings)
    if destination is None:
        destination = settings.get("extract.destination_prefix", "") or ""

    if restore:
        session.restore_selection(storage.load_selection(archive))

    try:
        for path in paths:
            session.toggle(path)
    except ArcpickError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if save:
        storage.save_selection(archive, session.selected)

    descriptors = session.project(destination)
    if not descriptors:
        if as_json:
            click.echo(json.dumps({"status": "nothing_selected", "files": []}))
        else:
            click.echo("Nothing selected.")
        return

    if output is None:
        if as_json:
            data = [_descriptor_to_dict(d) for d in descriptors]
            click.echo(json.dumps({"status": "planned", "files": data}, indent=2))
            return
        for d in descriptors:
            click.echo(f"  {d.source_path:40s} → {d.destination_path}  ({bytes_to_human(d.size)}, {d.content_kind})")
        summary = session.summary()
        click.echo(f"\n{summary.file_count} files, {click.style(bytes_to_human(summary.total_bytes), bold=True)}")
        return

    try:
        result = session.extract_to(output, destination)
    except ArcpickError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "status": "extracted",
                    "files_written": result.files_written,
                    "bytes_written": result.bytes_written,
                    "errors": result.errors,
                    "files": [_descriptor_to_dict(d) for d in descriptors],
                },
                indent=2,
            )
        )
    else:
        for error in result.errors:
            click.echo(f"  {click.style('!', fg='yellow')} {error}")
        click.echo(
            f"{click.style('✓', fg='green')} Extracted {result.files_written} files "
            f"({click.style(bytes_to_human(result.bytes_written), fg='green', bold=True)}) into {output}"
        )

    if result.errors:
        sys.exit(1)


# ── selection ────────────────────────────────────────────────────────────

@main.group()
def selection() -> None:
    """Saved selection commands."""


@selection.command("show")
@click.argument("archive", type=click.Path(path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def selection_show(archive: Path, as_json: bool) -> None:
    """Show the saved selection for ARCHIVE."""
    paths = storage.load_selection(archive)
    if as_json:
        click.echo(json.dumps(paths, indent=2))
        return
    if not paths:
        click.echo("No saved selection.")
        return
    for path in paths:
        click.echo(f"  {path}")


@selection.command("clear")
@click.argument("archive", type=click.Path(path_type=Path))
def selection_clear(archive: Path) -> None:
    """Forget the saved selection for ARCHIVE."""
    if storage.forget_selection(archive):
        click.echo("Saved selection cleared.")
    else:
        click.echo("No saved selection.")
