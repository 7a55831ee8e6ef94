"""CLI for dcmview (tree, search, browse)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from dcmview.config import Settings, load_settings
from dcmview.core.importer.loader import load_entries
from dcmview.core.search.searcher import find_matches
from dcmview.core.tree.builder import build_tree
from dcmview.core.tree.render import breadcrumbs, render_tree, tree_to_dict
from dcmview.errors import DcmviewError
from dcmview.logging_config import configure_logging
from dcmview.models.node import GroupingMode, TreeView
from dcmview.models.record import DatasetEntry

app = typer.Typer(help="dcmview: browse, group and search DICOM tags.")

PathArgument = Annotated[Path, typer.Argument(help="DICOM file or directory of files")]
ModeOption = Annotated[
    GroupingMode,
    typer.Option("--mode", "-m", help="Grouping: file, tag or tag-diff"),
]
ValueLimitOption = Annotated[
    int | None,
    typer.Option("--value-limit", help="Max characters of a value shown in a label", min=1),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _load(path: Path, value_limit: int | None) -> tuple[str, list[DatasetEntry], Settings]:
    """Load settings and records, turning failures into a clean exit."""
    try:
        settings = load_settings(value_display_limit=value_limit)
        root_label, entries = load_entries(path)
    except DcmviewError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    return root_label, entries, settings


@app.command()
def tree(
    path: PathArgument,
    mode: ModeOption = GroupingMode.BY_FILE,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-d", help="Max depth levels to render", min=0),
    ] = None,
    value_limit: ValueLimitOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Print the tag tree of a file or directory."""
    root_label, entries, settings = _load(path, value_limit)
    root = build_tree(root_label, entries, mode, limit=settings.value_display_limit)

    if output_json:
        typer.echo(json.dumps(tree_to_dict(root, max_depth=max_depth), indent=2))
    else:
        typer.echo(render_tree(root, max_depth=max_depth), nl=False)


@app.command()
def search(
    path: PathArgument,
    query: str = typer.Argument(..., help="Text to look for in node labels"),
    mode: ModeOption = GroupingMode.BY_FILE,
    value_limit: ValueLimitOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List every node whose label contains the query (case-insensitive)."""
    root_label, entries, settings = _load(path, value_limit)
    root = build_tree(root_label, entries, mode, limit=settings.value_display_limit)
    matches, _anchor = find_matches(TreeView(root=root), query)

    if output_json:
        data = {
            "results": [
                {
                    "label": node.label,
                    "path": breadcrumbs(root, node),
                    "tag": str(node.reference.tag) if node.reference else None,
                }
                for node in matches
            ],
            "count": len(matches),
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"Found {len(matches)} results:\n")
    for node in matches:
        typer.echo(f"  {node.label}")
        crumbs = breadcrumbs(root, node)
        if crumbs:
            typer.echo(f"    in {crumbs}")


@app.command()
def browse(
    path: PathArgument,
    mode: ModeOption = GroupingMode.BY_FILE,
    value_limit: ValueLimitOption = None,
) -> None:
    """Browse the tag tree interactively."""
    from dcmview.session import BrowserSession
    from dcmview.tui.browser import run_browser

    root_label, entries, settings = _load(path, value_limit)
    session = BrowserSession(entries, root_label=root_label, settings=settings, mode=mode)
    run_browser(session)
