"""CLI entry point for org-outline.

Inspection commands around the parser: show the parsed node sequence of a
document, or how each of its lines is classified.
"""

import json
from pathlib import Path
from typing import Optional

import click
import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from org_outline import __version__
from org_outline.config import ParserSettings, load_settings
from org_outline.exceptions import OutlineStructureError
from org_outline.nodes import Block, Line, Node, Section
from org_outline.parser import OutlineParser
from org_outline.rules import classify_line
from org_outline.sources import open_source
from org_outline.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)
console = Console()


def load_cli_settings(config_path: Optional[Path]) -> ParserSettings:
    """
    Load parser settings for a CLI invocation.

    Raises:
        click.ClickException: If the config file is missing or invalid
    """
    try:
        settings = load_settings(config_path)
        logger.info("settings_loaded", path=str(config_path) if config_path else None)
        return settings
    except FileNotFoundError as e:
        logger.error("config_not_found", path=str(config_path))
        raise click.ClickException(str(e))
    except (ValidationError, ValueError) as e:
        logger.error("config_validation_error", error=str(e))
        raise click.ClickException(f"Configuration validation failed:\n{e}")


def node_label(node: Node) -> str:
    """Rich markup label for a container node."""
    if isinstance(node, Section):
        parts = ["*" * node.level]
        if node.keyword:
            parts.append(f"[yellow]{node.keyword}[/yellow]")
        parts.append(f"[bold]{escape(node.name)}[/bold]")
        if node.tags:
            parts.append(f"[cyan]{escape(':' + ':'.join(node.tags) + ':')}[/cyan]")
        return " ".join(parts)
    if isinstance(node, Block):
        qualifier = f" {escape(node.qualifier)}" if node.qualifier else ""
        return f"[magenta]BEGIN_{escape(node.block_type)}[/magenta]{qualifier}"
    return f"[dim]{node.node_type}[/dim]"


def build_tree(nodes: list[Node]) -> Tree:
    """Build a rich Tree showing the node sequence and its content."""
    tree = Tree(f"[bold]{len(nodes)} top-level node(s)[/bold]")

    def add(parent: Tree, node: Node) -> None:
        branch = parent.add(node_label(node))
        for item in node.content:
            if isinstance(item, Line):
                branch.add(f"[green]{item.line_type}[/green] {escape(repr(item.text))}")
            else:
                add(branch, item)

    for node in nodes:
        add(tree, node)
    return tree


@click.group()
@click.version_option(version=__version__, prog_name="org-outline")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration file (default: ~/.config/org-outline/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]):
    """org-outline: Parse Org-style outline documents into sections, blocks and drawers."""
    configure_logging()
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.argument("source")
@click.option("--json", "as_json", is_flag=True, help="Print the node sequence as JSON")
@click.option("--strict", is_flag=True, help="Reject unmatched or unterminated blocks and drawers")
@click.pass_context
def parse(ctx: click.Context, source: str, as_json: bool, strict: bool):
    """
    Parse SOURCE (file path or http(s) URL) and show its node sequence.

    Examples:
        org-outline parse notes.org
        org-outline parse --json notes.org | jq '.[1].name'
        org-outline parse --strict https://example.com/todo.org
    """
    settings = load_cli_settings(ctx.obj["config_path"])
    if strict:
        settings = settings.model_copy(update={"strict": True})

    logger.info("parse_command_started", source=source, strict=settings.strict)

    try:
        nodes = OutlineParser(settings=settings).parse_file(source)
    except OutlineStructureError as e:
        raise click.ClickException(str(e))
    except (OSError, UnicodeDecodeError, httpx.HTTPError) as e:
        logger.error("source_read_error", source=source, error=str(e))
        raise click.ClickException(f"Cannot read {source}: {e}")

    if as_json:
        click.echo(json.dumps([node.to_dict() for node in nodes], indent=2, ensure_ascii=False))
    else:
        console.print(build_tree(nodes))

    logger.info("parse_command_completed", source=source, node_count=len(nodes))


@cli.command()
@click.argument("source")
@click.pass_context
def classify(ctx: click.Context, source: str):
    """
    Show how each line of SOURCE is classified.

    Example:
        org-outline classify notes.org
    """
    settings = load_cli_settings(ctx.obj["config_path"])
    logger.info("classify_command_started", source=source)

    table = Table(title=escape(source))
    table.add_column("#", justify="right", style="dim")
    table.add_column("Tag", style="green")
    table.add_column("Capture")

    try:
        with open_source(source, encoding=settings.encoding, timeout=settings.url_timeout) as lines:
            for line_number, line in enumerate(lines, start=1):
                tag, value = classify_line(line)
                table.add_row(str(line_number), tag, escape(repr(value)))
    except (OSError, UnicodeDecodeError, httpx.HTTPError) as e:
        logger.error("source_read_error", source=source, error=str(e))
        raise click.ClickException(f"Cannot read {source}: {e}")

    console.print(table)


if __name__ == "__main__":
    cli()
