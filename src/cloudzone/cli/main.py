"""Main CLI entry point for cloudzone."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from cloudzone import __version__

console = Console()

# Default paths (can be overridden)
DEFAULT_CONFIG = "cloudzone.yml"
DEFAULT_NODES = "nodes.yml"


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config_path: Path | None = None
        self.nodes_path: Path | None = None
        self.provider: str | None = None
        self.verbose: bool = False
        self._topology: Any = None

    @property
    def topology(self) -> Any:
        """Lazy-build the topology context."""
        if self._topology is None:
            import yaml
            from pydantic import ValidationError

            from cloudzone.core.schema import TopologyConfig
            from cloudzone.core.topology import Topology

            if self.config_path and self.config_path.exists():
                try:
                    config = TopologyConfig.load(self.config_path)
                except (ValidationError, yaml.YAMLError, TypeError) as e:
                    raise click.ClickException(f"Invalid config {self.config_path}: {e}")
            else:
                config = TopologyConfig()

            # Command line overrides the config file
            if self.nodes_path is not None:
                config.nodes = self.nodes_path
            elif config.nodes is None:
                config.nodes = Path(DEFAULT_NODES)
            if self.provider:
                config.provider = self.provider

            self._topology = Topology.from_config(config)
        return self._topology


pass_context = click.make_pass_decorator(Context, ensure=True)


def setup_logging(verbose: bool) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(version=__version__, prog_name="cloudzone")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=False, path_type=Path),
    default=DEFAULT_CONFIG,
    help="Path to topology config YAML file",
)
@click.option(
    "-n",
    "--nodes",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to node directory YAML file (overrides config)",
)
@click.option(
    "-p",
    "--provider",
    default=None,
    help="Provider name (overrides config and environment)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@pass_context
def cli(ctx: Context, config: Path, nodes: Path | None, provider: str | None, verbose: bool) -> None:
    """
    Cloudzone - Cloud topology resolution.

    Resolve the failure-domain zone of cluster nodes and count
    nodes per zone.
    """
    ctx.config_path = config
    ctx.nodes_path = nodes
    ctx.provider = provider
    ctx.verbose = verbose
    setup_logging(verbose)


# Import and register subcommands
from cloudzone.cli.zones import nodes, zones

cli.add_command(nodes)
cli.add_command(zones)


@cli.command()
@pass_context
def provider(ctx: Context) -> None:
    """Show the active provider."""
    topology = ctx.topology
    active = topology.active_provider()

    if topology.is_registered(active):
        console.print(f"[cyan]{escape(active.name)}[/cyan] (registered)")
    else:
        name = escape(active.name) or "<empty>"
        console.print(f"[yellow]{name}[/yellow] (default fallback)")


@cli.command()
@pass_context
def providers(ctx: Context) -> None:
    """List registered providers."""
    from rich.table import Table

    topology = ctx.topology

    table = Table(title="Registered Providers")
    table.add_column("Name", style="cyan")
    table.add_column("Implementation")

    for provider in sorted(topology.registry, key=lambda p: p.name):
        table.add_row(escape(provider.name), type(provider).__name__)

    console.print(table)


if __name__ == "__main__":
    cli()
