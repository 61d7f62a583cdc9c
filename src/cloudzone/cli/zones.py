"""Zone CLI commands."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cloudzone.cli.main import Context, pass_context

console = Console()


@click.command()
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output counts as JSON",
)
@pass_context
def zones(ctx: Context, output_json: bool) -> None:
    """
    Count cluster nodes per zone.

    Nodes whose zone cannot be resolved are not counted.

    Examples:

        # Table of zones
        cloudzone zones

        # JSON for scripts
        cloudzone --provider aws zones --json
    """
    import json

    from cloudzone.core.errors import DirectoryUnavailableError

    topology = ctx.topology

    try:
        provider, counts = topology.aggregator.zone_counts_by_provider()
    except DirectoryUnavailableError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if output_json:
        click.echo(json.dumps(counts, indent=2, sort_keys=True))
        return

    if not counts:
        console.print("[yellow]No zones found[/yellow]")
        return

    table = Table(title=f"Nodes per Zone ({escape(provider.name) or 'default'})")
    table.add_column("Zone", style="cyan")
    table.add_column("Nodes", justify="right")

    for zone, count in sorted(counts.items()):
        table.add_row(escape(zone) or "[dim]<none>[/dim]", str(count))

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {sum(counts.values())} nodes in {len(counts)} zone(s)")


@click.command()
@pass_context
def nodes(ctx: Context) -> None:
    """List nodes with their resolved zone."""
    from cloudzone.core.errors import DirectoryUnavailableError

    topology = ctx.topology

    try:
        resolved = topology.aggregator.zone_of_nodes()
    except DirectoryUnavailableError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if not resolved:
        console.print("[yellow]No nodes found[/yellow]")
        return

    table = Table(title="Cluster Nodes")
    table.add_column("Name", style="cyan")
    table.add_column("Zone")

    for node, zone in resolved:
        if zone is None:
            table.add_row(escape(node.name), "[red]-[/red]")
        else:
            table.add_row(escape(node.name), escape(zone) or "[dim]<none>[/dim]")

    console.print(table)
