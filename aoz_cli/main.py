"""
AOZ CLI main entry point.

Usage:
    aoz [OPTIONS] COMMAND [ARGS]...
"""
from __future__ import annotations

import click
from rich.console import Console

from .commands import agents, tasks, transactions, wallet
from .config import load_config

console = Console()


@click.group()
@click.version_option(package_name="aoz-registry", message="%(prog)s %(version)s")
@click.option("--api-url", envvar="AOZ_API_BASE_URL", help="API base URL")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx, api_url: str | None, verbose: bool):
    """AOZ CLI - browse and mint AI agent oaths."""
    ctx.ensure_object(dict)

    config = load_config()
    if api_url:
        config["api_base_url"] = api_url

    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.option("--host", default=None, help="Bind host (default from AOZ_API_HOST)")
@click.option("--port", type=int, default=None, help="Bind port (default from AOZ_API_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the AOZ API server."""
    from aoz_core.api.main import run

    console.print("[bold blue]Starting AOZ API[/bold blue]")
    run(host=host, port=port, reload=reload)


# Register command groups
cli.add_command(wallet.wallet)
cli.add_command(agents.agents)
cli.add_command(tasks.tasks)
cli.add_command(transactions.transactions)


if __name__ == "__main__":
    cli()
