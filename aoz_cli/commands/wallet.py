"""Wallet connection commands."""
from __future__ import annotations

import re

import click
from rich.console import Console

from aoz_core.constants import SOLANA_ADDRESS_REGEX, VERIFIED_ADDRESS
from aoz_core.links import explorer_url
from aoz_core.presentation import truncate_address

from ..config import save_config

console = Console()


@click.group()
def wallet():
    """Connect the wallet used to mint and pay."""
    pass


@wallet.command()
@click.argument("address")
@click.pass_context
def connect(ctx, address: str):
    """Remember ADDRESS as the connected wallet."""
    address = address.strip()
    if not re.fullmatch(SOLANA_ADDRESS_REGEX, address):
        raise click.BadParameter("Invalid Solana address", param_hint="ADDRESS")

    config = ctx.obj["config"]
    config["wallet_address"] = address
    save_config(config)

    console.print(f"[green]✓ Wallet connected:[/green] [cyan]{truncate_address(address)}[/cyan]")


@wallet.command()
@click.pass_context
def disconnect(ctx):
    """Forget the connected wallet."""
    config = ctx.obj["config"]
    config.pop("wallet_address", None)
    save_config(config)

    console.print("[green]✓ Wallet disconnected[/green]")


@wallet.command()
@click.pass_context
def status(ctx):
    """Show the connected wallet."""
    config = ctx.obj["config"]
    address = config.get("wallet_address")

    console.print(f"API URL: [cyan]{config.get('api_base_url')}[/cyan]")
    if not address:
        console.print("Wallet: [yellow]Not connected[/yellow]")
        return

    console.print(f"Wallet: [green]{address}[/green]")
    console.print(f"Explorer: {explorer_url(address)}")
    if address == VERIFIED_ADDRESS:
        console.print("[bold magenta]Verified minter[/bold magenta]")
