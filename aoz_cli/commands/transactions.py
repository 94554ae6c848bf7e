"""x402 payment transaction commands."""
from __future__ import annotations

from datetime import datetime, timezone

import click
from rich.console import Console
from rich.table import Table

from aoz_core.presentation import format_usdc, transaction_badge

from ..api import APIError, get_client

console = Console()


def _format_timestamp(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


@click.group()
def transactions():
    """Payment history of a wallet."""
    pass


@transactions.command("list")
@click.option("--wallet", help="Wallet address (defaults to the connected wallet)")
@click.pass_context
def list_transactions(ctx, wallet: str | None):
    """List payments, newest first."""
    wallet = wallet or ctx.obj["config"].get("wallet_address")
    if not wallet:
        raise click.ClickException("Wallet not connected. Run 'aoz wallet connect <address>' first.")

    client = get_client(ctx)

    try:
        result = client.get("/api/x402/transactions", params={"wallet": wallet})
        tx_list = result.get("transactions", [])

        if not tx_list:
            console.print("[dim]No transactions yet[/dim]")
            return

        table = Table(title="Payment History")
        table.add_column("ID", style="cyan")
        table.add_column("Amount")
        table.add_column("Status")
        table.add_column("Time")
        table.add_column("Error", style="red")

        for tx in tx_list:
            badge = transaction_badge(tx.get("status", ""))
            table.add_row(
                tx.get("id", ""),
                format_usdc(tx.get("amount", "0")),
                f"[{badge.style}]{badge.label}[/]",
                _format_timestamp(tx.get("timestamp", 0)),
                tx.get("errorMessage") or "",
            )

        console.print(table)

    except APIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
    finally:
        client.close()


@transactions.command()
@click.argument("transaction_id")
@click.pass_context
def get(ctx, transaction_id: str):
    """Poll one transaction."""
    client = get_client(ctx)

    try:
        tx = client.get(f"/api/x402/transactions/{transaction_id}")
        badge = transaction_badge(tx.get("status", ""))

        console.print(f"\n[bold blue]Transaction {tx.get('id')}[/bold blue]\n")
        console.print(f"Status: [{badge.style}]{badge.label}[/]")
        console.print(f"Amount: {format_usdc(tx.get('amount', '0'))}")
        console.print(f"Wallet: {tx.get('walletAddress')}")
        console.print(f"Time: {_format_timestamp(tx.get('timestamp', 0))}")
        if tx.get("signature"):
            console.print(f"Signature: {tx['signature']}")
        if tx.get("errorMessage"):
            console.print(f"Error: [red]{tx['errorMessage']}[/red]")

    except APIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
    finally:
        client.close()
