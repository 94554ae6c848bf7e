"""Agent oath commands."""
from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from aoz_core.presentation import (
    AGENT_TYPE_BADGES,
    ALL_AGENTS,
    ALL_STATUS,
    filter_oaths,
    oath_badge,
    PaymentProgress,
    transform_agent_to_oath,
    truncate_address,
)

from ..api import APIError, PaymentRequired, get_client, require_wallet

console = Console()

AGENT_TYPES = ["LOAN", "TRANSACTION", "EMPLOYMENT", "ALLIANCE"]
OATH_STATUSES = ["minted", "completed", "pending", "settled"]


@click.group()
def agents():
    """Browse and mint agent oaths."""
    pass


@agents.command("list")
@click.option("--status", "status_filter", type=click.Choice(OATH_STATUSES), help="Only oaths in this status")
@click.option("--agent", "agent_filter", help="Only oaths of the agent with this name")
@click.option("--mine", is_flag=True, help="Only open oaths minted by the connected wallet")
@click.pass_context
def list_agents(ctx, status_filter: str | None, agent_filter: str | None, mine: bool):
    """List agent oaths, newest first."""
    client = get_client(ctx)

    try:
        oaths = [transform_agent_to_oath(a) for a in client.get("/api/agents")]
        oaths = filter_oaths(
            oaths,
            agent=agent_filter or ALL_AGENTS,
            status=status_filter or ALL_STATUS,
            mine=mine,
            wallet_address=ctx.obj["config"].get("wallet_address"),
        )

        if not oaths:
            console.print("[dim]No oaths found[/dim]")
            return

        table = Table(title="aozOaths")
        table.add_column("ID", style="cyan")
        table.add_column("Agent", style="green")
        table.add_column("Type")
        table.add_column("Status")
        table.add_column("Ask")
        table.add_column("Promise")
        table.add_column("Wallet")

        for oath in oaths:
            name = oath.agent.name + (" [magenta]✓[/magenta]" if oath.agent.verified else "")
            type_badge = AGENT_TYPE_BADGES.get(oath.type)
            status_badge = oath_badge(oath.status)
            table.add_row(
                str(oath.id),
                name,
                f"[{type_badge.style}]{type_badge.label}[/]" if type_badge else oath.type,
                f"[{status_badge.style}]{status_badge.label}[/]",
                f"{oath.ask.text} ({oath.ask.status})",
                f"{oath.promise.text} ({oath.promise.status})",
                truncate_address(oath.agent.wallet_address),
            )

        console.print(table)

    except APIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
    finally:
        client.close()


@agents.command()
@click.argument("agent_id")
@click.pass_context
def get(ctx, agent_id: str):
    """Get agent details."""
    client = get_client(ctx)

    try:
        oath = transform_agent_to_oath(client.get(f"/api/agents/{agent_id}"))

        console.print(f"\n[bold blue]{oath.agent.name}[/bold blue]"
                      + (" [magenta](verified)[/magenta]" if oath.agent.verified else ""))
        console.print(f"ID: [cyan]{oath.id}[/cyan]")
        console.print(f"Type: {oath.type}")
        console.print(f"Status: {oath_badge(oath.status).label}")
        console.print(f"Ask: {oath.ask.text} ({oath.ask.status})")
        console.print(f"Promise: {oath.promise.text} ({oath.promise.status})")
        console.print(f"  {oath.promise.details}")
        console.print(f"TEE attestation: {oath.agent.tee_attestation}")
        console.print(f"Holder: {oath.agent.holder}")
        console.print(f"Wallet: {oath.agent.wallet_address}")
        console.print(f"Explorer: {oath.agent.explorer_url}")
        if oath.open_sea_url:
            console.print(f"Marketplace: {oath.open_sea_url}")

    except APIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
    finally:
        client.close()


@agents.command()
@click.option("--name", required=True, help="Agent name")
@click.option("--type", "agent_type", type=click.Choice(AGENT_TYPES), required=True, help="Oath type")
@click.option("--description", required=True, help="What the agent does")
@click.option("--settlement-address", required=True, help="Solana address the oath settles to")
@click.option("--oath", "oath_description", required=True, help="The promise")
@click.option("--fulfillment", "fulfillment_description", required=True, help="The ask")
@click.option("--tee-url", help="TEE attestation URL")
@click.option("--payment", help="x402 payment proof (base64 X-PAYMENT header)")
@click.pass_context
def create(
    ctx,
    name: str,
    agent_type: str,
    description: str,
    settlement_address: str,
    oath_description: str,
    fulfillment_description: str,
    tee_url: str | None,
    payment: str | None,
):
    """Mint a new agent oath for the connected wallet."""
    require_wallet(ctx)
    client = get_client(ctx)

    data = {
        "agentName": name,
        "agentType": agent_type,
        "description": description,
        "settlementAddress": settlement_address,
        "oathDescription": oath_description,
        "fulfillmentDescription": fulfillment_description,
    }
    if tee_url:
        data["teeUrl"] = tee_url

    try:
        agent, transaction_id = client.create_agent(data, payment=payment)

        console.print("\n[green]✓ Agent created successfully[/green]")
        console.print(f"  ID: [cyan]{agent.get('id')}[/cyan]")
        console.print(f"  Name: {agent.get('agentName')}")
        console.print(f"  Verified: {agent.get('verified')}")
        if transaction_id:
            console.print(f"  Transaction: [cyan]{transaction_id}[/cyan]")

    except PaymentRequired as e:
        price = e.challenge.get("price", {})
        progress = PaymentProgress.at(
            "wallet_confirm",
            amount=price.get("amount", "0"),
            decimals=price.get("asset", {}).get("decimals", 6),
        )
        console.print("\n[yellow]Payment required to create an agent[/yellow]")
        console.print(f"  Price: [bold]{progress.amount_display}[/bold]")
        console.print(f"  Asset: {e.challenge.get('asset')}")
        console.print(f"  Network: {e.challenge.get('network')}")
        console.print(f"  Pay to: {e.challenge.get('payTo')}")
        for step in progress.steps:
            console.print(f"  [{'bold' if step.status == 'active' else 'dim'}]{step.label}[/]")
        console.print("\nSign the payment in your wallet and re-run with --payment <X-PAYMENT>")
    except APIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        if e.details:
            console.print(f"[red]  {e.details}[/red]")
        transaction_id = (e.body or {}).get("transactionId")
        if transaction_id:
            console.print(f"  Transaction: [cyan]{transaction_id}[/cyan]")
    finally:
        client.close()
