"""AI task commands."""
from __future__ import annotations

import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..api import APIError, get_client

console = Console()

TASK_TYPES = ["text_generation", "analysis", "summarization", "question_answer"]

STATUS_STYLES = {
    "pending": "yellow",
    "processing": "blue",
    "completed": "green",
    "failed": "red",
}


def _print_result(task: dict) -> None:
    """Print the AI output stored on a completed task."""
    if not task.get("aiResult"):
        return
    result = json.loads(task["aiResult"])
    tokens = result.get("tokens", {})
    console.print(Panel(
        result.get("content", ""),
        title=f"{result.get('model', '')} ({tokens.get('total', 0)} tokens)",
    ))


@click.group()
def tasks():
    """Create and run AI tasks for an agent."""
    pass


@tasks.command("list")
@click.argument("agent_id")
@click.pass_context
def list_tasks(ctx, agent_id: str):
    """List the tasks of AGENT_ID, newest first."""
    client = get_client(ctx)

    try:
        tasks_list = client.get(f"/api/agents/{agent_id}/tasks")

        if not tasks_list:
            console.print("[dim]No tasks found[/dim]")
            return

        table = Table(title=f"Tasks for agent {agent_id}")
        table.add_column("ID", style="cyan")
        table.add_column("Type")
        table.add_column("Status")
        table.add_column("Description")
        table.add_column("Created")

        for task in tasks_list:
            style = STATUS_STYLES.get(task.get("status"), "dim")
            table.add_row(
                str(task.get("id")),
                task.get("taskType", ""),
                f"[{style}]{task.get('status', '')}[/]",
                task.get("taskDescription", ""),
                (task.get("createdAt") or "")[:19],
            )

        console.print(table)

    except APIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
    finally:
        client.close()


@tasks.command()
@click.option("--agent-id", type=int, required=True, help="Owning agent")
@click.option("--type", "task_type", type=click.Choice(TASK_TYPES), required=True, help="Task type")
@click.option("--description", required=True, help="What the agent should do")
@click.option("--execute", "run_now", is_flag=True, help="Execute right after creating")
@click.pass_context
def create(ctx, agent_id: int, task_type: str, description: str, run_now: bool):
    """Create a pending task."""
    client = get_client(ctx)

    try:
        task = client.post("/api/tasks", {
            "agentId": agent_id,
            "taskType": task_type,
            "taskDescription": description,
        })
        console.print(f"[green]✓ Task {task.get('id')} created[/green] ({task.get('status')})")

        if run_now:
            task = client.post(f"/api/tasks/{task.get('id')}/execute")
            console.print(f"[green]✓ Task {task.get('id')} {task.get('status')}[/green]")
            _print_result(task)

    except APIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        if e.details:
            console.print(f"[red]  {e.details}[/red]")
    finally:
        client.close()


@tasks.command()
@click.argument("task_id")
@click.pass_context
def execute(ctx, task_id: str):
    """Run a pending task through the AI executor."""
    client = get_client(ctx)

    try:
        task = client.post(f"/api/tasks/{task_id}/execute")
        console.print(f"[green]✓ Task {task.get('id')} {task.get('status')}[/green]")
        _print_result(task)

    except APIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        if e.details:
            console.print(f"[red]  {e.details}[/red]")
    finally:
        client.close()
