"""Command-line interface for the Knowledge Graph Agent."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from knowledge_graph_agent.application.factories import HandlerFactory
from knowledge_graph_agent.config import settings
from knowledge_graph_agent.domain.exceptions import KnowledgeGraphAgentError
from knowledge_graph_agent.domain.tools.registry import ToolRegistry
from knowledge_graph_agent.observability import setup_logging

# Initialize Typer app
app = typer.Typer(
    name="kg-agent",
    help="Knowledge Graph Agent CLI - ask questions about a Neo4j database",
    add_completion=False,
)

# Rich console for pretty output
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging before any command runs."""
    setup_logging("DEBUG" if verbose else settings.app.log_level, settings.app.log_file)


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question to ask about the graph"),
    thread_id: str | None = typer.Option(None, "--thread", "-t", help="Continue a specific thread"),
    show_trace: bool = typer.Option(True, "--trace/--no-trace", help="Stream tool activity while answering"),
):
    """Ask a question, continuing a thread or starting a new one."""

    def print_trace(line: str) -> None:
        style = "bold cyan" if line.startswith("Iteration") else "dim"
        console.print(line, style=style, markup=False, highlight=False)

    async def run_ask():
        factory = HandlerFactory()
        try:
            handler = factory.create_question_handler()
            if thread_id:
                console.print(f"[cyan]Using thread: {thread_id}[/cyan]")
            else:
                console.print("[dim]Starting new thread[/dim]")

            result = await handler.ask(question, thread_id, on_trace=print_trace if show_trace else None)

            console.print("[green]Answer:[/green]")
            console.print(f"  {result.answer}", markup=False)
            console.print(f"[dim]Thread: {result.thread_id}[/dim]")
        finally:
            await factory.cleanup()

    try:
        asyncio.run(run_ask())
    except KnowledgeGraphAgentError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(code=1) from e


@app.command()
def history(
    thread_id: str = typer.Argument(..., help="Thread to show"),
):
    """Show the stored messages of a thread."""

    async def run_history():
        factory = HandlerFactory()
        try:
            handler = factory.create_question_handler()
            return await handler.get_history(thread_id)
        finally:
            await factory.cleanup()

    try:
        messages = asyncio.run(run_history())
    except KnowledgeGraphAgentError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(code=1) from e

    if not messages:
        console.print(f"[yellow]No messages in thread {thread_id}[/yellow]")
        return

    table = Table(title=f"Thread {thread_id}")
    table.add_column("Time", style="dim")
    table.add_column("Role", style="cyan")
    table.add_column("Content", style="green")

    for message in messages:
        timestamp = message.timestamp.isoformat(timespec="seconds") if message.timestamp else ""
        table.add_row(timestamp, message.role.value, message.content)

    console.print(table)


@app.command()
def new_thread():
    """Create an empty thread and print its id."""

    async def run_create():
        factory = HandlerFactory()
        try:
            handler = factory.create_question_handler()
            return await handler.create_thread()
        finally:
            await factory.cleanup()

    try:
        created = asyncio.run(run_create())
    except KnowledgeGraphAgentError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(code=1) from e

    console.print(created)


@app.command()
def tools():
    """List the tools offered to the model."""
    table = Table(title="Available Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="green")
    table.add_column("Arguments", style="yellow")

    for tool in ToolRegistry.default().definitions():
        required = (tool.parameters or {}).get("required", [])
        table.add_row(tool.name, tool.description, ", ".join(required) or "-")

    console.print(table)


@app.command()
def info():
    """Display agent information."""
    table = Table(title="Knowledge Graph Agent Info")

    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.app.environment.value)
    table.add_row("Neo4j URI", settings.neo4j.uri)
    table.add_row("Neo4j Database", settings.neo4j.database)
    table.add_row("Model", settings.model.model_name)
    table.add_row("Model Backend", "Azure OpenAI" if settings.model.is_azure else "OpenAI")
    table.add_row("Iteration Limit", str(settings.agent.iteration_limit))
    table.add_row("Validate Thread IDs", str(settings.agent.validate_thread_ids))

    console.print(table)


@app.command()
def config(
    show_sensitive: bool = typer.Option(False, help="Show sensitive configuration values"),
):
    """Display current configuration."""
    table = Table(title="Configuration")
    table.add_column("Section", style="cyan")
    table.add_column("Key", style="yellow")
    table.add_column("Value", style="green")

    sensitive_keys = {"password", "api_key", "azure_api_key"}
    sections = {
        "app": settings.app.model_dump(),
        "neo4j": settings.neo4j.model_dump(),
        "model": settings.model.model_dump(),
        "agent": settings.agent.model_dump(exclude={"system_prompt"}),
    }

    for section, values in sections.items():
        for key, value in values.items():
            if key in sensitive_keys and value and not show_sensitive:
                value = "***HIDDEN***"
            table.add_row(section, key, str(value))

    console.print(table)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind to"),
    port: int | None = typer.Option(None, help="Port to bind to"),
    reload: bool = typer.Option(False, help="Enable auto-reload"),
):
    """Start the FastAPI server."""
    import uvicorn

    host = host or settings.app.api_host
    port = port or settings.app.api_port
    console.print(f"[cyan]Starting server on {host}:{port}[/cyan]")
    uvicorn.run(
        "knowledge_graph_agent.infrastructure.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
