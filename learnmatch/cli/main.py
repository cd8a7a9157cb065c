"""
Typer CLI for learnmatch.

Commands:
    learnmatch db init               - Initialize database tables
    learnmatch db seed PATH          - Merge users, modules and opportunities from JSON
    learnmatch catalog list          - Show the catalog in quiz order
    learnmatch catalog quiz MODULE   - Print the generated quiz for a module
    learnmatch serve                 - Run the API server

Usage:
    learnmatch --help
    learnmatch db seed data/seed.json
    learnmatch catalog quiz mod-001 --answers
"""

from __future__ import annotations

from pathlib import Path

import typer
from loguru import logger
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from config import get_settings
from learnmatch import __version__
from learnmatch.errors import LearnMatchError
from learnmatch.logging_setup import configure_logging

app = typer.Typer(
    help="learnmatch CLI: module catalog, generated quizzes and mentorship matching",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(level="DEBUG" if verbose else None)


# ========================================
# DATABASE COMMANDS
# ========================================

db_app = typer.Typer(help="Database management (init, seed)")
app.add_typer(db_app, name="db")


@db_app.command("init")
def db_init() -> None:
    """
    Initialize database tables from SQLAlchemy models.

    Safe to run multiple times (idempotent).
    """
    from learnmatch.db.database import init_db

    logger.info("Initializing database tables...")
    init_db()
    rprint("[green]✓[/green] Database initialized!")


@db_app.command("seed")
def db_seed(
    path: Path = typer.Argument(..., help="JSON file with users, modules and opportunities"),
) -> None:
    """Merge seed records by id. Module order in the file becomes catalog order."""
    from learnmatch.db.database import init_db, session_scope
    from learnmatch.db.seed import seed_from_file

    init_db()
    try:
        with session_scope() as session:
            result = seed_from_file(session, path)
    except FileNotFoundError as e:
        rprint(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)
    except LearnMatchError as e:
        rprint(f"[red]✗[/red] Seed rejected: {e.message}")
        raise typer.Exit(code=1)

    table = Table(title="Seed Results", show_header=True)
    table.add_column("Entity Type", style="cyan")
    table.add_column("Merged", justify="right", style="green")
    table.add_row("Modules", str(result.modules))
    table.add_row("Users", str(result.users))
    table.add_row("Opportunities", str(result.opportunities))
    console.print(table)


# ========================================
# CATALOG COMMANDS
# ========================================

catalog_app = typer.Typer(help="Inspect the module catalog and generated quizzes")
app.add_typer(catalog_app, name="catalog")


@catalog_app.command("list")
def catalog_list() -> None:
    """Show modules in catalog order (the order quizzes are generated from)."""
    from learnmatch.catalog import CatalogService
    from learnmatch.db.database import session_scope

    with session_scope() as session:
        catalog = CatalogService(session).snapshot()

    if not len(catalog):
        rprint("[yellow]⚠[/yellow] Catalog is empty")
        return

    table = Table(title=f"Module Catalog ({len(catalog)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="white", max_width=40)
    table.add_column("Duration", justify="right")
    table.add_column("Difficulty", style="green")
    for position, module in enumerate(catalog):
        table.add_row(str(position), module.id, module.title, module.duration or "-", module.difficulty or "-")
    console.print(table)


@catalog_app.command("quiz")
def catalog_quiz(
    module_id: str = typer.Argument(..., help="Module id"),
    answers: bool = typer.Option(False, "--answers", "-a", help="Mark the correct option"),
) -> None:
    """Print the quiz generated for a module."""
    from learnmatch.db.database import session_scope
    from learnmatch.quiz import QuizService

    try:
        with session_scope() as session:
            quiz = QuizService(session).quiz_for(module_id)
    except LearnMatchError as e:
        rprint(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)

    rprint(f"[bold]{quiz.title}[/bold] ({len(quiz)} questions)")
    for number, question in enumerate(quiz.questions, start=1):
        rprint(f"\n[cyan]{number}.[/cyan] {question.question}")
        for index, option in enumerate(question.options):
            marker = "[green]✓[/green]" if answers and index == question.answer_index else " "
            rprint(f"   {marker} {chr(ord('A') + index)}) {option}")


# ========================================
# SERVER
# ========================================


@app.command("serve")
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (defaults to API_HOST)"),
    port: int = typer.Option(None, "--port", help="Port (defaults to API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "learnmatch.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command("version")
def show_version() -> None:
    """Show version information."""
    rprint(f"[bold]learnmatch[/bold] v{__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
