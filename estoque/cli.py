"""Command-line interface for Estoque."""

import logging
import os
import sys

import click
import uvicorn
from rich.console import Console
from rich.panel import Panel

from estoque import __version__

console = Console()
logger = logging.getLogger(__name__)

ENV_TEMPLATE = """# Database Configuration
# SQLite is used unless POSTGRES_SERVER is set
SQLITE_DB_PATH=estoque.db
# POSTGRES_SERVER=localhost
# POSTGRES_USER=estoque
# POSTGRES_PASSWORD=changethis
# POSTGRES_DB=estoque

# Security (Change this in production!)
SECRET_KEY=dev-secret-key-12345

# First administrator
FIRST_SUPERUSER=admin@example.com
FIRST_SUPERUSER_PASSWORD=changethis

# Sectors created on first start
DEFAULT_SETORES=Administração,Cozinha,Limpeza,Publicações
SEED_SAMPLE_DATA=false

# Google sign-in (Optional)
# GOOGLE_CLIENT_ID=
# GOOGLE_CLIENT_SECRET=

FRONTEND_URL=http://localhost:5173
ENVIRONMENT=local
"""


@click.group()
@click.version_option(version=__version__)
def main():
    """
    Estoque - stock control for sectors.

    Custom tables with typed columns, a product catalog and per-sector users.
    """
    pass


def setup_db():
    """Create tables and seed sectors and the first administrator."""
    from sqlmodel import Session

    from estoque.database import create_db_and_tables, engine, init_db

    console.print("[cyan]⚙ Checking database...[/cyan]")
    create_db_and_tables()
    with Session(engine) as session:
        init_db(session)
    console.print("[green]✓ Database is up to date.[/green]")


@main.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to")
@click.option("--port", default=8000, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.option("--workers", default=1, help="Number of worker processes")
def start(host: str, port: int, reload: bool, workers: int):
    """Start the Estoque API server."""
    setup_db()

    url = f"http://{'localhost' if host == '0.0.0.0' else host}:{port}"
    console.print(
        Panel.fit(
            f"""[bold cyan]📦 Estoque[/bold cyan]

[dim]Host:[/dim] {host}
[dim]Port:[/dim] {port}
[dim]Workers:[/dim] {workers}
[dim]Reload:[/dim] {reload}

[yellow]API docs at:[/yellow] [link]{url}/docs[/link]
""",
            title="Server Configuration",
            border_style="cyan",
        )
    )

    try:
        uvicorn.run(
            "estoque.main:app",
            host=host,
            port=port,
            reload=reload,
            workers=workers if not reload else 1,
            log_level="info",
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]👋 Server stopped[/yellow]")
        sys.exit(0)


@main.command()
def init():
    """Write a .env template in the current directory."""
    if os.path.exists(".env"):
        console.print("[yellow]⚠ .env file already exists[/yellow]")
        return

    with open(".env", "w", encoding="utf-8") as f:
        f.write(ENV_TEMPLATE)
    console.print("[green]✓ Created .env file[/green]")
    console.print("\nNext steps:")
    console.print("1. Edit [cyan].env[/cyan] with your configuration")
    console.print("2. Run [cyan]estoque start[/cyan] to initialize the database and start the server")


@main.command()
def version():
    """Show version information."""
    from rich.table import Table

    table = Table(title="Version Information", show_header=False)
    table.add_row("Package", "estoque")
    table.add_row("Version", __version__)
    table.add_row(
        "Python",
        f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    )
    console.print(table)


if __name__ == "__main__":
    main()
