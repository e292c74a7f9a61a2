"""Tessera CLI application using Typer.

This module provides maintenance utilities for the identity store:
secret generation, expired token cleanup and role inspection.
"""

import asyncio
import secrets
from uuid import UUID

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from tessera_config import Settings, get_settings
from tessera_identity.factory import build_repositories, open_store
from tessera_identity.logging_config import configure_logging

app = typer.Typer(
    name="tessera",
    help="Tessera identity maintenance CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
tokens_app = typer.Typer(
    name="tokens",
    help="Single-use token maintenance",
    no_args_is_help=True,
)
users_app = typer.Typer(
    name="users",
    help="User inspection",
    no_args_is_help=True,
)
app.add_typer(secrets_app)
app.add_typer(tokens_app)
app.add_typer(users_app)


def _load_settings() -> Settings:
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print("[red]Invalid configuration:[/red]")
        for error in e.errors(include_url=False):
            location = ".".join(str(part) for part in error["loc"]) or "settings"
            console.print(f"  [red]{location}[/red]: {error['msg']}")
        raise typer.Exit(code=1) from e

    configure_logging(settings.log_level)
    return settings


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate a JWT signing secret.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Tessera Secret Generation[/bold green]")
    console.print("=" * 60)

    # 64 bytes, comfortably above the 32 character minimum
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    console.print("=" * 60)
    console.print(
        "[yellow]Keep this secret secure and never commit it "
        "to version control![/yellow]\n"
    )


async def _cleanup_expired_tokens(settings: Settings) -> int:
    async with open_store(settings) as client:
        repositories = build_repositories(client, settings)
        return await repositories.ephemeral_tokens.cleanup_expired()


@tokens_app.command("cleanup")
def cleanup_tokens() -> None:
    """Delete expired email confirmation and password reset tokens."""
    settings = _load_settings()
    removed = asyncio.run(_cleanup_expired_tokens(settings))
    console.print(
        f"[green]Removed {removed} expired token(s)[/green] "
        f"from {settings.dynamodb_temporary_tokens_table}"
    )


async def _role_names(settings: Settings, user_id: UUID) -> list[str]:
    async with open_store(settings) as client:
        repositories = build_repositories(client, settings)
        return await repositories.user_roles.get_role_names(user_id)


@users_app.command("roles")
def list_roles(
    user_id: str = typer.Argument(..., help="User id (UUID)"),
) -> None:
    """Print the roles assigned to a user."""
    try:
        parsed_id = UUID(user_id)
    except ValueError as e:
        console.print(f"[red]Not a valid user id:[/red] {user_id}")
        raise typer.Exit(code=1) from e

    settings = _load_settings()
    role_names = asyncio.run(_role_names(settings, parsed_id))

    if not role_names:
        console.print(f"[dim]User {parsed_id} has no roles[/dim]")
        return

    table = Table(title=f"Roles of {parsed_id}")
    table.add_column("Role", style="cyan")
    for role_name in sorted(role_names):
        table.add_row(role_name)
    console.print(table)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
