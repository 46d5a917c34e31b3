"""Admin CLI.

Usage:
    scavenger create-admin admin            # prompts for a password
    scavenger seed-locations                # load the default hunt into an empty DB
    scavenger serve --port 8000
"""
from __future__ import annotations

import asyncio

import typer
from sqlalchemy import select

from scavenger.config import settings
from scavenger.db import SessionLocal
from scavenger.logging_setup import configure_logging
from scavenger.models.user import User
from scavenger.security import hash_password
from scavenger.services.locations import seed_default_locations

app = typer.Typer(name="scavenger", help="Scavenger hunt admin tools", no_args_is_help=True)


async def _create_admin(username: str, password: str) -> bool:
    async with SessionLocal() as session:
        user = await session.scalar(select(User).where(User.username == username))
        if user is not None:
            if user.is_admin:
                return False
            user.is_admin = True
        else:
            session.add(User(username=username, password_hash=hash_password(password), is_admin=True))
        await session.commit()
        return True


async def _seed() -> int:
    async with SessionLocal() as session:
        return await seed_default_locations(session)


@app.command("create-admin")
def cmd_create_admin(
    username: str = typer.Argument("admin", help="Admin username"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
) -> None:
    """Create an admin account, or promote an existing user (their password is left unchanged)."""
    if asyncio.run(_create_admin(username, password)):
        typer.echo(f"Admin '{username}' ready")
    else:
        typer.echo(f"Admin '{username}' already exists")


@app.command("seed-locations")
def cmd_seed() -> None:
    """Insert the default locations if the table is empty."""
    added = asyncio.run(_seed())
    typer.echo(f"Added {added} locations" if added else "Locations already present; nothing to do")


@app.command("serve")
def cmd_serve(
    host: str = typer.Option(settings.api_host, "--host"),
    port: int = typer.Option(settings.api_port, "--port", "-p"),
    reload: bool = typer.Option(False, "--reload"),
) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    configure_logging()
    uvicorn.run("scavenger.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
