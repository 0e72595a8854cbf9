"""tolog path — show or choose the journal directory."""

from __future__ import annotations

import asyncio

import click


@click.group(invoke_without_command=True)
@click.pass_context
def path(ctx: click.Context) -> None:
    """Show or change where journal files live."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(show_path)


@path.command("show")
@click.pass_obj
def show_path(obj: dict) -> None:
    """Print the active journal directory."""
    from tolog.core.cli.common import create_app

    app = create_app(obj)

    async def _resolve():
        async with app:
            return app.session.path

    resolved = asyncio.run(_resolve())
    if resolved is None:
        click.echo("Journal directory is unavailable.", err=True)
        raise SystemExit(1)
    click.echo(str(resolved))


@path.command("set")
@click.argument("directory", type=click.Path(file_okay=False))
@click.pass_obj
def set_path(obj: dict, directory: str) -> None:
    """Use DIRECTORY as the journal directory (created if missing)."""
    from tolog.core.cli.common import create_app

    app = create_app(obj)

    async def _set() -> bool:
        async with app:
            return await app.session.set_journal_path(directory)

    if not asyncio.run(_set()):
        click.echo(f"Could not use {directory} as the journal directory.", err=True)
        raise SystemExit(1)
    click.echo(f"Journal directory set to {app.session.path}")
    click.echo(f"{len(app.session.entries)} entries found.")
