#!/usr/bin/env python3
"""
Main CLI entry point for the medications subgraph.
"""

import os
import sys
from pathlib import Path

import click
import uvicorn
from alembic import command
from alembic.config import Config

from medications import __version__
from medications.config import settings
from medications.dbmodels import PRESCRIPTION_STATUSES
from medications.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="medications")
def cli() -> None:
    """Medications subgraph CLI - run the server, inspect data and migrate the schema."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, help="Host to bind to")
@click.option("--port", default=settings.api_port, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the medications GraphQL server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting medications subgraph server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Worker processes re-import the app, so pass settings through the environment
    if log_level == "debug":
        os.environ["MEDICATIONS_DEBUG"] = "true"
        os.environ["MEDICATIONS_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("MEDICATIONS_DEBUG", "false")
        os.environ.setdefault("MEDICATIONS_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "medications.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),
                log_level=log_level,
                access_log=True,
            )
        else:
            from medications.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("print-schema")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the SDL to a file instead of stdout",
)
def print_schema(output: Path | None) -> None:
    """Print the subgraph SDL as composed for the federation gateway."""
    from medications.graphql.schema import schema

    sdl = schema.as_str()
    if output is None:
        click.echo(sdl)
    else:
        output.write_text(sdl + "\n", encoding="utf-8")
        click.echo(f"✓ Schema written to {output}")


@cli.group()
def prescriptions() -> None:
    """Inspect prescription records."""
    pass


@prescriptions.command("list")
@click.option(
    "--status",
    type=click.Choice(PRESCRIPTION_STATUSES, case_sensitive=False),
    default=None,
    help="Only list prescriptions with this status",
)
def list_prescriptions(status: str | None) -> None:
    """List prescriptions stored in the database."""
    import asyncio

    from medications.database.connection import dispose_database, get_async_session
    from medications.prescriptions import repository as prescriptions_repo

    configure_logging()

    async def do_list():
        try:
            async with get_async_session() as db:
                if status:
                    rows = await prescriptions_repo.find_by_status(db, status.upper())
                else:
                    rows = await prescriptions_repo.find_all(db)
        except Exception as e:
            logger.error("Failed to list prescriptions", error=str(e))
            click.echo(f"✗ Error listing prescriptions: {e}", err=True)
            sys.exit(1)
        finally:
            await dispose_database()

        if not rows:
            click.echo("No prescriptions found.")
            return

        click.echo(f"Found {len(rows)} prescription(s):\n")
        for row in rows:
            click.echo(f"  {row.id}  {row.medication_name} {row.dosage}")
            click.echo(f"    Member:   {row.member_id}")
            click.echo(f"    Provider: {row.provider_id}")
            click.echo(f"    Status:   {row.status}  Refills: {row.refills_remaining}")
            click.echo()

    asyncio.run(do_list())

def get_alembic_config() -> Config:
    """Alembic configuration for the migrations shipped beside the package."""
    project_dir = Path(__file__).resolve().parents[2]
    alembic_ini = project_dir / "alembic.ini"

    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(project_dir / "alembic"))
    return config


def run_alembic(action: str, *args: str) -> None:
    """Run an alembic command, exiting non-zero when it fails."""
    try:
        config = get_alembic_config()
        logger.info("Running migration command", action=action, args=list(args))
        getattr(command, action)(config, *args)
    except Exception as e:
        logger.error("Migration command failed", action=action, error=str(e))
        click.echo(f"✗ {action} failed: {e}", err=True)
        sys.exit(1)


@cli.group()
def db() -> None:
    """Manage the prescriptions database schema."""
    configure_logging()


@db.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Upgrade the database to REVISION (default: head)."""
    run_alembic("upgrade", revision)


@db.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade the database to REVISION (default: one step back)."""
    run_alembic("downgrade", revision)


@db.command()
def current() -> None:
    """Show the revision the database is at."""
    run_alembic("current")


@db.command()
def history() -> None:
    """Show the migration history."""
    run_alembic("history")


if __name__ == "__main__":
    cli()
