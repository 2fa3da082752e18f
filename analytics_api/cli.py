"""Command line entry point for the external scheduler.

    analytics-api load 12 --simulate
    analytics-api load-schedule daily
"""
import asyncio
import json

import click

from .application import ContextEngine, connect, disconnect
from .datasources.base import UPSTREAM_ERRORS
from .datasources.registry import init_registry
from .errors import DatasourceValidationError, RecordNotFoundError, UnauthorizedError
from .models.enum.dataloads import DataloadMode
from .tasks.dataloads import run_dataload, run_schedule


async def _load(dataload_id: int, mode: DataloadMode):
    registry = init_registry()
    await connect()
    try:
        async with ContextEngine("WRITE"):
            return await run_dataload(dataload_id, mode, registry)
    finally:
        await disconnect()


async def _load_schedule(schedule: str):
    registry = init_registry()
    await connect()
    try:
        async with ContextEngine("WRITE"):
            return await run_schedule(schedule, registry)
    finally:
        await disconnect()


@click.group()
def cli() -> None:
    pass


@cli.command()
@click.argument("dataload_id", type=int)
@click.option("--simulate", is_flag=True, help="Read only, do not store any rows")
def load(dataload_id: int, simulate: bool) -> None:
    """Run a single dataload."""
    mode = DataloadMode.simulate if simulate else DataloadMode.execute
    try:
        result = asyncio.run(_load(dataload_id, mode))
    except RecordNotFoundError as e:
        raise click.ClickException(str(e))
    except (DatasourceValidationError, UnauthorizedError, *UPSTREAM_ERRORS) as e:
        # only simulations propagate datasource failures
        raise click.ClickException(f"Datasource could not be read: {e}")

    click.echo(json.dumps(result.model_dump(), default=str))
    if getattr(result, "error", 0):
        raise SystemExit(1)


@cli.command("load-schedule")
@click.argument("schedule", type=str)
def load_schedule(schedule: str) -> None:
    """Execute all dataloads with the given schedule."""
    results = asyncio.run(_load_schedule(schedule))

    failed = 0
    for dataload_id, result in results:
        click.echo(f"{dataload_id}: {json.dumps(result.model_dump())}")
        if result.error:
            failed += 1

    click.echo(f"{len(results)} dataloads executed, {failed} failed")
    if failed:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
