#!/usr/bin/env python3
"""
Main CLI Entry Point for tezsync

Provides the command-line interface: the CLI is the outer account lifecycle
that loads the previously adopted shape, runs a sync and adopts the result.
"""

import asyncio
import logging
import os

import click

from ..core.config import get_config
from ..core.models import AccountShape
from ..tezos import (
    AccountShapeInfo,
    AccountSnapshotStore,
    IndexerError,
    SnapshotError,
    TzktClient,
    UnsupportedAccountError,
    get_account_shape,
)


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    tezsync - Incremental Tezos Account Synchronisation

    Syncs Tezos account history from the TzKT indexer into stable,
    canonical operation records.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["TEZSYNC_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("tezsync").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    try:
        ctx.obj["config"] = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")


@main.command()
def version() -> None:
    """Show version information."""
    from tezsync import __author__, __version__

    click.echo(f"tezsync v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Snapshot Directory: {config_obj.snapshot_dir}")
    click.echo(f"  TzKT API: {config_obj.indexer.base_url}")
    click.echo(f"  Page Size: {config_obj.indexer.page_size}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


async def _sync(info: AccountShapeInfo) -> AccountShape:
    config_obj = get_config()
    async with TzktClient(config_obj.indexer) as client:
        return await get_account_shape(client, info)


@main.command()
@click.argument("address")
@click.option("--account-id", help="Account identifier (default: tezos:<address>)")
@click.option("--no-save", is_flag=True, help="Print the result without adopting it")
@click.pass_context
def sync(ctx: click.Context, address: str, account_id: str | None, no_save: bool) -> None:
    """
    Synchronise a Tezos account and adopt the new snapshot.

    Examples:
      tezsync sync tz1VSUr8wwNhLAzempoch5d6hLRiTh8Cjcjb
      tezsync sync tz1VSUr8wwNhLAzempoch5d6hLRiTh8Cjcjb --no-save
    """
    config_obj = ctx.obj["config"]
    store = AccountSnapshotStore(config_obj.snapshot_dir)

    try:
        previous = store.load(address)
    except SnapshotError as e:
        raise click.ClickException(f"{e}. Remove it to resync from scratch.") from e

    info = AccountShapeInfo(
        address=address,
        account_id=account_id or f"tezos:{address}",
        initial_account=previous,
    )

    if ctx.obj.get("verbose"):
        click.echo(store.summary_text(address))

    try:
        shape = asyncio.run(_sync(info))
    except (IndexerError, UnsupportedAccountError) as e:
        # Previous snapshot is left untouched
        raise click.ClickException(f"Sync failed: {e}") from e

    click.echo(f"Account: {address}")
    click.echo(f"Block height: {shape.block_height}")
    if shape.is_empty:
        click.echo("Account is empty")
    else:
        previous_count = previous.operation_count if previous else 0
        click.echo(f"Balance: {shape.balance}")
        click.echo(f"Revealed: {shape.tezos_resources.revealed if shape.tezos_resources else False}")
        click.echo(f"Operations: {shape.operation_count} ({shape.operation_count - previous_count:+d})")
        click.echo(f"Sub-accounts: {len(shape.sub_accounts or [])}")
        if shape.sub_account_changes:
            click.echo("Sub-account changes:")
            for change in shape.sub_account_changes:
                click.echo(f"  - {change}")
        else:
            click.echo("Sub-account changes: none")

    if no_save:
        click.echo("Snapshot not saved (--no-save)")
        return

    path = store.save(address, shape)
    click.echo(f"Snapshot saved: {path}")


if __name__ == "__main__":
    main()
