#!/usr/bin/env python3
"""
Network roles CLI
Manage network role definitions and run the user migration
"""

import csv
import io
import json
from functools import wraps

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..bootstrap import NetworkRoles
from ..config.logging_config import setup_logging
from ..core.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    NetworkRolesError,
    PersistenceDisabledError,
    RoleAlreadyExistsError,
    RoleNotFoundError,
)
from ..features.migration import MigrationStatus

console = Console(soft_wrap=True)


def handle_errors(func):
    """Print library errors in red and exit with status 1."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except NetworkRolesError as e:
            console.print(f"[red]Error: {e.message}[/red]")
            raise click.exceptions.Exit(1)

    return wrapper


def get_app(ctx: click.Context) -> NetworkRoles:
    return ctx.obj["app"]


def durability_check(app: NetworkRoles) -> None:
    if not app.has_durable_storage:
        raise ConfigurationError(
            "In-memory storage is discarded when the command exits; set NETWORK_ROLES_STORAGE_BACKEND=redis.",
            details={"setting": "NETWORK_ROLES_STORAGE_BACKEND"},
        )


def persistence_check(app: NetworkRoles) -> None:
    durability_check(app)
    if not app.registry.is_persistent:
        raise PersistenceDisabledError()


def get_role_or_fail(app: NetworkRoles, role_key: str):
    role = app.registry.get_role(role_key)
    if role is None:
        raise RoleNotFoundError(f"'{role_key}' network role not found.", details={"role": role_key})
    return role


def plural(count: int, singular: str, plural_form: str) -> str:
    return singular if count == 1 else plural_form


# CLI Commands

@click.group()
@click.option('--network', '-n', type=int, default=None, envvar='NETWORK_ROLES_NETWORK', help='Network ID to operate on')
@click.pass_context
@handle_errors
def cli(ctx, network):
    """Network roles CLI"""
    ctx.ensure_object(dict)
    if 'app' not in ctx.obj:
        setup_logging()
        ctx.obj['app'] = NetworkRoles()

    if network:
        ctx.obj['app'].switch_to(network)


# Roles

@cli.group()
def role():
    """Manage network roles"""


@role.command('list')
@click.option('--format', 'output_format', type=click.Choice(['table', 'csv', 'json', 'count']), default='table', help='Output format')
@click.pass_context
def list_roles(ctx, output_format):
    """List network roles"""
    app = get_app(ctx)
    items = [{"name": name, "role": key} for key, name in app.registry.get_role_names().items()]

    if output_format == 'count':
        click.echo(len(items))
    elif output_format == 'json':
        click.echo(json.dumps(items))
    elif output_format == 'csv':
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=["name", "role"], lineterminator="\n")
        writer.writeheader()
        writer.writerows(items)
        click.echo(buffer.getvalue(), nl=False)
    else:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Name", style="cyan")
        table.add_column("Role", style="yellow")
        for item in items:
            table.add_row(item["name"], item["role"])
        console.print(table)


@role.command()
@click.argument('role_key')
@click.pass_context
@handle_errors
def exists(ctx, role_key):
    """Check if a network role exists"""
    app = get_app(ctx)
    if not app.registry.is_role_name(role_key):
        raise RoleNotFoundError(f"Network role with ID '{role_key}' does not exist.", details={"role": role_key})
    console.print(f"[green]Success: Network role with ID '{role_key}' exists.[/green]")


@role.command()
@click.argument('role_key')
@click.argument('role_name')
@click.option('--clone', default=None, help='Existing network role to copy capabilities from')
@click.pass_context
@handle_errors
def create(ctx, role_key, role_name, clone):
    """Create a new network role"""
    app = get_app(ctx)
    persistence_check(app)

    if not role_key.strip() or not role_name.strip():
        raise InvalidArgumentError("Can't create network role, insufficient information provided.")

    capabilities = {}
    if clone:
        capabilities = dict(get_role_or_fail(app, clone).capabilities)

    if app.registry.add_role(role_key, role_name, capabilities) is None:
        raise RoleAlreadyExistsError(f"Network role with key '{role_key}' already exists.", details={"role": role_key})

    if clone:
        console.print(f"[green]Success: Network role with key '{role_key}' created. Cloned capabilities from '{clone}'.[/green]")
    else:
        console.print(f"[green]Success: Network role with key '{role_key}' created.[/green]")


@role.command()
@click.argument('role_key')
@click.pass_context
@handle_errors
def delete(ctx, role_key):
    """Delete an existing network role"""
    app = get_app(ctx)
    persistence_check(app)

    if not app.registry.remove_role(role_key):
        raise RoleNotFoundError("Network role key not provided, or is invalid.", details={"role": role_key})
    console.print(f"[green]Success: Network role with key '{role_key}' deleted.[/green]")


@role.command()
@click.argument('role_keys', nargs=-1)
@click.option('--all', 'reset_all', is_flag=True, help='Reset all default network roles')
@click.pass_context
@handle_errors
def reset(ctx, role_keys, reset_all):
    """Reset default network roles to their default capabilities"""
    app = get_app(ctx)
    persistence_check(app)

    if not reset_all and not role_keys:
        raise InvalidArgumentError("Network role key not provided, or is invalid.")

    report = app.defaults.reset(role_keys, reset_all=reset_all)
    for key in report.not_affected:
        console.print(f"Custom network role '{key}' not affected.")

    if not report.results:
        raise InvalidArgumentError("Must specify a default network role to reset.")

    for result in report.results:
        if result.changed:
            console.print(
                f"Restored {result.restored_count} {plural(result.restored_count, 'capability', 'capabilities')} "
                f"to and removed {result.removed_count} {plural(result.removed_count, 'capability', 'capabilities')} "
                f"from '{result.key}' role."
            )
        else:
            console.print(f"No changes necessary for '{result.key}' network role.")

    single = report.num_requested == 1
    if report.num_reset:
        message = "Network role reset." if single else f"{report.num_reset} of {report.num_requested} network roles reset."
    else:
        message = "Network role didn't need resetting." if single else "No network roles needed resetting."
    console.print(f"[green]Success: {message}[/green]")


# Capabilities

@cli.group()
def cap():
    """Manage network role capabilities"""


@cap.command('list')
@click.argument('role_key')
@click.option('--format', 'output_format', type=click.Choice(['list', 'table']), default='list', help='Output format')
@click.pass_context
@handle_errors
def list_caps(ctx, role_key, output_format):
    """List the capabilities of a network role"""
    role = get_role_or_fail(get_app(ctx), role_key)

    if output_format == 'list':
        for name in role.capabilities:
            click.echo(name)
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Granted")
    for name, grant in role.capabilities.items():
        table.add_row(name, "✅" if grant else "❌")
    console.print(table)


@cap.command('add')
@click.argument('role_key')
@click.argument('caps', nargs=-1, required=True)
@click.pass_context
@handle_errors
def add_caps(ctx, role_key, caps):
    """Add capabilities to a network role"""
    app = get_app(ctx)
    persistence_check(app)
    role = get_role_or_fail(app, role_key)

    count = 0
    for name in caps:
        if role.has_cap(name):
            continue
        if app.registry.add_cap(role_key, name):
            count += 1

    console.print(f"[green]Success: Added {count} {plural(count, 'capability', 'capabilities')} to '{role_key}' network role.[/green]")


@cap.command('remove')
@click.argument('role_key')
@click.argument('caps', nargs=-1, required=True)
@click.pass_context
@handle_errors
def remove_caps(ctx, role_key, caps):
    """Remove capabilities from a network role"""
    app = get_app(ctx)
    persistence_check(app)
    role = get_role_or_fail(app, role_key)

    count = 0
    for name in caps:
        if not role.has_cap(name):
            continue
        if app.registry.remove_cap(role_key, name):
            count += 1

    console.print(f"[green]Success: Removed {count} {plural(count, 'capability', 'capabilities')} from '{role_key}' network role.[/green]")


# Migration

@cli.command()
@click.option('--until-done', is_flag=True, help='Keep running batches until the migration is done')
@click.pass_context
@handle_errors
def migrate(ctx, until_done):
    """Set up network roles and migrate existing users"""
    app = get_app(ctx)
    durability_check(app)

    console.print(Panel.fit("🔄 Network Roles Migration", style="bold blue"))

    if app.migration.maybe_setup_tenant():
        console.print(f"[green]✅ Network {app.context.network_id} set up[/green]")

    batches = 0
    processed = 0
    while True:
        result = app.migration.maybe_migrate_users()
        batches += 1
        processed += result.processed
        if not until_done or result.status == MigrationStatus.DONE:
            break

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Batches", style="cyan")
    table.add_column("Users", style="yellow")
    table.add_column("Status", style="green")
    table.add_row(str(batches), str(processed), app.migration.status().value)
    console.print(table)


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
