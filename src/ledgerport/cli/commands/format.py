"""Saved import format management commands."""

import click
from ledgerport.domain.import_format import ImportFormatService


def _row_label(index) -> str:
    return "none" if index is None else str(index + 1)


@click.group()
def format_group():
    """Manage saved import formats."""
    pass


@format_group.command("list")
@click.pass_context
def list_formats(ctx):
    """List saved import formats."""
    service = ImportFormatService(ctx.obj["db"])

    formats = service.list_formats()
    if not formats:
        click.echo("No import formats found.")
        return

    click.echo("\nImport Formats:")
    click.echo("-" * 60)
    for fmt in formats:
        mappings = service.get_mappings(fmt.id)
        click.echo(f"{fmt.name} (ID: {fmt.id}, {fmt.extension}, {fmt.signature})")
        for m in mappings:
            header = f"'{m.header_text}'" if m.header_text else "(no header)"
            click.echo(f"    column {m.column_index + 1} {header} -> {m.field_name}")


@format_group.command("show")
@click.argument("format_name")
@click.pass_context
def show_format(ctx, format_name: str):
    """Show details of an import format."""
    service = ImportFormatService(ctx.obj["db"])

    fmt = service.get_format_by_name(format_name)
    if fmt is None:
        click.echo(f"Error: Import format '{format_name}' not found", err=True)
        ctx.exit(1)

    mappings = service.get_mappings(fmt.id)

    click.echo(f"\nFormat: {fmt.name}")
    click.echo(f"ID: {fmt.id}")
    click.echo(f"Extension: {fmt.extension}")
    click.echo(f"Signature: {fmt.signature}")
    click.echo(f"Header row: {_row_label(fmt.header_row)}")
    if fmt.data_row is not None:
        click.echo(f"Data row: {_row_label(fmt.data_row)}")
    click.echo(f"Created: {fmt.created_at:%Y-%m-%d %H:%M}")

    click.echo("\nColumn Mappings:")
    if not mappings:
        click.echo("  (none)")
    else:
        for m in mappings:
            header = f"'{m.header_text}'" if m.header_text else "(no header)"
            click.echo(f"  column {m.column_index + 1} {header} -> {m.field_name}")


@format_group.command("delete")
@click.argument("format_name")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_format(ctx, format_name: str, yes: bool) -> None:
    """Delete an import format.

    Examples:
        ledgerport format delete "My Bank"
    """
    service = ImportFormatService(ctx.obj["db"])

    fmt = service.get_format_by_name(format_name)
    if fmt is None:
        click.echo(f"Error: Import format '{format_name}' not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete format '{format_name}' (ID: {fmt.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_format(fmt.id)
        click.echo(f"Deleted format '{format_name}'")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register format commands with main CLI."""
    cli.add_command(format_group, name="format")
