"""Field schema commands."""

import click
from ledgerport.domain.field_mapper import detect_field
from ledgerport.domain.field_schema import FIELD_SCHEMA


@click.command("fields")
def list_fields():
    """List the transaction fields columns can be mapped to."""
    click.echo("\nFields (in detection order):")
    click.echo("-" * 40)
    for entry in FIELD_SCHEMA:
        flags = []
        if entry.required:
            flags.append("required")
        if entry.monetary:
            flags.append("monetary")
        suffix = f" ({', '.join(flags)})" if flags else ""
        click.echo(f"  {entry.name}{suffix}")


@click.command("detect")
@click.argument("headers", nargs=-1, required=True)
def detect_headers(headers: tuple[str, ...]):
    """Show the field each header text would be mapped to.

    Examples:
        ledgerport detect "Booking Date" "Amount" "Memo"
    """
    for header in headers:
        click.echo(f"'{header}' -> {detect_field(header)}")


def register_commands(cli):
    """Register field commands with main CLI."""
    cli.add_command(list_fields)
    cli.add_command(detect_headers)
