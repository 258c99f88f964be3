"""File import command."""

import click
from ledgerport.cli.import_options import import_file_options, run_import
from ledgerport.domain.field_schema import UNMAPPED


@click.command("import")
@import_file_options
@click.option("--show-invalid", is_flag=True, help="List the invalid rows with their errors")
@click.pass_context
def import_file(
    ctx,
    file: str,
    header_row: int,
    no_header: bool,
    data_row: int | None,
    map_options: tuple[str, ...],
    format_name: str | None,
    save_format: str | None,
    show_invalid: bool,
):
    """Import transactions from an xlsx, xls or xml export.

    Columns are mapped from their headers and content unless a saved format
    applies. Use --map to correct individual columns.

    Examples:
        ledgerport import statement.xlsx
        ledgerport import export.xml --map 3=Expenses --save-format "My Bank"
    """
    result = run_import(
        ctx,
        file=file,
        header_row=header_row,
        no_header=no_header,
        data_row=data_row,
        map_options=map_options,
        format_name=format_name,
        save_format=save_format,
    )

    click.echo("\nColumn mapping:")
    for index, field_name in enumerate(result.mapping):
        header = result.headers[index] if index < len(result.headers) else None
        label = f"'{header}'" if header else "(no header)"
        target = field_name if field_name != UNMAPPED else "(unmapped)"
        click.echo(f"  {index + 1:>3}. {label} -> {target}")

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {len(result)} transactions")
    click.echo(f"  Valid: {len(result.valid_transactions)}")
    click.echo(f"  Invalid: {len(result.invalid)}")
    if result.format_name:
        click.echo(f"  Format: {result.format_name}")
    click.echo(f"  Signature: {result.signature}")

    issues = [
        (tx.source_row, issue)
        for tx, res in zip(result.transactions, result.results)
        for issue in res.issues
    ]
    if issues:
        click.echo(f"  Coerced values: {len(issues)}")
        for row, issue in issues:
            click.echo(f"    Row {row}: {issue}", err=True)
    if result.warnings:
        click.echo(f"  Warnings: {len(result.warnings)}")
        for warning in result.warnings:
            click.echo(f"    {warning}", err=True)

    if show_invalid and result.invalid:
        click.echo("\nInvalid rows:")
        for tx, res in result.invalid:
            click.echo(f"  Row {tx.source_row}: {'; '.join(res.errors)}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_file)
