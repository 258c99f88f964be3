"""CLI helpers shared by the commands that import a file."""

from __future__ import annotations

import click

from ledgerport.domain.entities import ImportResult
from ledgerport.domain.errors import DomainError
from ledgerport.domain.importer import ImportService
from ledgerport.cli.error_handling import handle_domain_error


def import_file_options(func):
    """Attach the file argument and row/mapping options to a command."""
    options = [
        click.argument("file", type=click.Path(dir_okay=False)),
        click.option(
            "--header-row",
            type=click.IntRange(min=1),
            default=1,
            show_default=True,
            help="Row number holding the column headers",
        ),
        click.option("--no-header", is_flag=True, help="The file has no header row"),
        click.option(
            "--data-row",
            type=click.IntRange(min=1),
            help="Row number of the first transaction (default: the row after the header)",
        ),
        click.option(
            "--map",
            "map_options",
            multiple=True,
            metavar="COLUMN=FIELD",
            help="Assign a field to a column, by column number or header text. Repeatable.",
        ),
        click.option("--format", "format_name", help="Apply a saved import format"),
        click.option("--save-format", help="Save the mapping used under this name"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def parse_map_options(ctx: click.Context, values: tuple[str, ...]) -> dict[int | str, str]:
    """Turn ``COLUMN=FIELD`` options into mapping overrides, or exit.

    A numeric COLUMN is a 1-based column number; anything else is matched
    against the header text.
    """
    overrides: dict[int | str, str] = {}
    for value in values:
        column, sep, field_name = value.partition("=")
        column = column.strip()
        if not sep or not column:
            click.echo(f"Error: Invalid --map value '{value}', expected COLUMN=FIELD", err=True)
            ctx.exit(1)
        if column.isdigit():
            if int(column) < 1:
                click.echo(f"Error: Column numbers start at 1, got {column}", err=True)
                ctx.exit(1)
            overrides[int(column) - 1] = field_name.strip()
        else:
            overrides[column] = field_name.strip()
    return overrides


def run_import(
    ctx: click.Context,
    *,
    file: str,
    header_row: int,
    no_header: bool,
    data_row: int | None,
    map_options: tuple[str, ...],
    format_name: str | None,
    save_format: str | None,
) -> ImportResult:
    """Import ``file`` with the CLI options, or render the error and exit."""
    service = ImportService(ctx.obj["db"])
    overrides = parse_map_options(ctx, map_options)
    try:
        return service.import_file(
            file,
            header_row=None if no_header else header_row - 1,
            data_row=data_row - 1 if data_row is not None else None,
            format_name=format_name,
            overrides=overrides,
            save_as=save_format,
        )
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
