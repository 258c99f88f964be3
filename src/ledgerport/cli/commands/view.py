"""Windowed transaction viewing command."""

import click
from ledgerport.cli.import_options import import_file_options, run_import
from ledgerport.utils.windowing import (
    DEFAULT_OVERSCAN,
    compute_window,
    get_top_offset,
    total_height,
    visible_slice,
)


def _money(value) -> str:
    return f"{value:,.2f}" if value else ""


@click.command("view")
@import_file_options
@click.option("--height", type=float, default=600, show_default=True, help="Viewport height")
@click.option("--row-height", type=float, default=30, show_default=True, help="Height of one row")
@click.option("--scroll", type=float, default=0, show_default=True, help="Scroll offset from the top")
@click.option(
    "--overscan",
    type=click.IntRange(min=0),
    default=DEFAULT_OVERSCAN,
    show_default=True,
    help="Rows rendered beyond each edge of the viewport",
)
@click.pass_context
def view_transactions(
    ctx,
    file: str,
    header_row: int,
    no_header: bool,
    data_row: int | None,
    map_options: tuple[str, ...],
    format_name: str | None,
    save_format: str | None,
    height: float,
    row_height: float,
    scroll: float,
    overscan: int,
):
    """View the slice of an imported file visible at a scroll position.

    Only the rows a list renderer would materialize for the given viewport
    are printed.
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

    window = compute_window(len(result), height, row_height, scroll, overscan)
    rows = visible_slice(list(zip(result.transactions, result.results)), window)

    if not rows:
        click.echo("No transactions in view.")
        return

    click.echo(
        f"\nShowing rows {window.start + 1}-{window.end} of {len(result)} "
        f"(offset {get_top_offset(window.start, row_height):g} of "
        f"{total_height(len(result), row_height):g}):"
    )
    click.echo("-" * 100)
    click.echo(
        f"{'Row':<6} {'Date':<12} {'Income':>12} {'Expenses':>12} {'Balance':>12}  {'Description':<40}"
    )
    click.echo("-" * 100)
    for tx, res in rows:
        marker = "" if res.valid else " !"
        description = (tx.description or "")[:40]
        click.echo(
            f"{str(tx.source_row) + marker:<6} {tx.date or '':<12} {_money(tx.income):>12} "
            f"{_money(tx.expenses):>12} {_money(tx.balance):>12}  {description:<40}"
        )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_transactions)
