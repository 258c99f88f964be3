"""Main CLI entry point."""

import click
from ledgerport.database.factories import create_sqlite_database
from ledgerport.logging_setup import configure_logging, parse_level

# Import and register all commands at module level
from ledgerport.cli.commands import (
    fields,
    format,
    import_cmd,
    view,
)


def _validate_log_level(ctx, param, value):
    if value is None:
        return None
    try:
        parse_level(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    return value


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to the saved formats database (overrides LEDGERPORT_DB_PATH)",
    envvar="LEDGERPORT_DB_PATH",
)
@click.option(
    "--log-level",
    help="Log level, e.g. DEBUG or INFO (overrides LEDGERPORT_LOG_LEVEL)",
    envvar="LEDGERPORT_LOG_LEVEL",
    callback=_validate_log_level,
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Ledgerport - import bank exports as transactions.

    Reads xlsx, xls and xml exports, maps their columns onto transaction
    fields and validates every row. Column mappings can be saved as named
    formats and are reapplied to files with the same structure.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
fields.register_commands(cli)
format.register_commands(cli)
import_cmd.register_commands(cli)
view.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
