"""CLI error handling helpers."""

import click

from ledgerport.domain.errors import DomainError, ParseError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Parse failures are prefixed with their stage label so the user can tell
    an unsupported file from a damaged one or an empty one.
    """
    if isinstance(error, ParseError):
        click.echo(f"Error: {error.label}: {error}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
