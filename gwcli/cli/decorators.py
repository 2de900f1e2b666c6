"""CLI decorators for account resolution and scope checking."""

import logging
import sys
from functools import wraps

import click

from gwcli.sdk.accounts import resolve_account, load_account_metadata
from gwcli.sdk.auth import resolve_scope_alias
from gwcli.sdk.exceptions import AccountError

logger = logging.getLogger(__name__)

# Having the key scope means having the value scope too
SCOPE_IMPLICATIONS = {
    "https://www.googleapis.com/auth/gmail.modify": [
        "https://www.googleapis.com/auth/gmail.readonly",
    ],
    "https://www.googleapis.com/auth/documents": [
        "https://www.googleapis.com/auth/documents.readonly",
    ],
    "https://www.googleapis.com/auth/drive": [
        "https://www.googleapis.com/auth/drive.readonly",
    ],
}


def get_effective_scopes(granted_scopes: list) -> set:
    """
    Get effective scopes including implied ones.

    For example, if gmail.modify is granted, gmail.readonly is implied.
    """
    effective = set(granted_scopes)
    for scope in granted_scopes:
        effective.update(SCOPE_IMPLICATIONS.get(scope, []))
    return effective


def show_account_guidance():
    """Tell the user how to get an account selected."""
    click.echo("\nTo fix:", err=True)
    click.echo("  gwcli accounts add <name> --client-secrets <path>", err=True)
    click.echo("  gwcli accounts use <name>      # or pass --account <name>", err=True)


def require_account(*required_aliases):
    """
    Decorator that resolves the account a command runs as.

    The resolved name is stored in ``ctx.obj["account"]``. When the account
    recorded its granted scopes, the command's required scopes (aliases like
    'docs' or 'mail-read') are checked against them; write scopes imply the
    matching read scopes. ADC accounts record no scopes and are not checked.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            ctx = click.get_current_context()
            ctx.ensure_object(dict)
            try:
                account = resolve_account(ctx.obj.get("account"))
            except AccountError as e:
                click.secho(f"Error: {e}", fg="red", err=True)
                show_account_guidance()
                sys.exit(1)

            granted = load_account_metadata(account).get("scopes", [])
            if granted and required_aliases:
                required = {resolve_scope_alias(alias) for alias in required_aliases}
                missing = required - get_effective_scopes(granted)
                if missing:
                    click.secho("Error: Missing required scopes for this command.", fg="red", err=True)
                    click.echo(f"  Required: {', '.join(required_aliases)}", err=True)
                    click.echo(f"  Missing:  {', '.join(sorted(missing))}", err=True)
                    click.echo("\nTo fix:", err=True)
                    click.echo(f"  gwcli accounts add {account} --client-secrets <path>", err=True)
                    sys.exit(1)

            logger.debug(f"Running as account '{account}'")
            ctx.obj["account"] = account
            return f(*args, **kwargs)
        return decorated_function
    return decorator
