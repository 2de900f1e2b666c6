"""CLI commands for account management."""

import os

import click

from gwcli.sdk import accounts as sdk_accounts
from gwcli.sdk.auth import DEFAULT_SCOPES, authorize_account
from .output import is_json, write_json


@click.group()
def accounts():
    """Manage the Google accounts gwcli can act as."""
    pass


@accounts.command("list")
def list_cmd():
    """List all available accounts."""
    account_list = sdk_accounts.list_accounts()

    if is_json():
        write_json({"accounts": account_list})
        return

    for a in account_list:
        marker = "*" if a["is_active"] else " "
        kind = "adc" if a["is_adc"] else "oauth"
        email = a.get("email") or "-"
        click.echo(f"{marker} {a['name']}\t{kind}\t{email}")

    if not any(a["is_active"] for a in account_list):
        click.echo("\nNo active account. Run 'gwcli accounts use <name>'.", err=True)


@accounts.command("add")
@click.argument("name")
@click.option("--client-secrets", required=True,
              type=click.Path(exists=True, dir_okay=False),
              help="OAuth desktop client_secrets.json from Google Cloud Console.")
@click.option("--scope", "scopes", multiple=True,
              help="Scope alias or URL to request (repeatable). "
                   f"Default: {', '.join(DEFAULT_SCOPES)}.")
@click.option("--activate/--no-activate", default=True,
              help="Make the new account the active one (default: yes).")
def add_cmd(name, client_secrets, scopes, activate):
    """Authorize a Google account in the browser and save it as NAME."""
    if not sdk_accounts.is_valid_account_name(name) or name == sdk_accounts.ADC_ACCOUNT_NAME:
        raise click.UsageError(f"Invalid account name: {name}")

    try:
        result = authorize_account(name, os.path.expanduser(client_secrets),
                                   scopes or DEFAULT_SCOPES)
    except Exception as e:
        raise click.ClickException(f"Authorization failed: {e}")

    if activate:
        sdk_accounts.set_active_account(name)

    if is_json():
        write_json(result)
    else:
        click.echo(f"Saved account '{name}'" + (f" ({result['email']})" if result["email"] else ""))


@accounts.command("use")
@click.argument("name")
def use_cmd(name):
    """Make NAME the active account."""
    if not sdk_accounts.set_active_account(name):
        raise click.ClickException(f"Account not found: {name}")
    click.echo(f"Active account: {name}")


@accounts.command("remove")
@click.argument("name")
@click.confirmation_option(prompt="Delete this account's stored token?")
def remove_cmd(name):
    """Delete the stored token for NAME."""
    if not sdk_accounts.delete_account(name):
        raise click.ClickException(f"Account not found or not removable: {name}")
    click.echo(f"Removed account '{name}'")
