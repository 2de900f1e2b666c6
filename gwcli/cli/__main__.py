"""gwcli - Command-line interface for Google Workspace (Gmail, Docs, Drive)."""

import logging
import os

import click
from dotenv import load_dotenv

from gwcli import __version__
from .accounts_commands import accounts as accounts_module
from .docs_commands import docs as docs_module
from .mail_commands import mail as mail_module


# Configure logging at the application level. Logs go to stderr so that
# stdout carries only command output.
if not logging.root.handlers:
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.WARNING),
                        format='%(asctime)s - %(levelname)s - %(message)s')
# Suppress noisy INFO logs from googleapiclient and google_auth_oauthlib
logging.getLogger('googleapiclient.discovery').setLevel(logging.WARNING)
logging.getLogger('googleapiclient.discovery_cache').setLevel(logging.WARNING)
logging.getLogger('google_auth_oauthlib.flow').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@click.group()
@click.version_option(__version__, prog_name="gwcli")
@click.option('--account', '-a', default=None,
              help='Account to act as (default: $GWCLI_ACCOUNT, then the active account).')
@click.option('--json', 'as_json', is_flag=True, help='Print JSON instead of text.')
@click.pass_context
def gwcli(ctx, account, as_json):
    """Google Workspace command-line client.

    Read and write Google Docs (including markdown), export and copy them
    through Drive, and read Gmail messages.
    """
    ctx.ensure_object(dict)
    ctx.obj["account"] = account
    ctx.obj["json"] = as_json


gwcli.add_command(accounts_module, name='accounts')
gwcli.add_command(docs_module, name='docs')
gwcli.add_command(mail_module, name='mail')


def main():
    """Entry point for the CLI."""
    load_dotenv()
    gwcli()


if __name__ == "__main__":
    main()
