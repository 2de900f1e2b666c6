"""CLI commands for Gmail."""

import logging

import click

from gwcli.sdk import mail as sdk_mail
from gwcli.sdk.exceptions import UsageError
from .decorators import require_account
from .output import is_json, write_json, print_kv

logger = logging.getLogger(__name__)


@click.group()
def mail():
    """Operations related to Gmail."""
    pass


@mail.command('search')
@click.argument('query')
@click.option('--page-token', default=None,
              help="Token for pagination (from a previous search's nextPageToken).")
@click.option('--max-results', type=int, default=25,
              help='Maximum number of messages to return (default 25).')
@require_account('mail-read')
def search_command(query, page_token, max_results):
    """Search for emails using Gmail query syntax."""
    account = click.get_current_context().obj.get("account")
    try:
        messages, metadata = sdk_mail.search_messages(
            query, page_token=page_token, max_results=max_results, account=account
        )
    except Exception as e:
        logger.debug(f"Mail search failed for query '{query}'", exc_info=True)
        raise click.ClickException(str(e))

    logger.info(f"Found {len(messages)} messages (estimated total: {metadata['resultSizeEstimate']})")
    if is_json():
        write_json({"messages": messages, "nextPageToken": metadata.get("nextPageToken")})
        return

    for msg in messages:
        click.echo("\t".join([msg["id"], msg["date"], msg["from"], msg["subject"]]))
    if metadata.get("nextPageToken"):
        click.echo(f"# next page: --page-token {metadata['nextPageToken']}", err=True)


@mail.command('get')
@click.argument('message_id')
@click.option('--format', 'message_format', default='full',
              help='Message format: full|metadata|raw.')
@click.option('--headers', default='',
              help='Metadata headers (comma-separated; only for --format=metadata).')
@require_account('mail-read')
def get_command(message_id, message_format, headers):
    """Get a message (full|metadata|raw)."""
    account = click.get_current_context().obj.get("account")
    message_format = (message_format or "").strip() or "full"
    try:
        msg = sdk_mail.get_message(
            message_id, format=message_format,
            headers=sdk_mail.split_csv(headers), account=account,
        )
    except UsageError as e:
        raise click.UsageError(str(e))
    except Exception as e:
        logger.debug(f"Mail get failed for ID {message_id}", exc_info=True)
        raise click.ClickException(str(e))

    if is_json():
        write_json({"message": msg})
        return

    print_kv("id", msg.get("id", ""))
    print_kv("thread_id", msg.get("threadId", ""))
    print_kv("label_ids", ",".join(msg.get("labelIds", [])))

    if message_format == "raw":
        raw = msg.get("raw", "")
        if not raw:
            click.echo("Empty raw message", err=True)
            return
        click.echo("")
        click.echo(sdk_mail.decode_raw(raw))
        return

    payload = msg.get("payload")
    for name in ("From", "To", "Subject", "Date"):
        print_kv(name.lower(), sdk_mail.header_value(payload, name))

    if message_format == "full":
        body = sdk_mail.best_body_text(payload)
        if body:
            click.echo("")
            click.echo(body)
