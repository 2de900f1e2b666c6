"""CLI commands for Google Docs operations."""

import logging

import click

from gwcli.sdk import docs as sdk_docs
from gwcli.sdk import drive as sdk_drive
from gwcli.sdk.docs.read import DEFAULT_MAX_BYTES
from gwcli.sdk.exceptions import UsageError
from .decorators import require_account
from .output import is_json, write_json, print_kv

logger = logging.getLogger(__name__)


def _store() -> sdk_docs.GoogleDocsStore:
    ctx = click.get_current_context()
    return sdk_docs.GoogleDocsStore(account=ctx.obj.get("account"))


def _drive_service():
    return sdk_drive.get_drive_service(click.get_current_context().obj.get("account"))


def _fail(error: Exception):
    """Convert an SDK error into the matching click exception."""
    if isinstance(error, UsageError):
        raise click.UsageError(str(error))
    logger.debug("Command failed", exc_info=True)
    raise click.ClickException(str(error))


def _read_input(path):
    """Read markdown from a file, or from stdin when no file is given."""
    if path:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    return click.get_text_stream("stdin").read()


def _print_file(file_info: dict):
    print_kv("id", file_info.get("id"))
    print_kv("name", file_info.get("name"))
    print_kv("mime", file_info.get("mimeType"))
    if file_info.get("webViewLink"):
        print_kv("link", file_info["webViewLink"])


@click.group()
def docs():
    """Commands for interacting with Google Docs."""
    pass


@docs.command('info')
@click.argument('doc_id')
@require_account('docs-read')
def info_doc(doc_id):
    """Show a Google Doc's metadata."""
    try:
        result = sdk_docs.get_document_info(_store(), doc_id)
    except Exception as e:
        _fail(e)

    if is_json():
        write_json(result)
        return

    _print_file(result["file"])
    revision = result["document"].get("revisionId")
    if revision:
        print_kv("revision", revision)


@docs.command('create')
@click.argument('title')
@click.option('--parent', default=None, help='Destination folder ID.')
@require_account('drive')
def create_doc(title, parent):
    """Create a new, empty Google Doc."""
    try:
        created = sdk_drive.create_document(
            title, parent_id=parent,
            service=_drive_service(),
        )
    except Exception as e:
        _fail(e)

    if is_json():
        write_json({"file": created})
    else:
        _print_file(created)


@docs.command('copy')
@click.argument('doc_id')
@click.argument('title')
@click.option('--parent', default=None, help='Destination folder ID.')
@require_account('drive')
def copy_doc(doc_id, title, parent):
    """Copy a Google Doc under a new title."""
    try:
        copied = sdk_drive.copy_file(
            doc_id, title, parent_id=parent,
            service=_drive_service(),
        )
    except Exception as e:
        _fail(e)

    if is_json():
        write_json({"file": copied})
    else:
        _print_file(copied)


@docs.command('export')
@click.argument('doc_id')
@click.option('--out', '-o', 'output_path', default=None, type=click.Path(dir_okay=False),
              help="Output file (default: '<title>.<format>' in the current directory).")
@click.option('--format', 'export_format', type=click.Choice(list(sdk_drive.EXPORT_FORMATS)),
              default='pdf', help='Export format (default: pdf).')
@require_account('drive-read')
def export_doc(doc_id, output_path, export_format):
    """Export a Google Doc as pdf, docx or txt."""
    try:
        result = sdk_drive.export_file(
            doc_id, output_path=output_path, export_format=export_format,
            service=_drive_service(),
        )
    except Exception as e:
        _fail(e)

    if is_json():
        write_json(result)
    else:
        print_kv("path", result["file_path"])
        print_kv("size", result["size"])
        print_kv("mime", result["mime_type"])


@docs.command('cat')
@click.argument('doc_id')
@click.option('--max-bytes', type=int, default=DEFAULT_MAX_BYTES, show_default=True,
              help='Max bytes to print (0 = unlimited).')
@require_account('docs-read')
def cat_doc(doc_id, max_bytes):
    """Print a Google Doc as plain text."""
    try:
        text = sdk_docs.get_document_text(_store(), doc_id, max_bytes=max_bytes)
    except Exception as e:
        _fail(e)

    if is_json():
        write_json({"text": text})
    else:
        click.echo(text, nl=False)


@docs.command('write')
@click.argument('doc_id')
@click.option('--file', '-f', 'file_path', default=None,
              type=click.Path(exists=True, dir_okay=False),
              help='Markdown file to write (reads stdin if omitted).')
@require_account('docs')
def write_doc(doc_id, file_path):
    """Replace a Google Doc's content with markdown."""
    try:
        markdown = _read_input(file_path)
        doc_id = sdk_docs.write_markdown(_store(), doc_id, markdown)
    except Exception as e:
        _fail(e)

    if is_json():
        write_json({"documentId": doc_id})
    else:
        click.echo(f"wrote document {doc_id}")


@docs.command('append')
@click.argument('doc_id')
@click.option('--file', '-f', 'file_path', default=None,
              type=click.Path(exists=True, dir_okay=False),
              help='Markdown file to append (reads stdin if omitted).')
@require_account('docs')
def append_doc(doc_id, file_path):
    """Append markdown to the end of a Google Doc."""
    try:
        markdown = _read_input(file_path)
        doc_id = sdk_docs.append_markdown(_store(), doc_id, markdown)
    except Exception as e:
        _fail(e)

    if is_json():
        write_json({"documentId": doc_id})
    else:
        click.echo(f"appended to document {doc_id}")


@docs.command('clear')
@click.argument('doc_id')
@require_account('docs')
def clear_doc(doc_id):
    """Delete all content from a Google Doc."""
    try:
        doc_id = sdk_docs.clear_document(_store(), doc_id)
    except Exception as e:
        _fail(e)

    if is_json():
        write_json({"documentId": doc_id})
    else:
        click.echo(f"cleared document {doc_id}")
