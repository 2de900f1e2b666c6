"""Write markdown into Google Docs.

Two public entry points, both returning the document ID:

- ``write_markdown`` replaces the document body with the converted markdown.
- ``append_markdown`` adds the converted markdown at the end of the body.

Text is inserted in one batchUpdate, then styles are applied in ordered
batches of at most ``MAX_BATCH_REQUESTS``. If a style batch fails the
document keeps its text and the batches already applied; the failure is
raised as ``StyleBatchError``.

Example usage:
    from gwcli.sdk.docs import GoogleDocsStore, write_markdown

    write_markdown(GoogleDocsStore(), doc_id, "# Notes\\n\\n- one\\n- two")
"""

import logging

from .edits import (
    MAX_BATCH_REQUESTS, assemble, build_insert_request, build_delete_request,
    build_style_requests, chunk_requests,
)
from .markdown import parse_markdown, utf16_len
from .store import DocumentStore, end_index
from .validators import validate_doc_id
from ..exceptions import StyleBatchError, TransportError

logger = logging.getLogger(__name__)

# Index of the first character of a document body
BODY_START_INDEX = 1


def apply_markdown(store: DocumentStore, doc_id: str, markdown: str, start_index: int,
                   batch_size: int = MAX_BATCH_REQUESTS, separator: str = "") -> int:
    """
    Insert converted markdown at start_index and apply its styles.

    Args:
        store: Document store to write through
        doc_id: The Google Doc ID
        markdown: Markdown text
        start_index: Document index to insert at
        batch_size: Maximum requests per style batchUpdate
        separator: Text inserted ahead of the converted markdown, unstyled

    Returns:
        Number of style requests applied

    Raises:
        StyleBatchError: If a style batch fails in transport after the text was inserted.
            Other errors, such as DocumentNotFoundError, propagate unchanged.
    """
    segments = parse_markdown(markdown)
    text, positions = assemble(segments, start_index + utf16_len(separator))
    style_requests = build_style_requests(segments, positions)
    batches = chunk_requests(style_requests, batch_size)

    logger.debug(
        f"Writing {len(segments)} paragraph(s) to {doc_id} at index {start_index}: "
        f"{len(style_requests)} style request(s) in {len(batches)} batch(es)"
    )

    store.batch_update(doc_id, [build_insert_request(separator + text, start_index)])

    for number, batch in enumerate(batches, start=1):
        try:
            store.batch_update(doc_id, batch)
        except TransportError as e:
            logger.error(f"Style batch {number}/{len(batches)} failed for {doc_id}: {e}")
            raise StyleBatchError(number, len(batches), e) from e

    return len(style_requests)


def clear_document(store: DocumentStore, doc_id: str) -> str:
    """
    Delete all body content, keeping the mandatory final newline.

    An already empty document is left alone.
    """
    doc_id = validate_doc_id(doc_id)
    end = end_index(store.get(doc_id))
    if end <= BODY_START_INDEX + 1:
        logger.debug(f"Document {doc_id} is already empty")
        return doc_id

    store.batch_update(doc_id, [build_delete_request(BODY_START_INDEX, end - 1)])
    return doc_id


def write_markdown(store: DocumentStore, doc_id: str, markdown: str,
                   batch_size: int = MAX_BATCH_REQUESTS) -> str:
    """Replace the body of a document with converted markdown."""
    doc_id = clear_document(store, doc_id)
    apply_markdown(store, doc_id, markdown, BODY_START_INDEX, batch_size)
    return doc_id


def append_markdown(store: DocumentStore, doc_id: str, markdown: str,
                    batch_size: int = MAX_BATCH_REQUESTS) -> str:
    """
    Append converted markdown to the end of a document.

    The text goes in just before the document's final newline, the last
    position the API accepts an insert at. A non-empty document gets a
    newline first so the markdown starts a new paragraph instead of
    running on from the last line. The separator and any plain paragraphs
    that follow take the paragraph style of the document's last paragraph,
    since only headings and list items get explicit styles.
    """
    doc_id = validate_doc_id(doc_id)
    end = end_index(store.get(doc_id))
    if end <= BODY_START_INDEX + 1:
        apply_markdown(store, doc_id, markdown, BODY_START_INDEX, batch_size)
    else:
        apply_markdown(store, doc_id, markdown, end - 1, batch_size, separator="\n")
    return doc_id
