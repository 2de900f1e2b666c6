"""Google Docs reading operations."""

import logging
from typing import Optional

from .store import DocumentStore
from .validators import validate_doc_id

logger = logging.getLogger(__name__)

GOOGLE_DOC_MIME_TYPE = "application/vnd.google-apps.document"

# Default cap for 'docs cat' output, in UTF-8 bytes
DEFAULT_MAX_BYTES = 2_000_000


def docs_web_link(doc_id: str) -> str:
    """Return the browser URL for a document, or "" for an empty ID."""
    doc_id = (doc_id or "").strip()
    if not doc_id:
        return ""
    return f"https://docs.google.com/document/d/{doc_id}/edit"


def get_document_info(store: DocumentStore, doc_id: str) -> dict:
    """
    Get a document's ID, title and revision.

    Returns:
        Dict with:
            - file: id, name, mimeType, webViewLink
            - document: the raw (field-restricted) document resource
    """
    doc_id = validate_doc_id(doc_id)
    doc = store.get(doc_id, fields="documentId,title,revisionId")

    file_info = {
        "id": doc.get("documentId"),
        "name": doc.get("title"),
        "mimeType": GOOGLE_DOC_MIME_TYPE,
    }
    link = docs_web_link(doc.get("documentId"))
    if link:
        file_info["webViewLink"] = link

    return {"file": file_info, "document": doc}


def get_document_text(store: DocumentStore, doc_id: str,
                      max_bytes: Optional[int] = DEFAULT_MAX_BYTES) -> str:
    """
    Get the plain text content of a document.

    Args:
        store: Document store to read from
        doc_id: The Google Doc ID
        max_bytes: Truncate the text to this many UTF-8 bytes (0 or None = unlimited)
    """
    doc_id = validate_doc_id(doc_id)
    return extract_text_from_document(store.get(doc_id), max_bytes)


class _LimitedText:
    """Accumulates text up to a byte budget; append() returns False once full."""

    def __init__(self, max_bytes: Optional[int]):
        self.max_bytes = max_bytes or 0
        self.parts = []
        self.size = 0

    def append(self, text: str) -> bool:
        if self.max_bytes <= 0:
            self.parts.append(text)
            return True

        remaining = self.max_bytes - self.size
        if remaining <= 0:
            return False

        encoded = text.encode("utf-8")
        if len(encoded) > remaining:
            # Never split a multi-byte character
            self.parts.append(encoded[:remaining].decode("utf-8", errors="ignore"))
            self.size = self.max_bytes
            return False

        self.parts.append(text)
        self.size += len(encoded)
        return True

    def text(self) -> str:
        return "".join(self.parts)


def extract_text_from_document(doc: dict, max_bytes: Optional[int] = None) -> str:
    """
    Extract plain text from a document structure.

    Paragraph text is copied as is, table cells are separated by tabs and
    rows by newlines, and table-of-contents entries are included.
    """
    if not doc or not doc.get("body"):
        return ""

    buf = _LimitedText(max_bytes)
    for element in doc["body"].get("content", []):
        if not _append_element_text(buf, element):
            break
    return buf.text()


def _append_element_text(buf: _LimitedText, element: dict) -> bool:
    if "paragraph" in element:
        for part in element["paragraph"].get("elements", []):
            text_run = part.get("textRun")
            if text_run and not buf.append(text_run.get("content", "")):
                return False

    elif "table" in element:
        for row_idx, row in enumerate(element["table"].get("tableRows", [])):
            if row_idx > 0 and not buf.append("\n"):
                return False
            for cell_idx, cell in enumerate(row.get("tableCells", [])):
                if cell_idx > 0 and not buf.append("\t"):
                    return False
                for content in cell.get("content", []):
                    if not _append_element_text(buf, content):
                        return False

    elif "tableOfContents" in element:
        for content in element["tableOfContents"].get("content", []):
            if not _append_element_text(buf, content):
                return False

    return True
