"""Google Docs SDK module.

Provides reading, clearing and markdown writing for Google Docs. Every
operation takes a ``DocumentStore``; ``GoogleDocsStore`` is the API-backed one.
"""

from .service import get_docs_service
from .store import DocumentStore, GoogleDocsStore, end_index
from .markdown import Segment, EmphasisRange, parse_markdown, utf16_len
from .edits import MAX_BATCH_REQUESTS
from .read import get_document_info, get_document_text, extract_text_from_document, docs_web_link
from .write import write_markdown, append_markdown, clear_document, apply_markdown

__all__ = [
    "get_docs_service",
    "DocumentStore",
    "GoogleDocsStore",
    "end_index",
    "Segment",
    "EmphasisRange",
    "parse_markdown",
    "utf16_len",
    "MAX_BATCH_REQUESTS",
    "get_document_info",
    "get_document_text",
    "extract_text_from_document",
    "docs_web_link",
    "write_markdown",
    "append_markdown",
    "clear_document",
    "apply_markdown",
]
