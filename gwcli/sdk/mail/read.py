"""Gmail message read operations."""

import base64
import logging
from typing import Any, Dict, List, Optional

from googleapiclient.errors import HttpError

from .service import get_gmail_service
from ..exceptions import NotFoundError, TransportError, UsageError

logger = logging.getLogger(__name__)

MESSAGE_FORMATS = ("full", "metadata", "raw")

DEFAULT_METADATA_HEADERS = ["From", "To", "Subject", "Date"]


def split_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated flag value, dropping blanks."""
    return [item.strip() for item in (value or "").split(",") if item.strip()]


def get_message(message_id: str, format: str = "full", headers: Optional[List[str]] = None,
                service: Any = None, account: Optional[str] = None) -> Dict[str, Any]:
    """
    Fetch a Gmail message resource.

    Args:
        message_id: The Gmail message ID
        format: 'full', 'metadata' or 'raw'
        headers: Header names to return for 'metadata' (defaults to From, To, Subject, Date)
        service: Gmail service to use (built from ``account`` when omitted)
        account: Account name to authenticate as

    Returns:
        The message resource as returned by the API
    """
    message_id = (message_id or "").strip()
    if not message_id:
        raise UsageError("empty messageId")

    format = (format or "").strip() or "full"
    if format not in MESSAGE_FORMATS:
        raise UsageError(f"invalid --format: {format!r} (expected full|metadata|raw)")

    kwargs = {"userId": "me", "id": message_id, "format": format}
    if format == "metadata":
        kwargs["metadataHeaders"] = headers or DEFAULT_METADATA_HEADERS

    service = service or get_gmail_service(account)
    logger.debug(f"Retrieving message {message_id} (format={format})")
    try:
        return service.users().messages().get(**kwargs).execute()
    except HttpError as e:
        if getattr(e.resp, "status", None) == 404:
            raise NotFoundError(f"message not found (id={message_id})") from e
        raise TransportError(f"Gmail API error: {e}") from e


def header_value(payload: Optional[dict], name: str) -> str:
    """Get a header value by case-insensitive name, or "" if missing."""
    for header in (payload or {}).get("headers", []):
        if header.get("name", "").lower() == name.lower():
            return header.get("value", "")
    return ""


def _decode(data: str) -> str:
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")


def decode_raw(raw: str) -> str:
    """Decode the base64url 'raw' field of a message into RFC 822 text."""
    return _decode(raw) if raw else ""


def _find_body(part: dict, mime_type: str) -> Optional[str]:
    if part.get("mimeType", "").lower() == mime_type:
        data = part.get("body", {}).get("data")
        if data:
            return _decode(data)
    for subpart in part.get("parts", []) or []:
        found = _find_body(subpart, mime_type)
        if found:
            return found
    return None


def best_body_text(payload: Optional[dict]) -> str:
    """
    Pick the most readable body of a message.

    Prefers the first text/plain part anywhere in the MIME tree, then
    text/html, then the top-level body data.
    """
    if not payload:
        return ""
    for mime_type in ("text/plain", "text/html"):
        body = _find_body(payload, mime_type)
        if body:
            return body
    data = payload.get("body", {}).get("data")
    return _decode(data) if data else ""
