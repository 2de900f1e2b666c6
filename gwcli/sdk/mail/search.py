"""Gmail message search operations."""

import logging
from typing import List, Dict, Any, Optional, Tuple

from .read import header_value
from .service import get_gmail_service

logger = logging.getLogger(__name__)


def search_messages(
    query: str,
    page_token: Optional[str] = None,
    max_results: int = 25,
    service: Any = None,
    account: Optional[str] = None,
) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """
    Search for Gmail messages matching the given query.

    Args:
        query: Gmail API query string (e.g., "from:someone@example.com")
        page_token: Token for pagination (None for first page)
        max_results: Maximum number of messages to return (default 25, max 500)
        service: Gmail service to use (built from ``account`` when omitted)
        account: Account name to authenticate as

    Returns:
        Tuple of (list of message dicts, metadata dict with pagination info)
        Each message has: id, thread_id, subject, from, date, label_ids
        Metadata dict contains: resultSizeEstimate, nextPageToken
    """
    service = service or get_gmail_service(account)
    logger.debug(f"Searching for emails with query: '{query}'")

    list_kwargs = {"userId": "me", "q": query, "maxResults": max_results}
    if page_token:
        list_kwargs["pageToken"] = page_token

    results = service.users().messages().list(**list_kwargs).execute()
    metadata = {
        "resultSizeEstimate": results.get("resultSizeEstimate", 0),
        "nextPageToken": results.get("nextPageToken"),
    }

    messages = []
    for message in results.get("messages", []):
        msg = service.users().messages().get(
            userId="me", id=message["id"], format="metadata",
            metadataHeaders=["From", "Subject", "Date"]
        ).execute()
        payload = msg.get("payload", {})
        messages.append({
            "id": message["id"],
            "thread_id": msg.get("threadId"),
            "subject": header_value(payload, "Subject"),
            "from": header_value(payload, "From"),
            "date": header_value(payload, "Date"),
            "label_ids": msg.get("labelIds", []),
        })

    logger.debug(f"Parsed {len(messages)} messages")
    return messages, metadata
