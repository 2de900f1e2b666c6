"""Gmail operations for the gwcli SDK.

Example usage:
    from gwcli.sdk import mail

    messages, metadata = mail.search("from:someone@example.com")
    message = mail.get(messages[0]["id"], format="metadata")
"""

from .service import get_gmail_service
from .search import search_messages
from .read import get_message, header_value, best_body_text, decode_raw, split_csv

__all__ = [
    "get_gmail_service",
    "search_messages",
    "get_message",
    "header_value",
    "best_body_text",
    "decode_raw",
    "split_csv",
]

# Convenience aliases
search = search_messages
get = get_message
