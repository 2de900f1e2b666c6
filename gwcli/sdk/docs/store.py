"""Document store used by the markdown writer.

The writer only needs two operations from Google Docs: fetch a document
and run a batchUpdate. ``DocumentStore`` names that surface so callers can
pass in the real API client or an in-memory stand-in.
"""

import logging
from typing import Any, List, Optional, Protocol

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from .service import get_docs_service
from ..exceptions import DocumentNotFoundError, TransportError
from ..timing import time_api_call

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """The Docs operations the writer depends on."""

    def get(self, doc_id: str, fields: Optional[str] = None) -> dict:
        ...

    def batch_update(self, doc_id: str, requests: List[dict]) -> dict:
        ...


def end_index(doc: dict) -> int:
    """
    Return the end index of a document body.

    This is one past the mandatory trailing newline; an empty document has
    end index 2. A body with no content reports 1.
    """
    content = doc.get("body", {}).get("content", [])
    return max((el.get("endIndex", 1) for el in content), default=1)


class GoogleDocsStore:
    """DocumentStore backed by the Google Docs v1 API."""

    def __init__(self, service: Any = None, account: Optional[str] = None):
        self._service = service
        self._account = account

    @property
    def service(self):
        if self._service is None:
            self._service = get_docs_service(self._account)
        return self._service

    @time_api_call
    def get(self, doc_id: str, fields: Optional[str] = None) -> dict:
        """Fetch a document. Raises DocumentNotFoundError on 404."""
        kwargs = {"documentId": doc_id}
        if fields:
            kwargs["fields"] = fields
        try:
            return self.service.documents().get(**kwargs).execute()
        except HttpError as e:
            raise _translate(e, doc_id) from e
        except (OSError, httplib2.HttpLib2Error) as e:
            raise TransportError(f"Docs API request failed: {e}") from e
        except GoogleAuthError as e:
            raise TransportError(f"Docs API authorization failed: {e}") from e

    @time_api_call
    def batch_update(self, doc_id: str, requests: List[dict]) -> dict:
        """Run one batchUpdate. The API applies the whole batch or none of it."""
        logger.debug(f"batchUpdate on {doc_id} with {len(requests)} request(s)")
        try:
            return self.service.documents().batchUpdate(
                documentId=doc_id,
                body={"requests": requests}
            ).execute()
        except HttpError as e:
            raise _translate(e, doc_id) from e
        except (OSError, httplib2.HttpLib2Error) as e:
            raise TransportError(f"Docs API request failed: {e}") from e
        except GoogleAuthError as e:
            raise TransportError(f"Docs API authorization failed: {e}") from e


def _translate(error: HttpError, doc_id: str) -> Exception:
    status = getattr(error.resp, "status", None)
    if status == 404:
        return DocumentNotFoundError(doc_id)
    return TransportError(f"Docs API error (HTTP {status}): {error}")
