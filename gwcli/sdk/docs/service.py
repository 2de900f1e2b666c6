"""Google Docs service factory."""

import logging
from typing import Any, Optional

from googleapiclient.discovery import build

from ..auth import get_credentials

logger = logging.getLogger(__name__)


def get_docs_service(account: Optional[str] = None) -> Any:
    """
    Build and return a Google Docs API service object.

    Args:
        account: Account name to authenticate as (defaults to the active account)
    """
    creds, source = get_credentials(account)
    logger.debug(f"Building Docs service using credentials from: {source}")
    return build("docs", "v1", credentials=creds, cache_discovery=False)
