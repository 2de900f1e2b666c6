"""gwcli SDK - Library access to Google Workspace APIs.

Used by the gwcli command line, and usable on its own:

    from gwcli.sdk import docs

    store = docs.GoogleDocsStore(account="work")
    docs.append_markdown(store, doc_id, "## Status\n\n- **done**: parser")
"""

from . import config
from . import accounts
from . import auth
from . import docs
from . import drive
from . import mail

__all__ = ["config", "accounts", "auth", "docs", "drive", "mail"]
