"""Authentication and credential management for the gwcli SDK.

Loads Google API credentials for a resolved account and runs the OAuth
installed-app flow that creates new accounts.
"""

import json
import logging
import urllib.request
from typing import Tuple, Any, Iterable, List, Optional

from .accounts import (
    ADC_ACCOUNT_NAME, resolve_account, get_account_token_path, save_account,
)
from .exceptions import AccountError

logger = logging.getLogger(__name__)

# Scope aliases for convenience
SCOPE_ALIASES = {
    "mail-read": "https://www.googleapis.com/auth/gmail.readonly",
    "mail": "https://www.googleapis.com/auth/gmail.modify",
    "docs-read": "https://www.googleapis.com/auth/documents.readonly",
    "docs": "https://www.googleapis.com/auth/documents",
    "drive-read": "https://www.googleapis.com/auth/drive.readonly",
    "drive": "https://www.googleapis.com/auth/drive",
}

IDENTITY_SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
]

# Requested by 'gwcli accounts add' when no --scope is given
DEFAULT_SCOPES = ["mail", "drive", "docs"]


def resolve_scope_alias(alias: str) -> str:
    """Resolve a scope alias to its full URL, or return the input if not an alias."""
    return SCOPE_ALIASES.get(alias, alias)


def resolve_scopes(scopes: Iterable[str]) -> List[str]:
    """Resolve aliases and add the identity scopes, keeping order and dropping duplicates."""
    resolved = []
    for scope in list(scopes) + IDENTITY_SCOPES:
        url = resolve_scope_alias(scope.strip())
        if url and url not in resolved:
            resolved.append(url)
    return resolved


def get_credentials(account: Optional[str] = None) -> Tuple[Any, str]:
    """
    Load credentials for an account.

    Args:
        account: Explicit account name (overrides env var and active account)

    Returns:
        Tuple of (credentials object, source description)

    Raises:
        AccountError: If no account is configured or the account is not found
    """
    import google.auth
    from google.auth.transport.requests import Request
    from google.oauth2.credentials import Credentials

    name = resolve_account(account)

    if name == ADC_ACCOUNT_NAME:
        creds, project = google.auth.default()
        source = "Application Default Credentials"
        if project:
            source += f" (project: {project})"
        return creds, source

    token_path = get_account_token_path(name)
    creds = Credentials.from_authorized_user_file(str(token_path))
    if not creds.valid and creds.refresh_token:
        logger.debug(f"Refreshing expired token for account '{name}'")
        creds.refresh(Request())
        with open(token_path, "w") as f:
            f.write(creds.to_json())
    return creds, f"Account '{name}': {token_path}"


def get_token_email(creds) -> Optional[str]:
    """
    Ask Google's tokeninfo endpoint which user a credential belongs to.

    Returns None when the endpoint cannot be reached or reports no email.
    """
    access_token = getattr(creds, "token", None)
    if not access_token:
        return None

    url = f"https://www.googleapis.com/oauth2/v3/tokeninfo?access_token={access_token}"
    try:
        with urllib.request.urlopen(url) as response:
            data = json.loads(response.read().decode())
            return data.get("email")
    except OSError as e:
        logger.warning(f"Could not look up token email: {e}")
        return None


def authorize_account(name: str, client_secrets_path: str, scopes: Iterable[str]) -> dict:
    """
    Run the browser OAuth flow and store the resulting token as an account.

    Args:
        name: Account name to create or replace
        client_secrets_path: Path to an OAuth desktop client_secrets.json
        scopes: Scope URLs or aliases to request

    Returns:
        Dict with name, email and scopes of the stored account
    """
    from google_auth_oauthlib.flow import InstalledAppFlow

    if name == ADC_ACCOUNT_NAME:
        raise AccountError("Cannot create account with reserved name 'adc'")

    resolved = resolve_scopes(scopes)
    logger.info(f"Requesting OAuth token for scopes: {', '.join(resolved)}")

    flow = InstalledAppFlow.from_client_secrets_file(client_secrets_path, resolved)
    creds = flow.run_local_server(port=0)
    logger.info("User authorization completed via browser.")

    email = get_token_email(creds)
    save_account(name, json.loads(creds.to_json()), email=email, scopes=resolved)
    return {"name": name, "email": email, "scopes": resolved}
