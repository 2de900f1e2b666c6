"""Account management for multi-identity support.

Each account stores its own OAuth token and a small metadata file under
``<config dir>/accounts/<name>/``. Commands pick the account from the
``--account`` flag, the ``GWCLI_ACCOUNT`` environment variable or the
active account saved in config, in that order.

Special account: "adc" is a built-in virtual account that uses Application
Default Credentials directly (nothing stored on disk).
"""

import os
import re
import json
import yaml
import shutil
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional, List, Dict, Any

from .config import get_config_value, set_config_value, get_config_file_path
from .exceptions import AccountError

logger = logging.getLogger(__name__)

# Built-in account name for ADC
ADC_ACCOUNT_NAME = "adc"

# Environment variable overriding the active account
ACCOUNT_ENV_VAR = "GWCLI_ACCOUNT"

# Valid account name pattern: alphanumeric, hyphen, underscore, 1-32 chars
ACCOUNT_NAME_PATTERN = re.compile(r'^[a-zA-Z0-9][a-zA-Z0-9_-]{0,31}$')


def get_accounts_dir() -> Path:
    """Get the accounts directory path."""
    return get_config_file_path().parent / "accounts"


def is_valid_account_name(name: str) -> bool:
    """Check if an account name is valid."""
    if name == ADC_ACCOUNT_NAME:
        return True
    return bool(ACCOUNT_NAME_PATTERN.match(name))


def get_account_dir(name: str) -> Path:
    """Get the directory path for a specific account."""
    return get_accounts_dir() / name


def get_account_token_path(name: str) -> Path:
    """Get the token file path for a specific account."""
    return get_account_dir(name) / "user_token.json"


def get_account_metadata_path(name: str) -> Path:
    """Get the metadata file path for a specific account."""
    return get_account_dir(name) / "account.yaml"


def account_exists(name: str) -> bool:
    """Check if an account exists (ADC always does)."""
    if name == ADC_ACCOUNT_NAME:
        return True
    return get_account_token_path(name).exists()


def list_accounts() -> List[Dict[str, Any]]:
    """
    List all available accounts with their metadata.

    Returns a list of dicts with:
        - name: account name
        - is_adc: True for the built-in ADC account
        - is_active: True if this is the currently active account
        - email: cached user email (may be None)
        - scopes: list of granted scopes recorded at authorization time
    """
    active = get_active_account_name()
    accounts = [{
        "name": ADC_ACCOUNT_NAME,
        "is_adc": True,
        "is_active": active == ADC_ACCOUNT_NAME,
        "email": None,
        "scopes": [],
    }]

    accounts_dir = get_accounts_dir()
    if accounts_dir.exists():
        for entry in sorted(accounts_dir.iterdir()):
            if entry.is_dir() and is_valid_account_name(entry.name) and account_exists(entry.name):
                metadata = load_account_metadata(entry.name)
                accounts.append({
                    "name": entry.name,
                    "is_adc": False,
                    "is_active": active == entry.name,
                    "email": metadata.get("email"),
                    "scopes": metadata.get("scopes", []),
                })

    return accounts


def get_active_account_name() -> Optional[str]:
    """Get the name of the account saved as active in config, or None."""
    return get_config_value("active_account")


def set_active_account(name: str) -> bool:
    """
    Set the active account.

    Returns:
        True if successful, False if the account doesn't exist
    """
    if not account_exists(name):
        return False
    set_config_value("active_account", name)
    return True


def resolve_account(explicit: Optional[str] = None) -> str:
    """
    Resolve the account a command should run as.

    Args:
        explicit: Account name given on the command line, if any

    Returns:
        The account name

    Raises:
        AccountError: If no account is selected or the selected one doesn't exist
    """
    name = (explicit or "").strip() or os.getenv(ACCOUNT_ENV_VAR, "").strip() \
        or get_active_account_name()
    if not name:
        raise AccountError(
            "No account selected. Use --account, set GWCLI_ACCOUNT, "
            "or run 'gwcli accounts use <name>'."
        )
    if not account_exists(name):
        raise AccountError(f"Account not found: {name}")
    return name


def load_account_metadata(name: str) -> dict:
    """
    Load account metadata from account.yaml.

    Returns empty dict if the file doesn't exist or can't be read.
    """
    metadata_path = get_account_metadata_path(name)
    if name == ADC_ACCOUNT_NAME or not metadata_path.exists():
        return {}

    try:
        with open(metadata_path, 'r') as f:
            data = yaml.safe_load(f)
            return data if data else {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load account metadata for '{name}': {e}")
        return {}


def save_account(name: str, token_data: dict, email: Optional[str] = None,
                 scopes: Optional[list] = None):
    """
    Store a token-based account, replacing any existing token.

    Raises:
        AccountError: If the name is reserved or invalid
    """
    if name == ADC_ACCOUNT_NAME:
        raise AccountError("Cannot create account with reserved name 'adc'")
    if not is_valid_account_name(name):
        raise AccountError(f"Invalid account name: {name}")

    account_dir = get_account_dir(name)
    account_dir.mkdir(parents=True, exist_ok=True)

    with open(get_account_token_path(name), 'w') as f:
        json.dump(token_data, f, indent=2)

    metadata = {"created": datetime.now().isoformat()}
    if email:
        metadata["email"] = email
    if scopes:
        metadata["scopes"] = list(scopes)

    with open(get_account_metadata_path(name), 'w') as f:
        yaml.safe_dump(metadata, f, default_flow_style=False)

    logger.info(f"Saved account '{name}'")


def delete_account(name: str) -> bool:
    """
    Delete a token-based account.

    Returns:
        True if deleted, False if the account doesn't exist or is ADC
    """
    if name == ADC_ACCOUNT_NAME:
        logger.error("Cannot delete built-in 'adc' account")
        return False

    account_dir = get_account_dir(name)
    if not account_dir.exists():
        return False

    shutil.rmtree(account_dir)
    logger.info(f"Deleted account '{name}'")

    if get_active_account_name() == name:
        set_config_value("active_account", None)

    return True
