"""
Shared test configuration and fixtures for gwcli.

Every test runs against an isolated config directory so nothing touches
the user's real ~/.config/gwcli.
"""

import json
from pathlib import Path

import pytest
import yaml


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch):
    """
    Redirect gwcli's config directory into tmp_path.

    Returns a dict with paths and a helper that creates a stored account.
    """
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    config_file = config_dir / "config.yaml"

    monkeypatch.setenv("GWCLI_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("GWCLI_CONFIG_FILE", str(config_file))
    monkeypatch.delenv("GWCLI_ACCOUNT", raising=False)

    def create_account(name: str, email: str = "test@example.com", scopes=None):
        """Write a token file and account.yaml the way 'accounts add' does."""
        account_dir = config_dir / "accounts" / name
        account_dir.mkdir(parents=True, exist_ok=True)
        with open(account_dir / "user_token.json", "w") as f:
            json.dump({"token": "fake_token", "refresh_token": "fake_refresh"}, f)
        metadata = {"email": email}
        if scopes is not None:
            metadata["scopes"] = scopes
        with open(account_dir / "account.yaml", "w") as f:
            yaml.safe_dump(metadata, f)
        return account_dir

    def set_active(name: str):
        with open(config_file, "w") as f:
            yaml.safe_dump({"active_account": name}, f)

    return {
        "config_dir": config_dir,
        "config_file": config_file,
        "create_account": create_account,
        "set_active": set_active,
    }
