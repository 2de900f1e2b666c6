"""Output helpers shared by all commands.

Commands print either tab-separated ``key<TAB>value`` lines for people or,
with the root ``--json`` flag, a single JSON document for scripts.
"""

import json
from typing import Any

import click


def is_json() -> bool:
    """True if the root --json flag was given for the current invocation."""
    ctx = click.get_current_context(silent=True)
    while ctx is not None:
        if isinstance(ctx.obj, dict) and "json" in ctx.obj:
            return bool(ctx.obj["json"])
        ctx = ctx.parent
    return False


def write_json(data: Any):
    """Print data as indented JSON."""
    click.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def print_kv(key: str, value: Any):
    """Print one 'key<TAB>value' line."""
    click.echo(f"{key}\t{value}")
