"""gwcli - Google Workspace command-line client.

Package layout:
- gwcli.sdk: Library access to Gmail, Docs and Drive, including the
  markdown to Google Docs writer
- gwcli.cli: Command-line interface built on the SDK
"""

__version__ = "0.3.0"
