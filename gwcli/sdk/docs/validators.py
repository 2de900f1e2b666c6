import re
from gwcli.sdk.exceptions import LocalPathError, InvalidDocIdError, UsageError

# Detects strings containing common path/filename indicators: slashes, tilde, or dots.
LOCAL_PATH_REGEX = re.compile(r'[\\/~.]')

# Google file IDs: alphanumeric, dashes, and underscores, 10-128 characters.
VALID_ID_REGEX = re.compile(r'^[a-zA-Z0-9-_]{10,128}$')

def validate_doc_id(doc_id: str, arg_name: str = "docId") -> str:
    """
    Validate a Google Doc (or Drive file) ID and return it stripped of whitespace.

    Args:
        doc_id: The document ID to check.
        arg_name: Argument name used in the error message for an empty ID.

    Raises:
        UsageError: If the ID is empty or only whitespace.
        LocalPathError: If the ID contains path indicators.
        InvalidDocIdError: If the ID is malformed.
    """
    if not isinstance(doc_id, str):
        raise InvalidDocIdError(f"Invalid {arg_name}.")

    doc_id = doc_id.strip()
    if not doc_id:
        raise UsageError(f"empty {arg_name}")

    if LOCAL_PATH_REGEX.search(doc_id):
        raise LocalPathError(f"Invalid {arg_name}. This looks like a local path.")

    if not VALID_ID_REGEX.match(doc_id):
        raise InvalidDocIdError(f"Invalid {arg_name}.")

    return doc_id
