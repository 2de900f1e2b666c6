class GWCError(Exception):
    """Base class for all gwcli exceptions."""
    pass

class ValidationError(GWCError):
    """Base class for validation errors."""
    pass

class UsageError(ValidationError):
    """Raised when a required argument is empty or a flag value is not accepted."""
    pass

class LocalPathError(ValidationError):
    """Raised when an input appears to be a local file path instead of a resource ID."""
    pass

class InvalidDocIdError(ValidationError):
    """Raised when a document ID is malformed."""
    pass

class AccountError(GWCError):
    """Raised when no account is configured or the named account does not exist."""
    pass

class NotFoundError(GWCError):
    """Raised when a Drive file or Gmail message does not exist."""
    pass

class DocumentNotFoundError(NotFoundError):
    """Raised when a document does not exist or is not a Google Doc."""

    def __init__(self, doc_id: str):
        self.doc_id = doc_id
        super().__init__(f"doc not found or not a Google Doc (id={doc_id})")

class MalformedEditError(GWCError):
    """Raised when a computed edit request is invalid. Indicates a bug, never retried."""
    pass

class TransportError(GWCError):
    """Raised when a Google API call fails for network, auth or quota reasons."""
    pass

class StyleBatchError(TransportError):
    """Raised when a style batch fails after the text was already inserted.

    The document keeps its new text and every batch before ``batch_number``.
    """

    def __init__(self, batch_number: int, total_batches: int, cause: Exception):
        self.batch_number = batch_number
        self.total_batches = total_batches
        self.applied_batches = batch_number - 1
        self.cause = cause
        super().__init__(
            f"apply styles batch {batch_number}/{total_batches}: {cause} "
            f"(text inserted, {self.applied_batches} style batch(es) applied)"
        )
