"""Google Drive SDK operations."""

from .service import get_drive_service
from .files import (
    EXPORT_FORMATS,
    GOOGLE_DOC_MIME_TYPE,
    create_document,
    copy_file,
    export_file,
    get_file_metadata,
)

__all__ = [
    "get_drive_service",
    "EXPORT_FORMATS",
    "GOOGLE_DOC_MIME_TYPE",
    "create_document",
    "copy_file",
    "export_file",
    "get_file_metadata",
]
