"""Google Drive file operations used by the Docs commands.

Create, copy and export go through Drive rather than the Docs API so they
work with shared drives and can place files in a folder.
"""

import io
import os
import re
import logging
from typing import Any, Optional

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload

from .service import get_drive_service
from ..docs.validators import validate_doc_id
from ..exceptions import NotFoundError, TransportError, UsageError, ValidationError

logger = logging.getLogger(__name__)

GOOGLE_DOC_MIME_TYPE = "application/vnd.google-apps.document"

EXPORT_FORMATS = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain",
}

FILE_FIELDS = "id, name, mimeType, webViewLink"

# Characters that can't appear in a local file name
UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


def _call(request, file_id: str, kind_label: str = "file"):
    try:
        return request.execute()
    except HttpError as e:
        if getattr(e.resp, "status", None) == 404:
            raise NotFoundError(f"{kind_label} not found (id={file_id})") from e
        raise TransportError(f"Drive API error: {e}") from e


def get_file_metadata(file_id: str, service: Any = None, kind_label: str = "file") -> dict:
    """Fetch id, name, mimeType and webViewLink for a Drive file."""
    service = service or get_drive_service()
    return _call(
        service.files().get(fileId=file_id, fields=FILE_FIELDS, supportsAllDrives=True),
        file_id, kind_label,
    )


def require_mime_type(metadata: dict, expected_mime: str, kind_label: str):
    """Raise ValidationError unless the file has the expected MIME type."""
    mime_type = metadata.get("mimeType")
    if mime_type != expected_mime:
        raise ValidationError(
            f"File with ID '{metadata.get('id')}' is not a {kind_label} (MIME type: {mime_type})."
        )


def create_document(title: str, parent_id: Optional[str] = None, service: Any = None) -> dict:
    """
    Create an empty Google Doc through Drive.

    Args:
        title: The title for the new document
        parent_id: Optional destination folder ID

    Returns:
        The created Drive file (id, name, mimeType, webViewLink)
    """
    title = (title or "").strip()
    if not title:
        raise UsageError("empty title")

    service = service or get_drive_service()
    body = {"name": title, "mimeType": GOOGLE_DOC_MIME_TYPE}
    parent_id = (parent_id or "").strip()
    if parent_id:
        body["parents"] = [parent_id]

    created = _call(
        service.files().create(body=body, fields=FILE_FIELDS, supportsAllDrives=True),
        parent_id or "root", "folder",
    )
    logger.debug(f"Created document {created.get('id')} ('{title}')")
    return created


def copy_file(file_id: str, title: str, parent_id: Optional[str] = None,
              expected_mime: str = GOOGLE_DOC_MIME_TYPE, kind_label: str = "Google Doc",
              service: Any = None) -> dict:
    """
    Copy a Drive file after checking it is of the expected type.

    Returns:
        The new Drive file (id, name, mimeType, webViewLink)
    """
    file_id = validate_doc_id(file_id)
    title = (title or "").strip()
    if not title:
        raise UsageError("empty title")

    service = service or get_drive_service()
    require_mime_type(get_file_metadata(file_id, service, kind_label), expected_mime, kind_label)

    body = {"name": title}
    parent_id = (parent_id or "").strip()
    if parent_id:
        body["parents"] = [parent_id]

    return _call(
        service.files().copy(fileId=file_id, body=body, fields=FILE_FIELDS,
                             supportsAllDrives=True),
        file_id, kind_label,
    )


def default_export_path(name: str, export_format: str) -> str:
    """Build '<name>.<format>' with characters unsafe for file names replaced."""
    safe = UNSAFE_FILENAME_CHARS.sub("_", name or "").strip(" .") or "export"
    return f"{safe}.{export_format}"


def export_file(file_id: str, output_path: Optional[str] = None, export_format: str = "pdf",
                expected_mime: str = GOOGLE_DOC_MIME_TYPE, kind_label: str = "Google Doc",
                service: Any = None) -> dict:
    """
    Export a Google-native file to a local file.

    Args:
        file_id: The Drive file ID
        output_path: Where to save; defaults to '<file name>.<format>' in the working directory
        export_format: One of EXPORT_FORMATS

    Returns:
        Dict with id, name, mime_type (of the export), file_path and size
    """
    file_id = validate_doc_id(file_id)
    export_format = (export_format or "pdf").strip().lower()
    if export_format not in EXPORT_FORMATS:
        raise UsageError(
            f"invalid --format: {export_format!r} (expected {'|'.join(EXPORT_FORMATS)})"
        )

    service = service or get_drive_service()
    metadata = get_file_metadata(file_id, service, kind_label)
    require_mime_type(metadata, expected_mime, kind_label)

    save_path = output_path or default_export_path(metadata.get("name"), export_format)
    parent = os.path.dirname(os.path.abspath(save_path))
    os.makedirs(parent, exist_ok=True)

    request = service.files().export_media(fileId=file_id, mimeType=EXPORT_FORMATS[export_format])
    buffer = io.BytesIO()
    downloader = MediaIoBaseDownload(buffer, request)
    done = False
    try:
        while not done:
            _, done = downloader.next_chunk()
    except HttpError as e:
        raise TransportError(f"Drive export failed: {e}") from e

    with open(save_path, "wb") as f:
        f.write(buffer.getvalue())

    return {
        "id": file_id,
        "name": metadata.get("name"),
        "mime_type": EXPORT_FORMATS[export_format],
        "file_path": save_path,
        "size": len(buffer.getvalue()),
    }
