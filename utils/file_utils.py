"""
utils/file_utils.py

Purpose: Upload encoding

- Turns uploaded files into base64 data URIs for the Google Sheet
- Always releases the upload's temporary buffer
"""

import base64
import mimetypes
from typing import Any, Dict, Optional

from fastapi import UploadFile

from app.core.exceptions import ValidationError
from utils.constants import DEFAULT_MIME_TYPE, FILE_TOO_LARGE_MESSAGE


def to_data_uri(content: bytes, mime_type: str) -> str:
    """
    Encodes raw bytes as a data URI.

    Example:
        >>> to_data_uri(b"hi", "text/plain")
        'data:text/plain;base64,aGk='
    """
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def guess_mime_type(filename: Optional[str], declared: Optional[str] = None) -> str:
    """
    Uses the client's declared content type, falling back to the extension.
    """
    if declared and declared != DEFAULT_MIME_TYPE:
        return declared
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return declared or DEFAULT_MIME_TYPE


def has_upload(upload: Optional[UploadFile]) -> bool:
    """True if the part carries a file (browsers send empty parts for blank inputs)."""
    return upload is not None and bool(upload.filename)


async def encode_upload(upload: UploadFile, max_bytes: int) -> Optional[Dict[str, Any]]:
    """
    Reads an upload into an attachment dict and closes it.

    Returns:
        {"fileName", "mimeType", "data"} or None if the file is empty

    Raises:
        ValidationError: If the file is larger than max_bytes
    """
    try:
        content = await upload.read(max_bytes + 1)
        if len(content) > max_bytes:
            raise ValidationError(
                FILE_TOO_LARGE_MESSAGE,
                details={"file": upload.filename, "max_bytes": max_bytes}
            )
        if not content:
            return None

        mime_type = guess_mime_type(upload.filename, upload.content_type)
        return {
            "fileName": upload.filename,
            "mimeType": mime_type,
            "data": to_data_uri(content, mime_type),
        }
    finally:
        await upload.close()
