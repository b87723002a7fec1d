"""
app/services/form_service.py

Purpose: Admission form forwarding

- Checks the required mark sheet and ID card uploads
- Encodes every uploaded file as a base64 data URI
- Forwards fields + attachments to the Google Sheet
"""

from typing import Any, Dict, Mapping, Optional

from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.services.sheet_service import SheetService
from utils.constants import (
    FILES_MISSING_MESSAGE,
    FORM_TEXT_FIELDS,
    REQUIRED_FILE_FIELDS,
    OPTIONAL_FILE_FIELDS,
)
from utils.file_utils import encode_upload, has_upload
from utils.time_utils import utcnow, format_timestamp

logger = get_logger(__name__)


class FormService:
    """Validates admission submissions and relays them to the sheet."""

    def __init__(self, sheet: SheetService, max_upload_bytes: int = 5 * 1024 * 1024):
        self.sheet = sheet
        self.max_upload_bytes = max_upload_bytes

    async def submit(
        self,
        fields: Mapping[str, Optional[str]],
        files: Mapping[str, Optional[UploadFile]],
    ) -> Dict[str, Any]:
        """
        Encodes and forwards one submission.

        Args:
            fields: name, phone, parentProfession
            files: upload per file field; None for parts not sent

        Returns:
            The payload that was forwarded

        Raises:
            ValidationError: Required files missing/empty, or a file too large
            ConfigurationError: If the sheet URL is not set
            ForwardError: If the sheet call fails
        """
        try:
            missing = [name for name in REQUIRED_FILE_FIELDS if not has_upload(files.get(name))]
            if missing:
                raise ValidationError(FILES_MISSING_MESSAGE, details={"missing": missing})

            payload: Dict[str, Any] = {
                name: fields.get(name) or "" for name in FORM_TEXT_FIELDS
            }
            payload["submittedAt"] = format_timestamp(utcnow())

            for name in REQUIRED_FILE_FIELDS + OPTIONAL_FILE_FIELDS:
                upload = files.get(name)
                if not has_upload(upload):
                    continue
                attachment = await encode_upload(upload, self.max_upload_bytes)
                if attachment is None:
                    if name in REQUIRED_FILE_FIELDS:
                        raise ValidationError(FILES_MISSING_MESSAGE, details={"missing": [name]})
                    continue
                payload[name] = attachment
        finally:
            # Parts skipped above still hold temp buffers
            for upload in files.values():
                if upload is not None:
                    await upload.close()

        attached = [name for name in REQUIRED_FILE_FIELDS + OPTIONAL_FILE_FIELDS if name in payload]
        logger.info(f"Forwarding admission form with attachments: {', '.join(attached)}")

        await self.sheet.submit(payload)
        return payload


def build_form_service() -> FormService:
    """Creates a FormService wired from settings."""
    return FormService(sheet=SheetService(), max_upload_bytes=settings.MAX_UPLOAD_BYTES)
