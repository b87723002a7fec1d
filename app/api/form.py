"""
app/api/form.py

Purpose: Admission form endpoint

- Accepts multipart form fields and mark sheet / ID uploads
- Hands them to FormService which encodes and forwards to the sheet
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from typing import Optional

from app.api.deps import get_form_service
from app.schemas.response import SuccessResponse
from app.services.form_service import FormService

router = APIRouter()


@router.post("/submit-form", response_model=SuccessResponse)
async def submit_form(
    name: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    parentProfession: Optional[str] = Form(None),
    mark10: Optional[UploadFile] = File(None),
    mark11: Optional[UploadFile] = File(None),
    mark12: Optional[UploadFile] = File(None),
    idCard: Optional[UploadFile] = File(None),
    discountMark: Optional[UploadFile] = File(None),
    service: FormService = Depends(get_form_service),
):
    """
    Submits the admission form.

    mark10 and idCard are required; mark11, mark12 and discountMark are
    optional. A missing required file returns 400 before anything is sent.
    """
    await service.submit(
        fields={
            "name": name,
            "phone": phone,
            "parentProfession": parentProfession,
        },
        files={
            "mark10": mark10,
            "mark11": mark11,
            "mark12": mark12,
            "idCard": idCard,
            "discountMark": discountMark,
        },
    )
    return SuccessResponse()
