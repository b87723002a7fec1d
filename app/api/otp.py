"""
app/api/otp.py

Purpose: OTP endpoints

- POST /send-otp: issue and deliver a code
- POST /verify-otp: check a code; failures never say why
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_otp_service
from app.schemas.otp import SendOTPRequest, VerifyOTPRequest, OTPFailureResponse
from app.schemas.response import SuccessResponse
from app.services.otp_service import OTPService
from utils.constants import OTP_INVALID_MESSAGE

router = APIRouter()


@router.post("/send-otp", response_model=SuccessResponse)
async def send_otp(
    request: SendOTPRequest,
    service: OTPService = Depends(get_otp_service),
):
    """
    Generates an OTP for the phone and sends it via the messaging API.

    Errors (missing phone, config, delivery) are raised as AdmissionError
    and mapped by the exception handlers.
    """
    await service.issue(request.phoneNumber, request.userName)
    return SuccessResponse()


@router.post(
    "/verify-otp",
    response_model=SuccessResponse,
    responses={401: {"model": OTPFailureResponse}},
)
async def verify_otp(
    request: VerifyOTPRequest,
    service: OTPService = Depends(get_otp_service),
):
    """
    Verifies an OTP. Unknown, expired and wrong codes share one 401 response.
    """
    if service.verify(request.phoneNumber, request.otpCode):
        return SuccessResponse()

    return JSONResponse(
        status_code=401,
        content=OTPFailureResponse(message=OTP_INVALID_MESSAGE).model_dump()
    )
