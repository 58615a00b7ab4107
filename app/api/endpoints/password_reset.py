"""Password reset API: email a one-time code and verify it."""

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_password_reset_service
from app.application.use_cases.password_reset import PasswordResetService
from app.core.limiter import limit_otp
from app.schemas.password_reset import OtpRequest, OtpStatusResponse, OtpVerifyRequest

router = APIRouter()


@router.post("/request-otp", response_model=OtpStatusResponse, status_code=202)
@limit_otp
async def request_otp(
    request: Request,
    body: OtpRequest | None = None,
    service: PasswordResetService = Depends(get_password_reset_service),
) -> OtpStatusResponse:
    """Send a six-digit code to the email address; any earlier code is replaced."""
    body = body or OtpRequest()
    await service.request_otp(body.email)
    return OtpStatusResponse(status="sent")


@router.post("/verify-otp", response_model=OtpStatusResponse)
@limit_otp
async def verify_otp(
    request: Request,
    body: OtpVerifyRequest | None = None,
    service: PasswordResetService = Depends(get_password_reset_service),
) -> OtpStatusResponse:
    """Check the code; a correct code is consumed and cannot be reused."""
    body = body or OtpVerifyRequest()
    await service.verify_otp(body.email, body.otp)
    return OtpStatusResponse(status="verified")
