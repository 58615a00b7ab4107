"""Password-reset OTP API schemas."""

from pydantic import BaseModel, Field


class OtpRequest(BaseModel):
    """Request body for POST /api/password-reset/request-otp."""

    email: str | None = Field(default=None, description="Account email address")


class OtpVerifyRequest(BaseModel):
    """Request body for POST /api/password-reset/verify-otp."""

    email: str | None = Field(default=None, description="Account email address")
    otp: str | None = Field(default=None, description="Six-digit code from the email")


class OtpStatusResponse(BaseModel):
    """Acknowledgement for both OTP routes."""

    status: str = Field(..., description="'sent' or 'verified'")
