"""Outbound email: password-reset OTP delivery."""

from app.infrastructure.external.email.otp_mailer import SmtpOtpMailer, build_otp_message

__all__ = ["SmtpOtpMailer", "build_otp_message"]
