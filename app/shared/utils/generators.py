"""Value generators (e.g. one-time passwords)."""

import secrets

from app.core.constants import OTP_MAX, OTP_MIN


def generate_otp() -> str:
    """Generate a six-digit one-time password from a CSPRNG.

    Returns:
        OTP as a string in [OTP_MIN, OTP_MAX].
    """
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))
