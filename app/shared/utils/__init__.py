"""Shared utilities: generators."""

from app.shared.utils.generators import generate_otp

__all__ = ["generate_otp"]
