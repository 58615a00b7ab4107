"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import ResourceKind
from app.domain.exceptions import (
    CacheUnavailableException,
    CodeAlreadyUsedException,
    EmailDeliveryException,
    InvalidOtpException,
    LyricsFetchException,
    MissingRefreshTokenException,
    ProviderException,
    ProviderUnavailableException,
    ResourceNotFoundException,
    SourceQueryFailedException,
    SqlNotConfiguredException,
    TuneTribeException,
    ValidationException,
)

__all__ = [
    # Enums
    "ResourceKind",
    # Exceptions
    "CacheUnavailableException",
    "CodeAlreadyUsedException",
    "EmailDeliveryException",
    "InvalidOtpException",
    "LyricsFetchException",
    "MissingRefreshTokenException",
    "ProviderException",
    "ProviderUnavailableException",
    "ResourceNotFoundException",
    "SourceQueryFailedException",
    "SqlNotConfiguredException",
    "TuneTribeException",
    "ValidationException",
]
