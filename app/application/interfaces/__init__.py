"""Application interfaces (ports): record source and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.record_source import IRecordSource
from app.application.interfaces.services import (
    ICacheService,
    IOtpMailer,
    ISpotifyTokenClient,
)

__all__ = [
    "ICacheService",
    "IOtpMailer",
    "IRecordSource",
    "ISpotifyTokenClient",
]
