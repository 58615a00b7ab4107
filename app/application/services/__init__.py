"""Application services: in-process helpers shared by use cases."""

from app.application.services.replay_guard import ReplayGuard

__all__ = ["ReplayGuard"]
