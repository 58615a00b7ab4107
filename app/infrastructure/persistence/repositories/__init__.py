"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.record_source import SqlRecordSource

__all__ = ["SqlRecordSource"]
