"""Single-use guard for OAuth authorization codes (process lifetime).

A code moves absent -> pending (exchange in flight) -> used. Pending and
used codes are both refused, so two concurrent exchanges of the same code
cannot both reach the provider. A failed exchange releases the code so a
legitimate retry is possible. Used codes are never forgotten.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from threading import Lock

from app.domain.exceptions import CodeAlreadyUsedException


class ReplayGuard:
    """In-memory used/pending code sets with a lock around check-and-insert."""

    def __init__(self) -> None:
        self._used: set[str] = set()
        self._pending: set[str] = set()
        self._lock = Lock()

    def reserve(self, code: str) -> None:
        """Mark code pending; raise CodeAlreadyUsedException if it is pending or used."""
        with self._lock:
            if code in self._used or code in self._pending:
                raise CodeAlreadyUsedException()
            self._pending.add(code)

    def commit(self, code: str) -> None:
        """Mark a pending code as used (successful exchange)."""
        with self._lock:
            self._pending.discard(code)
            self._used.add(code)

    def release(self, code: str) -> None:
        """Return a pending code to absent (failed exchange)."""
        with self._lock:
            self._pending.discard(code)

    def is_used(self, code: str) -> bool:
        """Return True once code has been exchanged successfully."""
        with self._lock:
            return code in self._used

    @asynccontextmanager
    async def claim(self, code: str) -> AsyncIterator[None]:
        """Reserve code for the duration of the block; commit on success, release on error."""
        self.reserve(code)
        try:
            yield
        except BaseException:
            self.release(code)
            raise
        self.commit(code)
