"""In-memory storage for generation records and daily usage counters.

This module isolates record keeping from ``thumbcraft.api.main`` so route
handlers can focus on HTTP concerns while the store remains testable as a
small unit.

The store is intentionally simple:

- records live in two dictionaries for the lifetime of the process
- generation records are immutable once created and are never deleted
- usage counters are keyed by ``(ip_address, date)`` and only ever grow

One :class:`GenerationStore` is created by the application factory and kept
on ``app.state``; tests build their own isolated instances.  FastAPI runs
the generation endpoint in its thread pool, so every write happens under a
single lock to keep concurrent increments for the same key from losing
updates.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone

from thumbcraft.core.models import DailyUsage, GenerationRequest


def _now() -> datetime:
    return datetime.now(timezone.utc)


class GenerationStore:
    """Process-lifetime holder for :class:`GenerationRequest` and :class:`DailyUsage`."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._requests: dict[str, GenerationRequest] = {}
        self._usage: dict[tuple[str, str], DailyUsage] = {}

    def create_generation_request(self, **fields) -> GenerationRequest:
        """Persist a new generation record.

        A fresh UUID and creation timestamp are assigned here; any ``id`` or
        ``created_at`` in *fields* is ignored.

        Args:
            **fields: Remaining :class:`GenerationRequest` attributes.

        Returns:
            The stored record.
        """
        fields.pop("id", None)
        fields.pop("created_at", None)
        record = GenerationRequest(id=str(uuid.uuid4()), created_at=_now(), **fields)
        with self._lock:
            self._requests[record.id] = record
        return record

    def get_generation_request(self, request_id: str) -> GenerationRequest | None:
        """Return the record for *request_id*, or ``None`` if unknown."""
        return self._requests.get(request_id)

    def count_generation_requests(self) -> int:
        """Return the number of stored generation records."""
        return len(self._requests)

    def get_daily_usage(self, ip_address: str, date: str) -> DailyUsage | None:
        """Return a snapshot of the usage counter for an IP and day.

        The returned object is a copy; mutating it does not affect the store.
        """
        with self._lock:
            usage = self._usage.get((ip_address, date))
            return usage.model_copy() if usage else None

    def increment_daily_usage(self, ip_address: str, date: str) -> DailyUsage:
        """Add one generation to the counter for an IP and day.

        Creates the counter with a count of 1 on the first call for a key.
        The read-modify-write runs under the store lock.

        Args:
            ip_address: Caller address.
            date: Calendar day as ``YYYY-MM-DD``.

        Returns:
            A snapshot of the updated counter.
        """
        key = (ip_address, date)
        with self._lock:
            usage = self._usage.get(key)
            if usage is None:
                usage = DailyUsage(
                    id=str(uuid.uuid4()),
                    ip_address=ip_address,
                    date=date,
                    generation_count=1,
                    created_at=_now(),
                )
                self._usage[key] = usage
            else:
                usage.generation_count += 1
            return usage.model_copy()
