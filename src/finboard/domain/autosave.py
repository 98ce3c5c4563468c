"""Debounced auto-save for monthly value grids.

Rapid edits to the same row are coalesced: each edit replaces the pending
payload for its key and restarts that key's quiet timer, and only the latest
payload is saved once the key has been quiet for the debounce window.
"""

import copy
import logging
import threading
from decimal import Decimal
from typing import Any, Callable, Hashable, Mapping, Optional, Sequence

from finboard.domain.aggregation import MONTHS_PER_YEAR, ZERO, monthly_total, sanitize_monthly_values
from finboard.domain.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 1.0

SaveFunc = Callable[[Hashable, Any], None]
ErrorFunc = Callable[[Hashable, Any, Exception], None]


class DebouncedSaver:
    """Coalesce rapid submissions per key into a single save.

    A failed save is logged and reported to ``on_error``; the last
    successfully saved payload stays the reference for change detection and
    nothing is retried.

    Calls to ``save`` never overlap: timer threads and explicit flushes take
    a payload and save it while holding one save lock, so ``save`` may use a
    resource that is not thread-safe as long as the caller does not touch it
    until ``close`` returns.
    """

    def __init__(
        self,
        save: SaveFunc,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        on_error: Optional[ErrorFunc] = None,
    ):
        """Initialize the saver.

        Args:
            save: Called as ``save(key, payload)`` to persist a payload
            delay: Quiet period in seconds before a pending payload is saved
            on_error: Optional callback ``on_error(key, payload, exc)``
        """
        if delay < 0:
            raise ValueError("Debounce delay cannot be negative")
        self._save = save
        self.delay = delay
        self.on_error = on_error
        self._lock = threading.Lock()
        # Reentrant so on_error may flush
        self._save_lock = threading.RLock()
        self._pending: dict[Hashable, Any] = {}
        self._timers: dict[Hashable, threading.Timer] = {}
        self._last_saved: dict[Hashable, Any] = {}
        self._closed = False
        self.save_count = 0

    @property
    def pending_keys(self) -> list[Hashable]:
        with self._lock:
            return list(self._pending)

    def submit(self, key: Hashable, payload: Any) -> None:
        """Queue a payload for ``key``, replacing any pending one.

        Raises:
            RuntimeError: If the saver has been closed
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("DebouncedSaver is closed")
            timer = self._timers.pop(key, None)
            if timer is not None:
                timer.cancel()
            self._pending[key] = copy.deepcopy(payload)
            timer = threading.Timer(self.delay, self._on_timer)
            timer.args = (key, timer)
            timer.daemon = True
            self._timers[key] = timer
            timer.start()

    def flush(self) -> int:
        """Save every pending payload now.

        Returns:
            Number of payloads actually saved
        """
        with self._save_lock:
            with self._lock:
                for timer in self._timers.values():
                    timer.cancel()
                self._timers.clear()
                items = list(self._pending.items())
                self._pending.clear()
            return sum(1 for key, payload in items if self._persist(key, payload))

    def cancel(self) -> int:
        """Drop pending payloads without saving.

        Returns:
            Number of payloads dropped
        """
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
            dropped = len(self._pending)
            self._pending.clear()
        if dropped:
            logger.debug("Dropped %d pending payloads", dropped)
        return dropped

    def close(self) -> int:
        """Flush pending payloads and refuse further submissions."""
        with self._save_lock:
            saved = self.flush()
            with self._lock:
                self._closed = True
        return saved

    def __enter__(self) -> "DebouncedSaver":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _on_timer(self, key: Hashable, timer: threading.Timer) -> None:
        with self._save_lock:
            with self._lock:
                # A newer submit, a flush or a cancel has replaced this timer
                if self._timers.get(key) is not timer:
                    return
                del self._timers[key]
                payload = self._pending.pop(key)
            self._persist(key, payload)

    def _persist(self, key: Hashable, payload: Any) -> bool:
        """Save one payload; the caller holds the save lock."""
        with self._lock:
            if key in self._last_saved and self._last_saved[key] == payload:
                logger.debug("Skipping unchanged payload for %r", key)
                return False
        try:
            self._save(key, payload)
        except Exception as e:
            logger.exception("Auto-save failed for %r", key)
            if self.on_error is not None:
                self.on_error(key, payload, e)
            return False
        with self._lock:
            self._last_saved[key] = payload
            self.save_count += 1
        return True


class MonthlyGridEditor:
    """In-memory grid of twelve-month rows that auto-saves edited rows.

    Every edit sanitises the row (non-numeric, non-finite or negative values
    become zero) and submits the whole row to the saver.
    """

    def __init__(self, saver: DebouncedSaver, rows: Optional[Mapping[Hashable, Sequence]] = None):
        self.saver = saver
        self._rows: dict[Hashable, tuple[Decimal, ...]] = {}
        for key, months in (rows or {}).items():
            self.load(key, months)

    def load(self, key: Hashable, months: Sequence) -> None:
        """Set a row's values without triggering a save."""
        self._rows[key] = sanitize_monthly_values(months)

    def row(self, key: Hashable) -> tuple[Decimal, ...]:
        return self._rows.get(key, (ZERO,) * MONTHS_PER_YEAR)

    def row_total(self, key: Hashable) -> Decimal:
        return monthly_total(self.row(key))

    def grand_total(self) -> Decimal:
        return sum((monthly_total(months) for months in self._rows.values()), ZERO)

    def set_value(self, key: Hashable, month_index: int, value: Any) -> Decimal:
        """Change one month of a row and schedule the row for saving.

        Args:
            key: Row key (for example an account or category ID)
            month_index: 0-based position within the financial year
            value: New value; invalid input is stored as zero

        Returns:
            The row's new total

        Raises:
            ValidationError: If month_index is outside 0-11
        """
        if not 0 <= month_index < MONTHS_PER_YEAR:
            raise ValidationError(f"Month index {month_index} out of range (0-11)")
        months = list(self.row(key))
        months[month_index] = value
        sanitized = sanitize_monthly_values(months)
        self._rows[key] = sanitized
        self.saver.submit(key, sanitized)
        return monthly_total(sanitized)
