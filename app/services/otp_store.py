"""
app/services/otp_store.py

Purpose: In-memory OTP challenge storage

- One active challenge per normalized phone
- Expiry checked on read, plus a periodic sweep
- Size-bounded so unverified issues cannot grow memory forever
- Single process only; contents are lost on restart
"""

import asyncio
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional

from app.core.logging import get_logger
from utils.time_utils import utcnow, is_otp_expired

logger = get_logger(__name__)


@dataclass(frozen=True)
class Challenge:
    """A pending one-time passcode for a phone."""

    phone_key: str
    code: str
    display_name: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return is_otp_expired(self.expires_at, now)

    def matches(self, code: str) -> bool:
        return self.code == code


class OTPStore:
    """
    Process-wide mapping of phone_key -> Challenge.

    All operations take the same lock, so read-check-delete sequences stay
    atomic whether callers run on the event loop or in worker threads.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utcnow,
        max_entries: int = 10000,
    ):
        self._challenges: Dict[str, Challenge] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._max_entries = max_entries

    def now(self) -> datetime:
        return self._clock()

    def put(self, phone_key: str, challenge: Challenge) -> None:
        """Stores a challenge, replacing any existing one for the phone."""
        with self._lock:
            if phone_key not in self._challenges and len(self._challenges) >= self._max_entries:
                self._make_room()
            self._challenges[phone_key] = challenge

    def get(self, phone_key: str) -> Optional[Challenge]:
        with self._lock:
            return self._challenges.get(phone_key)

    def remove(self, phone_key: str) -> None:
        """Deletes the challenge for a phone. No-op if absent."""
        with self._lock:
            self._challenges.pop(phone_key, None)

    def pop_if(
        self,
        phone_key: str,
        predicate: Callable[[Challenge], bool],
    ) -> Optional[Challenge]:
        """
        Atomically removes and returns the challenge when predicate holds.

        Returns None (and leaves the store untouched) if there is no
        challenge or the predicate rejects it.
        """
        with self._lock:
            challenge = self._challenges.get(phone_key)
            if challenge is None or not predicate(challenge):
                return None
            del self._challenges[phone_key]
            return challenge

    def sweep_expired(self) -> int:
        """Deletes every expired challenge. Returns how many were removed."""
        with self._lock:
            return self._sweep_locked(self._clock())

    def clear(self) -> None:
        with self._lock:
            self._challenges.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._challenges)

    def __contains__(self, phone_key: str) -> bool:
        with self._lock:
            return phone_key in self._challenges

    def _sweep_locked(self, now: datetime) -> int:
        expired = [key for key, c in self._challenges.items() if c.is_expired(now)]
        for key in expired:
            del self._challenges[key]
        return len(expired)

    def _make_room(self) -> None:
        # Caller holds the lock
        if self._sweep_locked(self._clock()):
            return
        oldest = min(self._challenges.values(), key=lambda c: c.expires_at)
        del self._challenges[oldest.phone_key]
        logger.warning(
            f"OTP store full ({self._max_entries} entries), evicted earliest-expiring challenge"
        )

    async def run_sweeper(self, interval_seconds: float) -> None:
        """
        Sweeps expired challenges every interval until cancelled.
        """
        logger.info(f"OTP sweeper started (every {interval_seconds}s)")
        try:
            while True:
                await asyncio.sleep(interval_seconds)
                removed = self.sweep_expired()
                if removed:
                    logger.debug(f"Swept {removed} expired OTP(s)")
        except asyncio.CancelledError:
            logger.info("OTP sweeper stopped")
            raise
