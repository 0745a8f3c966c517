"""
In-memory store for pending verification codes.

Codes live in process memory only: a restart invalidates every pending code
and every resend cooldown. Instances are shared by all requests of the
process, so the verification service must be created once at startup.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass(frozen=True)
class PendingCode:
    code: str
    issued_at: float


class VerificationCodeStore:
    """Pending code and last-send time per normalized email."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._codes: Dict[str, PendingCode] = {}
        self._last_sent: Dict[str, float] = {}

    def now(self) -> float:
        return self._clock()

    def get(self, email: str) -> Optional[PendingCode]:
        return self._codes.get(email)

    def put(self, email: str, code: str, issued_at: float) -> None:
        self._codes[email] = PendingCode(code=code, issued_at=issued_at)

    def discard(self, email: str) -> None:
        self._codes.pop(email, None)

    def last_sent_at(self, email: str) -> Optional[float]:
        return self._last_sent.get(email)

    def mark_sent(self, email: str, sent_at: float) -> None:
        self._last_sent[email] = sent_at

    def prune(self, now: float, code_ttl: float, cooldown: float) -> None:
        """Forget expired codes and elapsed cooldowns."""
        self._codes = {
            email: pending for email, pending in self._codes.items()
            if now - pending.issued_at <= code_ttl
        }
        self._last_sent = {
            email: sent_at for email, sent_at in self._last_sent.items()
            if now - sent_at < cooldown
        }

    def __len__(self) -> int:
        return len(self._codes)
