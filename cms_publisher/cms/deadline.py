"""Shared batch deadline for CMS calls."""

from __future__ import annotations

import time
from typing import Callable


class Deadline:
    """A fixed point in time shared by every call of one publish run.

    The deadline is not reset per article: a long batch can run out of time
    partway through, after which every remaining call fails fast.
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.seconds = seconds
        self.expires_at = clock() + seconds

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0
