"""Human-readable order numbers.

Format: ``<PREFIX>-<base36 milliseconds><4 random base36 chars>``.  Unique
enough for one shop; two tills in the same millisecond could in theory
collide.
"""

from __future__ import annotations

import secrets
import time
from typing import Callable

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


class OrderNumberGenerator:

    def __init__(
        self,
        prefix: str = "MA",
        clock_ms: Callable[[], int] = lambda: time.time_ns() // 1_000_000,
    ) -> None:
        self._prefix = prefix
        self._clock_ms = clock_ms

    def next_number(self) -> str:
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(4))
        stamp = _base36(self._clock_ms())
        return f"{self._prefix}-{stamp}{suffix}" if self._prefix else f"{stamp}{suffix}"
