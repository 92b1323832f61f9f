"""
File Registry Value Objects

Immutable value objects for expiry resolution.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

MAX_EXPIRY = datetime.max.replace(tzinfo=timezone.utc)
MIN_EXPIRY = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class ExpiryMinutes:
    """
    Value object representing the resolved expiry offset of an upload.

    Keeps the raw client value next to the minutes actually applied so
    unparseable input can still be reported back for diagnostics.
    """
    raw: str
    minutes: int
    is_default: bool

    @classmethod
    def resolve(cls, raw: Optional[str], default_minutes: int) -> 'ExpiryMinutes':
        """
        Resolve the client supplied expiry against the configured default.

        Only optionally signed base-10 integers within the signed 64-bit
        range are accepted; anything else (empty, whitespace, decimals,
        out-of-range digit strings) falls back to the default. Zero and
        negative values are kept as-is.

        Args:
            raw: Raw ``expiryTimeMinutes`` form value, may be None
            default_minutes: Configured default expiration in minutes

        Returns:
            New ExpiryMinutes instance
        """
        raw = raw if raw is not None else ""
        if _INTEGER_PATTERN.fullmatch(raw):
            try:
                minutes = int(raw)
            except ValueError:
                # Longer than the interpreter's integer string limit
                minutes = None
            if minutes is not None and INT64_MIN <= minutes <= INT64_MAX:
                return cls(raw=raw, minutes=minutes, is_default=False)
        return cls(raw=raw, minutes=default_minutes, is_default=True)

    def expires_at(self, now: datetime) -> datetime:
        """
        Compute the absolute expiry timestamp from ``now``.

        Offsets beyond the representable datetime range saturate.
        """
        try:
            return now + timedelta(minutes=self.minutes)
        except OverflowError:
            return MAX_EXPIRY if self.minutes > 0 else MIN_EXPIRY
