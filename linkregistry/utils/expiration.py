"""Expiration policy for link records.

Converts relative durations (value + unit) into absolute expiry instants and
judges whether a stored record is still live.

Classes:
    ExpirationUnit:
        Recognized duration units (minutes, hours, days).
    ExpirationPolicy:
        Clock-backed expiry computation and liveness checks.

Example:
    >>> from datetime import datetime, UTC
    >>> policy = ExpirationPolicy()
    >>> now = datetime(2025, 10, 15, tzinfo=UTC)
    >>> policy.compute_expiry(now, 7, 'days')
    datetime.datetime(2025, 10, 22, 0, 0, tzinfo=datetime.timezone.utc)

NOTE:
    An unrecognized unit is an error, never "no expiration". Silently falling
    back to a permanent link when a temporary one was requested is unsafe.
"""

from datetime import datetime, timedelta
from enum import StrEnum

from linkregistry.types import Clock
from linkregistry.models import LinkRecord
from linkregistry.constants import Duration
from linkregistry.exceptions import InvalidDurationError
from linkregistry.utils.helpers import utc_now


class ExpirationUnit(StrEnum):
    MINUTES = 'minutes'
    HOURS = 'hours'
    DAYS = 'days'


UNIT_DURATION_MS = {
    ExpirationUnit.MINUTES: Duration.MINUTE,
    ExpirationUnit.HOURS: Duration.HOUR,
    ExpirationUnit.DAYS: Duration.DAY,
}


class ExpirationPolicy:
    """Compute expiry instants and judge record liveness against a clock.

    Attributes:
        clock (Clock):
            Zero-argument callable returning the current timezone-aware instant.
            Defaults to `utc_now`.
    """

    def __init__(self, clock: Clock | None = None):
        self.clock = clock if clock is not None else utc_now

    def now(self) -> datetime:
        return self.clock()

    def compute_expiry(self, now: datetime, value: int, unit: str) -> datetime:
        """Return `now + value * unit`.

        Args:
            now (datetime):
                Reference instant (usually the creation instant).
            value (int):
                Positive number of units.
            unit (str | ExpirationUnit):
                One of 'minutes', 'hours', 'days'.

        Returns:
            datetime: absolute expiry instant

        Raises:
            InvalidDurationError:
                If `value` is not a positive integer or `unit` is unrecognized.
        """
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise InvalidDurationError(f'Expiration value must be a positive integer (given value: {value!r}).')

        try:
            unit = ExpirationUnit(unit)
        except ValueError as e:
            allowed = ', '.join(u.value for u in ExpirationUnit)
            raise InvalidDurationError(f'Unknown expiration unit {unit!r} (expected one of: {allowed}).') from e

        return now + timedelta(milliseconds=value * UNIT_DURATION_MS[unit])

    def is_live(self, record: LinkRecord, now: datetime | None = None) -> bool:
        """Return True iff the record never expires or expires after `now`."""
        if record.expires_at is None:
            return True
        now = self.now() if now is None else now
        return record.expires_at > now
