from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LinkRecord:
    """Represent a registered short link.

    Attributes:
        code (str):
            The unique short identifier appended to the public base address.
        target_url (str):
            The normalized absolute URL that the code resolves to.
        created_at (datetime):
            Timezone-aware UTC instant at which the record was created.
        expires_at (datetime | None):
            Absolute instant after which the record is no longer live.
            None means the link never expires.
        is_custom (bool):
            True if the code was supplied by the caller instead of generated.

    Raises:
        ValueError:
            If `expires_at` is not strictly later than `created_at`.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime.now(UTC)
        >>> record = LinkRecord(
        ...     code='sale',
        ...     target_url='https://example.com/spring',
        ...     created_at=now,
        ...     expires_at=now + timedelta(days=7),
        ...     is_custom=True,
        ... )
        >>> record.code
        'sale'
    """

    code: str
    target_url: str
    created_at: datetime
    expires_at: datetime | None = None
    is_custom: bool = False

    def __post_init__(self):
        if self.expires_at is not None and self.expires_at <= self.created_at:
            raise ValueError(f'Expiry ({self.expires_at.isoformat()}) must be later than creation ({self.created_at.isoformat()}).')
