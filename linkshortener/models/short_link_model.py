from dataclasses import dataclass
from datetime import datetime, UTC


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a shortened URL mapping.

    Attributes:
        shortcode (str):
            The unique short identifier representing the shortened URL.
        target (str):
            The original long URL that the short code redirects to.
        owner_id (str):
            Identifier of the user who created the link.
        created_at (datetime):
            Moment of creation (UTC).
        expires_at (datetime):
            created_at + TTL, after which the link no longer resolves and
            becomes eligible for reclamation.
        hits (int):
            Number of successful resolutions so far.
        max_hits (Optional[int]):
            Maximum number of successful resolutions, None for no limit.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime.now(UTC)
        >>> link = ShortLinkModel(
        ...     shortcode="abc123",
        ...     target="https://example.com/article/123",
        ...     owner_id="6a0f...",
        ...     created_at=now,
        ...     expires_at=now + timedelta(hours=24),
        ...     max_hits=2,
        ... )
        >>> link.is_active()
        True
        >>> link.is_limit_reached()
        False
    """

    shortcode: str
    target: str
    owner_id: str
    created_at: datetime
    expires_at: datetime
    hits: int = 0
    max_hits: int | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at

    def is_limit_reached(self) -> bool:
        return self.max_hits is not None and self.hits >= self.max_hits

    def is_active(self, now: datetime | None = None) -> bool:
        return not self.is_expired(now) and not self.is_limit_reached()
