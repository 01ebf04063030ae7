"""Read-only views over a snapshot of the link store.

Every function takes a list of ShortLinkModel in insertion order (as returned by
`ShortLinkBaseDAO.snapshot()`) and never touches the store itself, so the
results are consistent with the moment the snapshot was taken.

Ordering rules:
    - "newest first" means descending created_at; links created at the same
      instant are ordered by descending insertion order.
    - "top" means descending hits, ties broken by recency as above.

Functions:
    newest_first(links) -> list[ShortLinkModel]
    owned_by(links, owner_id) -> list[ShortLinkModel]
    search(links, query, owner_id) -> list[ShortLinkModel]
    top_by_hits(links, n) -> list[ShortLinkModel]
    most_recent(links, n) -> list[ShortLinkModel]
    compute_stats(links, total_users=0) -> LinkStats
"""

from dataclasses import dataclass
from datetime import datetime, UTC

from linkshortener.models import ShortLinkModel


@dataclass(frozen=True)
class LinkStats:
    """Aggregate statistics over the stored links.

    Attributes:
        total (int): number of stored links (active or not)
        active (int): links that are neither expired nor limit-exhausted
        total_hits (int): sum of hits over all stored links
        average_hits (float): total_hits / total, 0.0 for an empty store
        most_popular (ShortLinkModel | None): top link, only if it has at least one hit
        total_users (int): number of registered users
    """

    total: int
    active: int
    total_hits: int
    average_hits: float
    most_popular: ShortLinkModel | None = None
    total_users: int = 0


def newest_first(links: list[ShortLinkModel]) -> list[ShortLinkModel]:
    # sorted() is stable, so reversing first puts later insertions ahead on ties
    return sorted(reversed(links), key=lambda link: link.created_at, reverse=True)


def owned_by(links: list[ShortLinkModel], owner_id: str) -> list[ShortLinkModel]:
    return newest_first([link for link in links if link.owner_id == owner_id])


def search(links: list[ShortLinkModel], query: str, owner_id: str) -> list[ShortLinkModel]:
    """Find the owner's links whose target or shortcode contains `query`, ignoring case."""
    needle = query.casefold()
    return [
        link
        for link in owned_by(links, owner_id)
        if needle in link.target.casefold() or needle in link.shortcode.casefold()
    ]


def top_by_hits(links: list[ShortLinkModel], n: int) -> list[ShortLinkModel]:
    ranked = sorted(reversed(links), key=lambda link: (link.hits, link.created_at), reverse=True)
    return ranked[: max(n, 0)]


def most_recent(links: list[ShortLinkModel], n: int) -> list[ShortLinkModel]:
    return newest_first(links)[: max(n, 0)]


def compute_stats(links: list[ShortLinkModel], total_users: int = 0) -> LinkStats:
    now = datetime.now(UTC)
    total = len(links)
    total_hits = sum(link.hits for link in links)
    top = top_by_hits(links, 1)

    return LinkStats(
        total=total,
        active=sum(1 for link in links if link.is_active(now)),
        total_hits=total_hits,
        average_hits=total_hits / total if total else 0.0,
        most_popular=top[0] if top and top[0].hits > 0 else None,
        total_users=total_users,
    )
