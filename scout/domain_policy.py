"""Blocked-domain policy for discovered sites."""

from collections.abc import Iterable

from .urls import hostname_of

# Social networks, shorteners, launch boards and forums. We want the sites
# their posts link to, not the posts themselves.
DEFAULT_BLOCKED_DOMAINS = frozenset(
    {
        "twitter.com",
        "x.com",
        "linkedin.com",
        "facebook.com",
        "instagram.com",
        "github.com",
        "medium.com",
        "youtube.com",
        "tiktok.com",
        "pinterest.com",
        "reddit.com",
        "t.co",
        "bit.ly",
        "goo.gl",
        "youtu.be",
        "producthunt.com",
        "ycombinator.com",
        "news.ycombinator.com",
        "crunchbase.com",
        "angel.co",
        "gumroad.com",
    }
)


class DomainPolicy:
    """Accepts or rejects canonical URLs by registrable domain."""

    def __init__(self, blocked_domains: Iterable[str] = DEFAULT_BLOCKED_DOMAINS):
        self.blocked_domains = frozenset(d.strip().lower().lstrip(".") for d in blocked_domains if d)

    def is_blocked_host(self, hostname: str) -> bool:
        host = hostname.lower().rstrip(".")
        return any(host == blocked or host.endswith("." + blocked) for blocked in self.blocked_domains)

    def is_allowed(self, url: str) -> bool:
        """True unless the host is a blocked domain or one of its subdomains."""
        host = hostname_of(url) if url else None
        if not host:
            return False
        return not self.is_blocked_host(host)
