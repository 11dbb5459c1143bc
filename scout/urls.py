"""URL canonicalization and fingerprinting for discovered sites."""

import hashlib
import re
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

TRACKING_PARAMS = frozenset({"ref", "fbclid", "gclid"})
TRACKING_PREFIXES = ("utm_",)
FINGERPRINT_LENGTH = 10

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")
_DEFAULT_PORTS = {"http": 80, "https": 443}
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"


def _is_tracking_param(key: str) -> bool:
    return key in TRACKING_PARAMS or key.startswith(TRACKING_PREFIXES)


def _clean_query(query: str) -> str:
    if not query:
        return ""
    pairs = parse_qsl(query, keep_blank_values=True)
    kept = [(key, value) for key, value in pairs if not _is_tracking_param(key)]
    if len(kept) == len(pairs):
        return query
    return urlencode(kept)


def _build_netloc(parts) -> str:
    host = parts.hostname or ""
    if not host.isascii():
        host = host.encode("idna").decode("ascii")  # UnicodeError is a ValueError
    if ":" in host:
        host = f"[{host}]"

    netloc = host
    port = parts.port
    if port is not None and port != _DEFAULT_PORTS.get(parts.scheme.lower()):
        netloc = f"{netloc}:{port}"

    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"
    return netloc


def canonicalize(raw: str | None) -> str | None:
    """
    Normalize a URL into the form used for comparison and hashing.

    - prepends https:// when no scheme is present
    - lowercases scheme and host, drops default ports
    - removes utm_*, ref, fbclid and gclid query params, keeping the rest in order
    - drops the fragment
    - punycodes non-ASCII hosts
    - a bare root path serializes without a trailing slash; with a query it keeps "/"

    Returns:
        The canonical URL, or None when the input is not an http(s) URL
    """
    if not raw or not isinstance(raw, str):
        return None

    candidate = raw.strip()
    if not candidate:
        return None
    if not _SCHEME_RE.match(candidate):
        candidate = "https://" + candidate

    try:
        parts = urlsplit(candidate)
        scheme = parts.scheme.lower()
        if scheme not in _DEFAULT_PORTS or not parts.hostname:
            return None
        if any(ch.isspace() for ch in parts.hostname):
            return None
        netloc = _build_netloc(parts)  # .port raises ValueError on junk ports
    except ValueError:
        return None

    query = _clean_query(parts.query)
    path = parts.path
    if path in ("", "/"):
        path = "/" if query else ""
    else:
        path = quote(path, safe=_PATH_SAFE)

    return urlunsplit((scheme, netloc, path, query, ""))


def hostname_of(url: str) -> str | None:
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return None
    return host.lower() if host else None


def fingerprint(canonical_url: str, length: int = FINGERPRINT_LENGTH) -> str:
    """Stable short id for a canonical URL: leading hex chars of its SHA-256."""
    return hashlib.sha256(canonical_url.encode("utf-8")).hexdigest()[:length]
