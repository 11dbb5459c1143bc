"""Site-discovery pipeline: canonicalization, policy, fingerprints, liveness and sources."""

from .contracts import RawCandidate, ScoutSourceError, SourceMode
from .domain_policy import DEFAULT_BLOCKED_DOMAINS, DomainPolicy
from .liveness import LivenessProber
from .source_adapter import YutoriSearchAdapter
from .urls import canonicalize, fingerprint

__all__ = [
    "DEFAULT_BLOCKED_DOMAINS",
    "DomainPolicy",
    "LivenessProber",
    "RawCandidate",
    "ScoutSourceError",
    "SourceMode",
    "YutoriSearchAdapter",
    "canonicalize",
    "fingerprint",
]
