"""
Models package for discovery runs, scouts and tickets.
"""

from .scout import ScoutTask
from .site_result import ContactHint, DiscoveryRun, RunSeed, SiteResult, UiAnalysis
from .tickets import Ticket, TicketBatch

__all__ = [
    "ContactHint",
    "DiscoveryRun",
    "RunSeed",
    "ScoutTask",
    "SiteResult",
    "Ticket",
    "TicketBatch",
    "UiAnalysis",
]
