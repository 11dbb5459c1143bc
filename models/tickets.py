from dataclasses import dataclass, field
from typing import Any

VALID_PRIORITIES = ("high", "medium", "low", "none")


@dataclass(frozen=True)
class Ticket:
    title: str
    description: str = ""
    priority: str = "none"

    def __post_init__(self):
        normalized = (self.priority or "none").strip().lower()
        if normalized not in VALID_PRIORITIES:
            normalized = "none"
        object.__setattr__(self, "priority", normalized)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Ticket":
        return cls(
            title=str(payload.get("title") or "Untitled finding"),
            description=str(payload.get("description") or ""),
            priority=str(payload.get("priority") or "none"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "description": self.description, "priority": self.priority}


@dataclass(frozen=True)
class TicketBatch:
    summary: str
    tickets: list[Ticket] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"summary": self.summary, "tickets": [t.to_dict() for t in self.tickets]}
