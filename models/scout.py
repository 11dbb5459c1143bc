from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ScoutTask:
    """A persistent scout as reported by the provider."""

    id: str
    status: str = "unknown"
    query: str = ""
    schedule: str = ""
    created_at: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_active(self) -> bool:
        return self.status.lower() == "active"

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ScoutTask":
        """Build from provider JSON, tolerating missing or renamed fields."""
        return cls(
            id=str(payload.get("id") or payload.get("task_id") or payload.get("scout_id") or ""),
            status=str(payload.get("status") or "unknown"),
            query=str(payload.get("query") or ""),
            schedule=str(payload.get("schedule") or ""),
            created_at=str(payload.get("created_at") or ""),
            metadata=payload.get("metadata") if isinstance(payload.get("metadata"), dict) else {},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status,
            "query": self.query,
            "schedule": self.schedule,
            "created_at": self.created_at,
            "metadata": dict(self.metadata),
        }
