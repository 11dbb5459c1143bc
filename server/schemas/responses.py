"""Pydantic response models (DTOs) for FastAPI endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ContactHintDTO(BaseModel):
    contact_page: Optional[str] = None
    email: Optional[str] = None


class UiAnalysisDTO(BaseModel):
    problems: list[str] = Field(default_factory=list)
    severity: str
    quick_fix: str
    conversion_impact: str


class SiteResultDTO(BaseModel):
    site_id: str
    name: str
    url: str
    source: str
    confidence: float
    contact_hint: ContactHintDTO
    ui_analysis: Optional[UiAnalysisDTO] = None
    notes: str


class SeedDTO(BaseModel):
    query: str
    sources: list[str]


class DiscoveryRunDTO(BaseModel):
    run_id: str
    generated_at: str
    seed: SeedDTO
    sites: list[SiteResultDTO]
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_discovery_run(cls, run):
        """Convert DiscoveryRun to DTO."""
        return cls.model_validate(run.to_dict())


class TicketDTO(BaseModel):
    title: str
    description: str
    priority: str


class TicketBatchDTO(BaseModel):
    summary: str
    tickets: list[TicketDTO]

    @classmethod
    def from_ticket_batch(cls, batch):
        return cls.model_validate(batch.to_dict())


class LinearIssueResultDTO(BaseModel):
    title: str
    success: bool
    issue: Optional[dict[str, Any]] = None
    error: Optional[str] = None


class LinearIssuesResponseDTO(BaseModel):
    success: bool
    results: list[LinearIssueResultDTO]
    team_name: str


class BrowserAgentResponseDTO(BaseModel):
    tasks: list[dict[str, Any]]
    errors: list[dict[str, Any]]


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
