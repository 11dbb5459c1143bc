"""Pydantic request models for FastAPI endpoints."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


class ScoutRunRequest(BaseModel):
    query: Optional[str] = Field(None, min_length=1)
    limit: int = Field(20, ge=1, le=100)
    mock: bool = False


class ScoutActionRequest(BaseModel):
    action: Literal["create", "list", "status", "results"]
    query: Optional[str] = None
    scout_id: Optional[str] = Field(None, alias="scoutId")
    schedule: str = "0 9 * * *"

    model_config = {"populate_by_name": True}


class BrowserAgentRequest(BaseModel):
    urls: List[str] = Field(..., min_length=1)
    goal: str = Field(..., min_length=1)


class FindOwnersRequest(BaseModel):
    urls: List[str] = Field(..., min_length=1)


class ConvertOutputRequest(BaseModel):
    automation_log: str = Field(..., alias="automationLog", min_length=1)
    url: Optional[str] = None
    screenshot_url: Optional[str] = Field(None, alias="screenshotUrl")
    screenshot_urls: Optional[List[str]] = Field(None, alias="screenshotUrls")

    model_config = {"populate_by_name": True}

    @property
    def all_screenshot_urls(self) -> list[str]:
        if self.screenshot_urls:
            return list(self.screenshot_urls)
        return [self.screenshot_url] if self.screenshot_url else []


class TicketRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    priority: Optional[str] = None


class LinearIssuesRequest(BaseModel):
    tickets: List[TicketRequest] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_titles(self):
        if any(not t.title.strip() for t in self.tickets):
            raise ValueError("every ticket needs a title")
        return self
