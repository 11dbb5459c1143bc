"""Health check endpoint."""

from fastapi import APIRouter

from models.site_result import utc_timestamp
from server.schemas.responses import HealthResponseDTO

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponseDTO)
async def health_check():
    """Health check endpoint."""
    return HealthResponseDTO(status="healthy", timestamp=utc_timestamp(), version="1.0.0")
