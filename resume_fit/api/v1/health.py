from datetime import datetime, timezone

from fastapi import APIRouter

from resume_fit.schemas.analysis import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc).isoformat())
