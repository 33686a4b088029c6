"""Health check endpoint."""

from robyn import Request

from app.core.logger import LogIcon, logger
from app.core.router import Router
from app.core.settings import settings as st
from app.models.core import HealthResponse

router = Router(__file__)


@router.get("/health")
async def health_check(request: Request) -> HealthResponse:
    logger.info("Health check requested", icon=LogIcon.HEALTHCHECK)
    return HealthResponse(status="healthy", service=st.API_NAME, version=st.API_VERSION)
