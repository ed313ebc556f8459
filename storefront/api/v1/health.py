"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront import __version__
from storefront.core.config import get_settings
from storefront.core.database import check_db_connected, get_db
from storefront.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        version=__version__,
        environment=get_settings().APP_ENV,
        database=db_status,
    )
