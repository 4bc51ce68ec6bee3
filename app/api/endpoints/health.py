"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.db.database import get_db
from app.core.dependencies import get_exchange_rate_service
from app.services.exchange_rate_service import ExchangeRateService


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session, exchange_rates: ExchangeRateService):
        self._db = db
        self._exchange_rates = exchange_rates

    def check_database(self) -> str:
        """Check database connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except Exception:
            return "unhealthy"

    def get_health(self) -> dict:
        """Get full health status."""
        db_status = self.check_database()
        overall = "healthy" if db_status == "healthy" else "degraded"

        # The rate source is not probed: a failed fetch degrades to 1.0
        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "database": db_status,
            },
            "details": {
                "exchange_rate_source": self._exchange_rates.url
            }
        }


@router.get("")
def health_check(
    db: Session = Depends(get_db),
    exchange_rates: ExchangeRateService = Depends(get_exchange_rate_service)
):
    """
    Health check endpoint.

    Returns API and database status plus the configured rate source.
    """
    controller = HealthController(db, exchange_rates)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
