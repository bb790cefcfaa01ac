import logging

from fastapi import APIRouter

from colors_api.db.raw import get_conn

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health_check() -> dict[str, str]:
    """Health check endpoint"""
    # Check database connection
    db_status = "connected"
    try:
        async with get_conn() as conn:
            await conn.execute("SELECT 1")
    except Exception as e:
        logger.warning(f"Health check database connection failed: {e}")
        db_status = "disconnected"

    return {
        "status": "healthy" if db_status == "connected" else "unhealthy",
        "database": db_status,
    }
