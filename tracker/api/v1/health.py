from fastapi import APIRouter
from sqlalchemy import text

from tracker.core import get_logger
from tracker.db import get_db_context

logger = get_logger(__name__)
router = APIRouter()


@router.get("", tags=["health"])
def health():
    """Health check endpoint; also pings the data store."""
    try:
        with get_db_context() as db:
            db.execute(text("SELECT 1"))
        store = "ok"
    except Exception as e:
        logger.error(f"Store health check failed: {e}")
        store = "unreachable"
    return {"status": "ok", "store": store}
