import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from task_tracker.app.deps import get_service
from task_tracker.domain.errors import StoreError, StoreNotConfigured
from task_tracker.observability.logging import utc_timestamp
from task_tracker.services.task_service import TaskService

router = APIRouter(tags=["probes"])
logger = logging.getLogger("task_tracker.probes")


@router.get("/health")
def health():
    """Liveness: the process is up. Touches nothing downstream."""
    return {"status": "healthy", "timestamp": utc_timestamp()}


@router.get("/ready")
async def ready(svc: TaskService = Depends(get_service)):
    """Readiness: the task store is configured and answers a one-item scan."""
    try:
        await svc.check_ready()
    except (StoreNotConfigured, StoreError) as e:
        reason = e.message
    except Exception as e:
        logger.exception("ready.failed", extra={"category": "probe", "event": "ready.failed", "error": str(e)})
        reason = str(e)
    else:
        return {"status": "ready", "timestamp": utc_timestamp()}

    return JSONResponse(
        status_code=503,
        content={"status": "not ready", "reason": reason, "timestamp": utc_timestamp()},
    )
