import json
import logging

from fastapi import APIRouter, Depends, Request

from task_tracker.app.deps import get_service
from task_tracker.domain.errors import ValidationError
from task_tracker.domain.task_models import TaskEnvelope, TaskList
from task_tracker.domain.validation import validate_task_input
from task_tracker.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])
logger = logging.getLogger("task_tracker.tasks")


async def _read_json(request: Request):
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError:
        raise ValidationError("Request body must be a JSON object")


@router.get("", response_model=TaskList)
async def list_tasks(svc: TaskService = Depends(get_service)):
    return TaskList(tasks=await svc.list_tasks())


@router.post("", response_model=TaskEnvelope, status_code=201)
async def create_task(request: Request, svc: TaskService = Depends(get_service)):
    # Parsed by hand so that rule violations come back as 400 {error}, not 422.
    svc.require_store()
    try:
        data = validate_task_input(await _read_json(request))
    except ValidationError as e:
        logger.info("task.create.rejected", extra={"category": "tasks", "event": "task.create.rejected", "reason": e.message})
        raise
    return TaskEnvelope(task=await svc.create_task(data))
