from fastapi import APIRouter

from task_tracker import settings
from task_tracker.domain.task_models import AppConfig

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("", response_model=AppConfig)
def get_config():
    # Re-read on every call so env changes reach the page's 3s poll.
    return settings.ui_config()
