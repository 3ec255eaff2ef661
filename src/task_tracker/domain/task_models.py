from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum
from typing import Optional
import time
import uuid

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

DEFAULT_APP_TITLE = "Task Tracker"
DEFAULT_THEME_COLOR = "#0066cc"
DEFAULT_AWS_REGION = "us-west-2"


class TaskStatus(str, Enum):
    pending = "pending"


class TaskCreate(BaseModel):
    title: str
    description: str = ""


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(alias="taskId")
    created_at: int = Field(alias="createdAt")
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.pending

    @classmethod
    def new(cls, data: TaskCreate) -> "Task":
        return cls(
            task_id=new_task_id(),
            created_at=now_ms(),
            title=data.title,
            description=data.description,
            status=TaskStatus.pending,
        )

    def to_item(self) -> dict:
        """Wire/storage representation: camelCase keys, plain values."""
        return self.model_dump(by_alias=True, mode="json")


class TaskList(BaseModel):
    tasks: list[Task]


class TaskEnvelope(BaseModel):
    task: Task


class AppConfig(BaseModel):
    """UI settings pushed to the page. Fields may be missing on the client side."""

    model_config = ConfigDict(populate_by_name=True)

    app_title: Optional[str] = Field(default=None, alias="appTitle")
    theme_color: Optional[str] = Field(default=None, alias="themeColor")
    aws_region: Optional[str] = Field(default=None, alias="awsRegion")


def new_task_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)


def newest_first(tasks: list[Task]) -> list[Task]:
    # no secondary key: equal createdAt values stay in scan order
    return sorted(tasks, key=lambda t: t.created_at, reverse=True)
