"""HTML fragments for the task list. Same markup as static/app.js produces."""

from __future__ import annotations

from datetime import datetime, tzinfo
from html import escape
from typing import Optional

from task_tracker.domain.task_models import Task

TASK_ID_PREFIX_LENGTH = 8


def escape_html(text: str) -> str:
    """Replace & < > " ' with entities."""
    return escape(str(text), quote=True)


def format_created_at(created_at_ms: int, tz: Optional[tzinfo] = None) -> str:
    """Render like `Jan 5, 2026, 03:04 PM` in `tz` (local time by default)."""
    dt = datetime.fromtimestamp(created_at_ms / 1000, tz=tz)
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


def task_count_label(count: int) -> str:
    return f"{count} task{'' if count == 1 else 's'}"


def render_task_card(task: Task, tz: Optional[tzinfo] = None) -> str:
    description = (
        f'<p class="task-description">{escape_html(task.description)}</p>'
        if task.description
        else ""
    )
    short_id = escape_html(task.task_id[:TASK_ID_PREFIX_LENGTH])
    return f"""
    <div class="task-card">
        <div class="task-header">
            <h3 class="task-title">{escape_html(task.title)}</h3>
            <span class="task-status">{escape_html(task.status.value)}</span>
        </div>
        {description}
        <div class="task-meta">
            <span class="task-id">ID: {short_id}</span>
            <span>&bull;</span>
            <span>{format_created_at(task.created_at, tz)}</span>
        </div>
    </div>
    """


def render_task_list(tasks: list[Task], tz: Optional[tzinfo] = None) -> str:
    return "".join(render_task_card(task, tz) for task in tasks)
