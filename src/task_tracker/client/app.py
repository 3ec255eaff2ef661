"""
Page logic for the task list, driven over HTTP.

Everything the browser page keeps in globals lives on an explicit
`AppContext`, and every handler takes that context as its first argument.
`view` holds what the page currently shows: rendered list markup, counters,
banner, CSS custom properties. Tests and scripts can then assert on it
without a DOM.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from enum import Enum
from typing import Dict, List, Optional

import httpx

from task_tracker.client.api import ClientError, TaskTrackerAPI
from task_tracker.client.render import render_task_list, task_count_label
from task_tracker.client.theme import PRIMARY, theme_properties
from task_tracker.client.timers import RepeatingTimer, call_later
from task_tracker.domain.task_models import (
    DEFAULT_APP_TITLE,
    DEFAULT_AWS_REGION,
    DEFAULT_THEME_COLOR,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    AppConfig,
    Task,
)

logger = logging.getLogger(__name__)

CONFIG_POLL_INTERVAL = 3.0
ERROR_DISPLAY_SECONDS = 5.0
LOAD_FAILED_MESSAGE = "Failed to load tasks. Please refresh the page."


class Phase(str, Enum):
    loading = "loading"
    loaded = "loaded"
    error = "error"


@dataclass
class View:
    app_title: str = DEFAULT_APP_TITLE
    page_title: str = DEFAULT_APP_TITLE
    region_badge: str = f"Region: {DEFAULT_AWS_REGION}"
    css: Dict[str, str] = field(default_factory=lambda: {PRIMARY: DEFAULT_THEME_COLOR})
    task_list_html: str = ""
    task_count: str = ""
    loading_visible: bool = True
    empty_state_visible: bool = False
    error_message: Optional[str] = None
    submitting: bool = False
    title_char_count: str = f"0/{TITLE_MAX_LENGTH}"
    description_char_count: str = f"0/{DESCRIPTION_MAX_LENGTH}"


@dataclass
class TaskForm:
    title: str = ""
    description: str = ""

    def reset(self) -> None:
        self.title = ""
        self.description = ""


@dataclass
class AppContext:
    api: TaskTrackerAPI
    tasks: List[Task] = field(default_factory=list)
    config: AppConfig = field(
        default_factory=lambda: AppConfig(
            app_title=DEFAULT_APP_TITLE,
            theme_color=DEFAULT_THEME_COLOR,
            aws_region=DEFAULT_AWS_REGION,
        )
    )
    phase: Phase = Phase.loading
    view: View = field(default_factory=View)
    form: TaskForm = field(default_factory=TaskForm)
    tz: Optional[tzinfo] = None
    config_poll: Optional[RepeatingTimer] = None
    error_timer: Optional[asyncio.TimerHandle] = None


# --- Rendering ---

def render_tasks(ctx: AppContext) -> None:
    view = ctx.view
    view.loading_visible = False
    if not ctx.tasks:
        view.task_list_html = ""
        view.empty_state_visible = True
        view.task_count = task_count_label(0)
        return

    view.empty_state_visible = False
    view.task_count = task_count_label(len(ctx.tasks))
    view.task_list_html = render_task_list(ctx.tasks, ctx.tz)


def apply_config(ctx: AppContext, config: Optional[AppConfig]) -> None:
    """Overwrite whatever the config carries; absent fields keep their current value."""
    if config is None:
        return

    ctx.config = config
    view = ctx.view

    if config.app_title:
        view.app_title = config.app_title
        view.page_title = config.app_title

    if config.theme_color:
        try:
            view.css.update(theme_properties(config.theme_color))
        except ValueError:
            # not hex (e.g. a CSS color name): use it as-is, keep the old shades
            view.css[PRIMARY] = config.theme_color

    if config.aws_region:
        view.region_badge = f"Region: {config.aws_region}"


def hide_error(ctx: AppContext) -> None:
    ctx.view.error_message = None


def show_error(ctx: AppContext, message: str) -> None:
    ctx.view.error_message = message
    # a newer message gets its own full display window
    if ctx.error_timer is not None:
        ctx.error_timer.cancel()
    ctx.error_timer = call_later(ERROR_DISPLAY_SECONDS, lambda: hide_error(ctx))


def update_char_count(ctx: AppContext) -> None:
    ctx.view.title_char_count = f"{len(ctx.form.title)}/{TITLE_MAX_LENGTH}"
    ctx.view.description_char_count = f"{len(ctx.form.description)}/{DESCRIPTION_MAX_LENGTH}"


# --- Event handlers ---

async def handle_form_submit(ctx: AppContext) -> Optional[Task]:
    hide_error(ctx)

    title = ctx.form.title.strip()
    description = ctx.form.description.strip()
    if not title:
        show_error(ctx, "Title is required")
        return None

    ctx.view.submitting = True
    try:
        task = await ctx.api.create_task(title, description)
        ctx.tasks.insert(0, task)
        render_tasks(ctx)
        ctx.form.reset()
        update_char_count(ctx)
        return task
    except (ClientError, httpx.HTTPError) as e:
        logger.warning("create task failed: %s", e)
        show_error(ctx, str(e))
        return None
    finally:
        ctx.view.submitting = False


async def load_initial_data(ctx: AppContext) -> None:
    ctx.phase = Phase.loading
    try:
        ctx.tasks = await ctx.api.fetch_tasks()
    except (ClientError, httpx.HTTPError, ValueError) as e:
        logger.warning("fetch tasks failed: %s", e)
        ctx.phase = Phase.error
        ctx.view.loading_visible = False
        show_error(ctx, LOAD_FAILED_MESSAGE)
        return

    render_tasks(ctx)
    ctx.phase = Phase.loaded
    apply_config(ctx, await ctx.api.fetch_config())


async def refresh_config(ctx: AppContext) -> None:
    apply_config(ctx, await ctx.api.fetch_config())


def start_config_polling(ctx: AppContext, interval: float = CONFIG_POLL_INTERVAL) -> RepeatingTimer:
    if ctx.config_poll is not None:
        ctx.config_poll.cancel()
    ctx.config_poll = RepeatingTimer(interval, lambda: refresh_config(ctx)).start()
    return ctx.config_poll


async def init(ctx: AppContext, poll_interval: float = CONFIG_POLL_INTERVAL) -> RepeatingTimer:
    """Start the config poll, then run the initial load. The poll outlives this call."""
    poll = start_config_polling(ctx, poll_interval)
    await load_initial_data(ctx)
    return poll


def shutdown(ctx: AppContext) -> None:
    if ctx.config_poll is not None:
        ctx.config_poll.cancel()
        ctx.config_poll = None
    if ctx.error_timer is not None:
        ctx.error_timer.cancel()
        ctx.error_timer = None
