from fastapi import Request

from task_tracker.services.task_service import TaskService


def get_service(request: Request) -> TaskService:
    # Wired in main.create_app()
    return request.app.state.task_service
