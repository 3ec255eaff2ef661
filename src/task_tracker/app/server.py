"""Process entry point: `task-tracker` console script."""

import logging
import os
import platform
import signal

import uvicorn

from task_tracker import settings
from task_tracker.observability.logging import setup_logging

logger = logging.getLogger("task_tracker.system")


class _Server(uvicorn.Server):
    """uvicorn server that exits on SIGTERM/SIGINT without draining connections."""

    def handle_exit(self, sig, frame):
        name = signal.Signals(sig).name
        logger.info(
            "system.shutdown",
            extra={"category": "system", "event": "system.shutdown", "signal": name},
        )
        logging.shutdown()
        os._exit(0)


def main() -> None:
    setup_logging()
    port = settings.port()
    logger.info(
        "system.start",
        extra={
            "category": "system",
            "event": "system.start",
            "port": port,
            "python_version": platform.python_version(),
            "environment": settings.environment(),
        },
    )

    config = uvicorn.Config(
        "task_tracker.app.main:create_app",
        factory=True,
        host=settings.host(),
        port=port,
        log_config=None,  # keep our JSON handlers
    )
    _Server(config).run()


if __name__ == "__main__":
    main()
