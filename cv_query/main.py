"""Command-line entry point for the CV Query Assistant.

``RUN_MODE=integrated`` (default) serves the query proxy, the CV document
routes and the chat page from one uvicorn process. ``RUN_MODE=separate``
starts the API and the chat page as two child processes.
"""

import logging
import os
import sys
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

APP_TITLE = "CV Query Assistant"
APP_FAVICON = "💼"


class ServerSettings(BaseModel):
    """Process-level settings read from the environment."""

    run_mode: Literal["integrated", "separate"] = Field(
        default_factory=lambda: os.getenv("RUN_MODE", "integrated").lower()
    )
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    ui_port: int = Field(default_factory=lambda: int(os.getenv("UI_PORT", "8080")))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "info").lower())

    @property
    def local_url(self) -> str:
        return f"http://localhost:{self.port}"


def run_integrated(settings: ServerSettings) -> None:
    """Mount the chat page on the proxy app and serve both on one port."""
    # The chat page calls back into this same server
    os.environ.setdefault("API_BASE_URL", settings.local_url)

    import uvicorn
    from nicegui import ui

    from cv_query.api.app import create_app
    from cv_query.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(app, title=APP_TITLE, favicon=APP_FAVICON)

    logger.info(f"Chat page and /api/query served from {settings.local_url}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


def run_separate(settings: ServerSettings) -> None:
    """Run the API and the chat page as child processes until either exits."""
    import subprocess
    import time

    api_base_url = os.getenv("API_BASE_URL", settings.local_url)
    ui_env = {
        **os.environ,
        "API_BASE_URL": api_base_url,
        "CV_PDF_URL": os.getenv("CV_PDF_URL", f"{api_base_url}/cv.pdf"),
        "UI_PORT": str(settings.ui_port),
    }

    api_cmd = [
        sys.executable, "-m", "uvicorn", "cv_query.api.app:app",
        "--host", settings.host, "--port", str(settings.port), "--reload",
    ]
    ui_cmd = [sys.executable, "-c", "from cv_query.ui.chat_page import main; main()"]

    logger.info(f"API on {settings.local_url}, chat page on http://localhost:{settings.ui_port}")
    children = [subprocess.Popen(api_cmd), subprocess.Popen(ui_cmd, env=ui_env)]
    try:
        while all(child.poll() is None for child in children):
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping child processes")
    finally:
        for child in children:
            child.terminate()
        for child in children:
            child.wait()


def main() -> None:
    settings = ServerSettings()
    logger.info(f"Starting {APP_TITLE} ({settings.run_mode})")

    if settings.run_mode == "separate":
        run_separate(settings)
    else:
        run_integrated(settings)


if __name__ == "__main__":
    main()
