"""Main entry point for the tour webhook bridge."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from bridge.api import create_fastapi_app
from bridge.app import Application
from bridge.config import Settings
from bridge.logging_config import setup_logging
from sim import Sim


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent
    load_dotenv(project_root / ".env")

    settings = Settings.from_env()
    setup_logging(log_level=settings.log_level, log_file=settings.log_file)

    # SIM talks to this server over HTTP
    local_host = "localhost" if settings.api_host == "0.0.0.0" else settings.api_host
    sim = Sim(api_url=f"http://{local_host}:{settings.port}")

    from bridge.api.routes import control
    control.set_sim_instance(sim)

    app = create_fastapi_app(Application(settings=settings))

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
