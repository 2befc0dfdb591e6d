"""Entry point serving the Publisher API with Uvicorn.

Host and port come from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``3000``); the rest of the
configuration is read by ``Settings`` as well, for example
``DATABASE_URL`` and ``SECRET_KEY``.

Usage:
    PORT=3000 python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from publisher_api.app.core.config import Settings
from publisher_api.app.main import create_app


async def serve(settings: Settings) -> None:
    """Build the application for ``settings`` and serve it until stopped."""
    app = create_app(settings)
    logging.getLogger(__name__).info(
        "Starting %s on %s:%s", settings.project_name, settings.host, settings.port
    )
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    asyncio.run(serve(Settings()))


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
