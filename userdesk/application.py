import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware

from userdesk.config.properties import (
    ConfigurationProperties,
    get_config,
    log_config_sources,
)
from userdesk.core.logging import configure_logging_from_config
from userdesk.core.middleware import RequestLoggingMiddleware
from userdesk.data import SQLAlchemyAdapter, initialize_database, metadata
from userdesk.users import UserController, UserRepository, UserService
from userdesk.version import get_version
from userdesk.web.route_builder import RouteBuilder

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[ConfigurationProperties] = None,
    setup_logging: bool = True,
) -> Starlette:
    """
    Build the ASGI application.

    The database connects on startup and disconnects on shutdown, so the
    returned app can be created before an event loop exists.

    Args:
        config: Configuration to use; defaults to the process-wide one
        setup_logging: Install the userdesk log handler from configuration

    Returns:
        Starlette application with user routes and request logging
    """
    config = config or get_config()

    if setup_logging:
        configure_logging_from_config(config)

    debug_mode = config.get_bool("server.debug")

    adapter = SQLAlchemyAdapter(metadata)
    user_service = UserService(UserRepository(adapter))
    user_controller = UserController(user_service)

    route_builder = RouteBuilder(
        ignore_trailing_slash=config.get_bool("server.ignore_trailing_slash", True),
        debug_mode=debug_mode,
    )
    base_path = config.get("users.base_path") or UserController.__userdesk_base_path__
    routes = route_builder.build_routes([(user_controller, base_path)])

    @asynccontextmanager
    async def lifespan(app: Starlette):
        logger.info(f"Starting userdesk {get_version()}")
        if debug_mode:
            log_config_sources(config, logger)
        await initialize_database(config, adapter)
        try:
            yield
        finally:
            await adapter.disconnect()
            logger.info("userdesk stopped")

    app = Starlette(
        debug=False,
        routes=routes,
        middleware=[Middleware(RequestLoggingMiddleware)],
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.database = adapter
    app.state.user_service = user_service

    return app


def run(host: Optional[str] = None, port: Optional[int] = None):
    """Serve the application with uvicorn."""
    config = get_config()
    app = create_app(config)

    uvicorn.run(
        app,
        host=host or config.get("server.host", "127.0.0.1"),
        port=port or config.get_int("server.port", 8000),
        log_config=None,
    )


def main():
    run()
