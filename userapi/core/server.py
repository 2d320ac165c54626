import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from starlette.applications import Starlette

from userapi.config.properties import (
    ConfigurationProperties,
    get_config,
    log_config_sources,
)
from userapi.core.logging import DEFAULT_FORMAT, configure_logging
from userapi.data import (
    SQLAlchemyUserRepository,
    UserRepository,
    get_database_adapter,
    initialize_database,
    set_database_adapter,
)
from userapi.openapi import ApiInfo, build_openapi_spec, create_docs_routes
from userapi.version import get_version
from userapi.web.controllers import UserController
from userapi.web.route_builder import RouteBuilder

logger = logging.getLogger(__name__)


class UserApiASGIApp:
    """Assembles routes, documentation and database lifecycle into an ASGI app."""

    def __init__(
        self,
        config: Optional[ConfigurationProperties] = None,
        repository: Optional[UserRepository] = None,
    ):
        self.config = config or get_config()
        self.repository = repository or SQLAlchemyUserRepository()
        self.controllers = [UserController(self.repository)]

    @asynccontextmanager
    async def _lifespan(self, app):
        await initialize_database(self.config)
        logger.info("User API started")

        yield

        try:
            adapter = get_database_adapter()
        except RuntimeError:
            adapter = None

        if adapter is not None:
            await adapter.disconnect()
            set_database_adapter(None)
        logger.info("User API stopped")

    def build(self) -> Starlette:
        route_builder = RouteBuilder(
            self.controllers,
            base_path=self.config.get("server.base_path", "") or "",
            ignore_trailing_slash=self.config.get_bool(
                "server.ignore_trailing_slash", True
            ),
            debug_mode=self.config.get_bool("server.debug"),
        )
        routes = route_builder.build_routes()

        if self.config.get_bool("openapi.enabled", True):
            info = ApiInfo.from_config(self.config)
            api_routes = list(routes)
            routes = (
                create_docs_routes(
                    lambda: build_openapi_spec(api_routes, info),
                    spec_url=self.config.get("openapi.spec_url", "/openapi.json"),
                    docs_url=self.config.get("openapi.docs_url", "/docs"),
                )
                + routes
            )

        return Starlette(
            debug=self.config.get_bool("server.debug"),
            routes=routes,
            lifespan=self._lifespan,
        )


def create_app(
    config: Optional[ConfigurationProperties] = None,
    repository: Optional[UserRepository] = None,
) -> Starlette:
    return UserApiASGIApp(config, repository).build()


def _start_uvicorn(app, host: str, port: int, log_level: str, access_log: bool):
    config = get_config()
    kwargs = {
        "host": host,
        "port": port,
        "log_level": log_level,
        "access_log": access_log,
    }
    timeout = config.get("server.timeout")
    if timeout is not None:
        kwargs["timeout_keep_alive"] = int(timeout)
    uvicorn.run(app, **kwargs)


def run(host: Optional[str] = None, port: Optional[int] = None):
    """Configure logging and serve the application until interrupted."""
    config = get_config()

    level = str(config.get("logging.level", "INFO"))
    configure_logging(
        level=level,
        format=config.get("logging.format", DEFAULT_FORMAT),
        colored=config.get_bool("logging.colored", True),
    )
    logger.info(f"userapi v{get_version()}")
    log_config_sources(config, logger)

    host = host or config.get("server.host", "127.0.0.1")
    port = int(port or config.get("server.port", 8000))

    app = create_app(config)
    _start_uvicorn(app, host, port, level.lower(), access_log=True)
