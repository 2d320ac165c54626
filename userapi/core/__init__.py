from userapi.core.logging import ColoredFormatter, configure_logging
from userapi.core.server import UserApiASGIApp, create_app, run

__all__ = [
    "ColoredFormatter",
    "configure_logging",
    "UserApiASGIApp",
    "create_app",
    "run",
]
