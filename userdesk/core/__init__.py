from userdesk.core.logging import (
    ColoredFormatter,
    configure_logging,
    configure_logging_from_config,
)
from userdesk.core.middleware import RequestLoggingMiddleware

__all__ = [
    "ColoredFormatter",
    "configure_logging",
    "configure_logging_from_config",
    "RequestLoggingMiddleware",
]
