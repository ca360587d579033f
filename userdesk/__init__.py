from userdesk.application import create_app, run
from userdesk.config import ConfigurationProperties, get_config
from userdesk.exceptions import (
    ConfigurationException,
    ConstraintViolationException,
    DataAccessException,
    FieldError,
    NotFoundException,
    RequestValidationException,
    UserdeskException,
)
from userdesk.users import User, UserController, UserRepository, UserService

__all__ = [
    "create_app",
    "run",
    "ConfigurationProperties",
    "get_config",
    "UserdeskException",
    "ConfigurationException",
    "FieldError",
    "RequestValidationException",
    "NotFoundException",
    "DataAccessException",
    "ConstraintViolationException",
    "User",
    "UserRepository",
    "UserService",
    "UserController",
]
