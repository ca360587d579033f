from userdesk.users.controller import UserController
from userdesk.users.dto import (
    CreateUserRequest,
    UpdateUserRequest,
    parse_create,
    parse_update,
    validate_create,
    validate_update,
)
from userdesk.users.models import User, users_table
from userdesk.users.repository import UserRepository
from userdesk.users.service import UserService

__all__ = [
    "User",
    "users_table",
    "CreateUserRequest",
    "UpdateUserRequest",
    "validate_create",
    "validate_update",
    "parse_create",
    "parse_update",
    "UserRepository",
    "UserService",
    "UserController",
]
