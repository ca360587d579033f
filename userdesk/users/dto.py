"""Request payload shapes for the user endpoints and their validation."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, NamedTuple, Optional

from email_validator import EmailNotValidError, validate_email

from userdesk.exceptions import FieldError, RequestValidationException

PASSWORD_MIN_LENGTH = 8

TLD_MIN_LENGTH = 2


@dataclass
class CreateUserRequest:
    name: str
    email: str
    password: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UpdateUserRequest:
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Only the fields the caller provided."""
        return {key: value for key, value in asdict(self).items() if value is not None}


class _FieldRule(NamedTuple):
    field: str
    label: str
    is_email: bool = False
    min_length: Optional[int] = None


_RULES = (
    _FieldRule("name", "Name"),
    _FieldRule("email", "Email", is_email=True),
    _FieldRule("password", "Password", min_length=PASSWORD_MIN_LENGTH),
)


def _is_valid_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        result = validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return len(result.domain.rsplit(".", 1)[-1]) >= TLD_MIN_LENGTH


def _check(rule: _FieldRule, value: Any, required: bool) -> Optional[str]:
    """Return the first violated constraint for one field, or None."""
    if value is None or (required and value == ""):
        return f"{rule.label} is required" if required else None

    if rule.is_email:
        return None if _is_valid_email(value) else "Email must be valid"

    if not isinstance(value, str):
        return f"{rule.label} must be a string"

    if rule.min_length is not None and len(value) < rule.min_length:
        return f"{rule.label} must be at least {rule.min_length} characters long"

    return None


def _validate(payload: Any, required: bool) -> List[FieldError]:
    if not isinstance(payload, dict):
        return [FieldError("body", "Request body must be a JSON object")]

    errors = []
    for rule in _RULES:
        message = _check(rule, payload.get(rule.field), required)
        if message:
            errors.append(FieldError(rule.field, message))
    return errors


def validate_create(payload: Any) -> List[FieldError]:
    """Check a create payload; every field is required."""
    return _validate(payload, required=True)


def validate_update(payload: Any) -> List[FieldError]:
    """Check an update payload; absent or null fields are skipped."""
    return _validate(payload, required=False)


def parse_create(payload: Any) -> CreateUserRequest:
    errors = validate_create(payload)
    if errors:
        raise RequestValidationException(errors)
    return CreateUserRequest(
        name=payload["name"], email=payload["email"], password=payload["password"]
    )


def parse_update(payload: Any) -> UpdateUserRequest:
    errors = validate_update(payload)
    if errors:
        raise RequestValidationException(errors)
    return UpdateUserRequest(
        name=payload.get("name"),
        email=payload.get("email"),
        password=payload.get("password"),
    )
