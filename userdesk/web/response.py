from typing import Any, Dict, Optional


class ResponseEntity:
    """
    Handler return value that carries an explicit status code and headers.

    Example:
        return ResponseEntity.created(user.to_dict(exclude=("password",)))
    """

    def __init__(
        self,
        body: Any = None,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.body = body
        self.status = status
        self.headers = headers or {}

    @classmethod
    def ok(cls, body: Any = None, headers: Optional[Dict[str, str]] = None):
        return cls(body=body, status=200, headers=headers)

    @classmethod
    def created(cls, body: Any = None, headers: Optional[Dict[str, str]] = None):
        return cls(body=body, status=201, headers=headers)

    @classmethod
    def no_content(cls, headers: Optional[Dict[str, str]] = None):
        return cls(body=None, status=204, headers=headers)

    def __repr__(self) -> str:
        return f"ResponseEntity(status={self.status}, body={self.body!r})"
