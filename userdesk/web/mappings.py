from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class RouteMetadata:
    """HTTP method and path attached to a controller method."""

    method: str
    path: str


def RestController(path: str = ""):
    """
    Mark a class as a REST controller mounted under `path`.

    Example:
        @RestController("/user")
        class UserController:
            @GetMapping("/{id}")
            async def find_one(self, id: str = PathVariable()):
                ...
    """

    def decorator(cls):
        cls.__userdesk_controller__ = True
        cls.__userdesk_base_path__ = path
        return cls

    return decorator


def _mapping(method: str, path: str) -> Callable:
    def decorator(func):
        func.__userdesk_route__ = RouteMetadata(method=method, path=path)
        return func

    return decorator


def GetMapping(path: str = ""):
    return _mapping("GET", path)


def PostMapping(path: str = ""):
    return _mapping("POST", path)


def PatchMapping(path: str = ""):
    return _mapping("PATCH", path)


def DeleteMapping(path: str = ""):
    return _mapping("DELETE", path)
