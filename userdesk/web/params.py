import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from starlette.requests import Request


class _ParamMarker:
    kind: str = "auto"

    def __init__(self, name: Optional[str] = None):
        self.name = name


class PathVariable(_ParamMarker):
    """Bind a handler parameter to a path segment, e.g. `{id}`."""

    kind = "path"


class RequestBody(_ParamMarker):
    """Bind a handler parameter to the decoded JSON request body."""

    kind = "body"


@dataclass
class ParamMetadata:
    name: str
    kind: str
    param_type: Any
    source_name: str


def extract_param_metadata(handler: Callable) -> Dict[str, ParamMetadata]:
    """
    Describe how each handler parameter is bound from the request.

    Explicit PathVariable()/RequestBody() defaults win. A parameter annotated
    as starlette's Request receives the request itself. Anything else is
    looked up in the path parameters.
    """
    metadata: Dict[str, ParamMetadata] = {}
    signature = inspect.signature(handler)

    for name, param in signature.parameters.items():
        if name == "self":
            continue

        annotation = param.annotation
        default = param.default

        if annotation is Request:
            metadata[name] = ParamMetadata(name, "request", Request, name)
        elif isinstance(default, _ParamMarker):
            metadata[name] = ParamMetadata(
                name, default.kind, annotation, default.name or name
            )
        else:
            metadata[name] = ParamMetadata(name, "auto", annotation, name)

    return metadata
