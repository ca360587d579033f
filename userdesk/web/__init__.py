from userdesk.web.mappings import (
    DeleteMapping,
    GetMapping,
    PatchMapping,
    PostMapping,
    RestController,
    RouteMetadata,
)
from userdesk.web.params import PathVariable, RequestBody, extract_param_metadata
from userdesk.web.response import ResponseEntity
from userdesk.web.route_builder import RouteBuilder
from userdesk.web.serialization import UserdeskJSONEncoder, serialize_json

__all__ = [
    "RestController",
    "GetMapping",
    "PostMapping",
    "PatchMapping",
    "DeleteMapping",
    "RouteMetadata",
    "PathVariable",
    "RequestBody",
    "extract_param_metadata",
    "ResponseEntity",
    "RouteBuilder",
    "UserdeskJSONEncoder",
    "serialize_json",
]
