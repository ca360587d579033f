import inspect
import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Tuple

from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from userdesk.exceptions import (
    FieldError,
    NotFoundException,
    RequestValidationException,
)
from userdesk.web.params import ParamMetadata, extract_param_metadata
from userdesk.web.response import ResponseEntity
from userdesk.web.serialization import serialize_json

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class RouteBuilder:
    """Builds Starlette routes from controller instances."""

    def __init__(self, ignore_trailing_slash: bool = True, debug_mode: bool = False):
        self.ignore_trailing_slash = ignore_trailing_slash
        self.debug_mode = debug_mode

    def build_routes(self, controllers: Iterable[Tuple[Any, str]]) -> List[Route]:
        """
        Build routes for every mapped method of every controller.

        Args:
            controllers: (controller instance, base path) pairs

        Returns:
            Routes sorted so specific paths match before parameterized ones
        """
        routes = []

        for controller, base_path in controllers:
            for name, method in inspect.getmembers(
                controller, predicate=inspect.ismethod
            ):
                route_meta = getattr(method, "__userdesk_route__", None)
                if route_meta is None:
                    continue

                full_path = self._combine_paths(base_path, route_meta.path)
                param_metadata = extract_param_metadata(method)
                endpoint = self._create_endpoint(method, param_metadata)

                routes.append(
                    Route(path=full_path, endpoint=endpoint, methods=[route_meta.method])
                )

                # Register /path/ alongside /path
                if (
                    self.ignore_trailing_slash
                    and len(full_path) > 1
                    and not full_path.endswith("/")
                ):
                    routes.append(
                        Route(
                            path=full_path + "/",
                            endpoint=endpoint,
                            methods=[route_meta.method],
                        )
                    )

        routes.sort(key=self._route_priority)

        return routes

    async def _bind_parameters(
        self, request: Request, param_metadata: Dict[str, ParamMetadata]
    ) -> Dict[str, Any]:
        args = {}
        for name, meta in param_metadata.items():
            if meta.kind == "request":
                args[name] = request
            elif meta.kind == "body":
                args[name] = await self._read_json_body(request)
            else:
                value = request.path_params.get(meta.source_name)
                if value is None:
                    raise RequestValidationException(
                        [FieldError(meta.source_name, "Missing path parameter")]
                    )
                args[name] = value
        return args

    @staticmethod
    async def _read_json_body(request: Request) -> Any:
        raw = await request.body()
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise RequestValidationException(
                [FieldError("body", "Request body must be valid JSON")],
                message="Malformed JSON body",
            ) from None

    def _create_endpoint(self, handler: Callable, param_metadata: dict):
        """
        Wrap a controller method as a Starlette endpoint.
        Handles parameter binding, response rendering and error mapping.
        """
        has_params = bool(param_metadata)

        async def endpoint(request: Request):
            try:
                if has_params:
                    handler_args = await self._bind_parameters(request, param_metadata)
                    result = await handler(**handler_args)
                else:
                    result = await handler()

                if isinstance(result, Response):
                    return result

                if isinstance(result, ResponseEntity):
                    return self._render(result.body, result.status, result.headers)

                return self._render(result, 200)

            except RequestValidationException as e:
                return self._render(e.to_dict(), 400)
            except NotFoundException as e:
                return self._render({"error": str(e)}, 404)
            except Exception as e:
                if self.debug_mode:
                    logger.exception("Error handling request")
                    body = {"error": str(e), "type": type(e).__name__}
                else:
                    logger.error(f"Internal server error: {e}")
                    body = {"error": "Internal server error"}
                return self._render(body, 500)

        return endpoint

    @staticmethod
    def _render(body: Any, status: int, headers: Dict[str, str] = None) -> Response:
        headers = dict(headers) if headers else {}

        if status == 204 or body is None:
            return Response(content=b"", status_code=status, headers=headers)

        if "content-type" not in {key.lower() for key in headers}:
            headers["content-type"] = JSON_CONTENT_TYPE

        return Response(content=serialize_json(body), status_code=status, headers=headers)

    def _combine_paths(self, base: str, route: str) -> str:
        """Combine base path and route path."""
        base = base.rstrip("/")
        route = route.rstrip("/")

        if not route:
            return base or "/"

        if not base:
            return route or "/"

        return f"{base}{route}"

    def _route_priority(self, route: Route):
        """Specific paths sort before parameterized paths."""
        path = route.path
        segments = [s for s in path.split("/") if s]
        param_count = sum(1 for s in segments if s.startswith("{"))
        return (param_count, -len(segments), path)
