import inspect
import logging
from typing import Any, Callable, Dict, List, Tuple

from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from userapi.data.entity import User
from userapi.web.response import ResponseEntity
from userapi.web.serialization import serialize_json

logger = logging.getLogger(__name__)

BODY = "body"
PATH = "path"

# Ids are stored as signed 64-bit integers
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


class RouteBuilder:
    """Builds Starlette routes from controller instances."""

    def __init__(
        self,
        controllers: List[Any],
        base_path: str = "",
        ignore_trailing_slash: bool = True,
        debug_mode: bool = False,
    ):
        self.controllers = controllers
        self.base_path = base_path
        self.ignore_trailing_slash = ignore_trailing_slash
        self.debug_mode = debug_mode

    def build_routes(self) -> List[Route]:
        routes = []

        for controller in self.controllers:
            controller_base = getattr(controller, "__userapi_base_path__", "")
            base = self._combine_paths(self.base_path, controller_base)

            for name, method in inspect.getmembers(
                controller, predicate=inspect.ismethod
            ):
                route_meta = getattr(method, "__userapi_route__", None)
                if route_meta is None:
                    continue

                full_path = self._combine_paths(base, route_meta.path)
                endpoint = self._create_endpoint(method, self._bind_plan(method))

                routes.append(
                    Route(
                        path=full_path,
                        endpoint=endpoint,
                        methods=[route_meta.method],
                        name=route_meta.operation_id,
                    )
                )

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

        # Specific paths before parameterized paths
        routes.sort(key=self._route_priority)
        return routes

    def _bind_plan(self, handler: Callable) -> Dict[str, Tuple[str, Any]]:
        """Decide where each handler argument comes from."""
        plan = {}
        for name, param in inspect.signature(handler).parameters.items():
            if param.annotation is User:
                plan[name] = (BODY, User)
            else:
                plan[name] = (PATH, param.annotation)
        return plan

    async def _bind_arguments(
        self, request: Request, plan: Dict[str, Tuple[str, Any]]
    ) -> Dict[str, Any]:
        args = {}
        for name, (source, annotation) in plan.items():
            if source == BODY:
                args[name] = User.from_dict(await request.json())
            else:
                if name not in request.path_params:
                    raise ValueError(f"Missing path variable: {name}")
                value = request.path_params[name]
                if annotation is int:
                    value = int(value)
                    if not MIN_ID <= value <= MAX_ID:
                        raise ValueError(f"Path variable '{name}' is out of range")
                args[name] = value
        return args

    def _create_endpoint(self, handler: Callable, plan: Dict[str, Tuple[str, Any]]):
        """
        Wrap a handler: bind its arguments, call it and turn the result into
        a Starlette Response.
        """

        async def endpoint(request: Request):
            try:
                args = await self._bind_arguments(request, plan)
                result: ResponseEntity = await handler(**args)
                return self._to_response(result)

            except ValueError as e:
                return Response(
                    content=serialize_json({"error": str(e)}),
                    status_code=400,
                    headers={"content-type": "application/json"},
                )
            except Exception as e:
                if self.debug_mode:
                    logger.exception("Error handling request")
                    content = serialize_json(
                        {"error": str(e), "type": type(e).__name__}
                    )
                else:
                    logger.error(f"Internal server error: {e}")
                    content = serialize_json({"error": "Internal server error"})
                return Response(
                    content=content,
                    status_code=500,
                    headers={"content-type": "application/json"},
                )

        endpoint.__name__ = handler.__name__
        return endpoint

    def _to_response(self, entity: ResponseEntity) -> Response:
        headers = dict(entity.headers)
        body = entity.body

        if body is None:
            content = b""
        else:
            content = serialize_json(body)
            headers.setdefault("content-type", "application/json")

        return Response(content=content, status_code=entity.status, headers=headers)

    def _combine_paths(self, base: str, route: str) -> str:
        base = (base or "").rstrip("/")
        route = (route or "").rstrip("/")

        if not route:
            return base or "/"
        if not base:
            return route if route.startswith("/") else f"/{route}"
        return f"{base}{route}"

    def _route_priority(self, route: Route):
        path = route.path
        segments = [s for s in path.split("/") if s]
        param_count = sum(1 for s in segments if s.startswith("{"))
        return (param_count, -len(segments), path)
