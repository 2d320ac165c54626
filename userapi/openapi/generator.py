import re
from typing import Any, Dict, List, Optional

from starlette.routing import Route

from userapi.openapi.descriptor import OPERATIONS, USER_SCHEMA, USER_TAG, ApiInfo

_PATH_PARAM = re.compile(r"\{(\w+)(?::(\w+))?\}")

_CONVERTOR_SCHEMAS = {
    "int": {"type": "integer", "format": "int64"},
    "float": {"type": "number"},
}


def _openapi_path(path: str) -> str:
    """Strip Starlette convertors: /{id:int} -> /{id}."""
    return _PATH_PARAM.sub(lambda m: "{" + m.group(1) + "}", path)


def _path_parameters(path: str) -> List[Dict[str, Any]]:
    return [
        {
            "name": name,
            "in": "path",
            "required": True,
            "schema": dict(_CONVERTOR_SCHEMAS.get(convertor, {"type": "string"})),
        }
        for name, convertor in _PATH_PARAM.findall(path)
    ]


def build_openapi_spec(
    routes: List[Route], info: Optional[ApiInfo] = None
) -> Dict[str, Any]:
    """
    Render an OpenAPI 3 document for the documented routes.

    Only routes named after an entry in OPERATIONS are included, so trailing
    slash aliases and the documentation routes themselves stay out.
    """
    info = info or ApiInfo()
    paths: Dict[str, Dict[str, Any]] = {}

    for route in routes:
        operation = OPERATIONS.get(route.name)
        if operation is None:
            continue

        path_item = paths.setdefault(_openapi_path(route.path), {})
        parameters = _path_parameters(route.path)

        for method in sorted(route.methods or []):
            if method == "HEAD":
                continue
            entry = {
                "tags": [USER_TAG["name"]],
                "operationId": route.name,
                **operation,
            }
            if parameters:
                entry["parameters"] = parameters
            path_item[method.lower()] = entry

    return {
        "openapi": "3.0.3",
        "info": info.to_dict(),
        "tags": [dict(USER_TAG)],
        "paths": paths,
        "components": {"schemas": {"User": USER_SCHEMA}},
    }
