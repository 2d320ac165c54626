from typing import Any, Callable, Dict, List

from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

SWAGGER_UI_VERSION = "5"

SWAGGER_UI_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <title>{title}</title>
  <meta charset="utf-8"/>
  <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/swagger-ui-dist@{version}/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@{version}/swagger-ui-bundle.js"></script>
  <script>
    SwaggerUIBundle({{
      url: "{spec_url}",
      dom_id: "#swagger-ui",
      deepLinking: true
    }});
  </script>
</body>
</html>
"""


def render_swagger_ui(title: str, spec_url: str) -> str:
    return SWAGGER_UI_TEMPLATE.format(
        title=title, spec_url=spec_url, version=SWAGGER_UI_VERSION
    )


def create_docs_routes(
    spec_factory: Callable[[], Dict[str, Any]],
    spec_url: str = "/openapi.json",
    docs_url: str = "/docs",
) -> List[Route]:
    """
    Routes serving the OpenAPI document and a Swagger UI page for it.
    The document is built once, on first request.
    """
    cache: Dict[str, Any] = {}

    def get_spec() -> Dict[str, Any]:
        if "spec" not in cache:
            cache["spec"] = spec_factory()
        return cache["spec"]

    async def openapi_json(request: Request):
        return JSONResponse(get_spec())

    async def swagger_ui(request: Request):
        title = get_spec()["info"]["title"]
        return HTMLResponse(render_swagger_ui(title, spec_url))

    return [
        Route(spec_url, openapi_json, methods=["GET"], name="openapi"),
        Route(docs_url, swagger_ui, methods=["GET"], name="swagger_ui"),
    ]
