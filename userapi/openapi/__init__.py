from userapi.openapi.descriptor import OPERATIONS, USER_SCHEMA, USER_TAG, ApiInfo
from userapi.openapi.generator import build_openapi_spec
from userapi.openapi.ui import create_docs_routes, render_swagger_ui

__all__ = [
    "ApiInfo",
    "OPERATIONS",
    "USER_SCHEMA",
    "USER_TAG",
    "build_openapi_spec",
    "create_docs_routes",
    "render_swagger_ui",
]
