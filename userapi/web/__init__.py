from userapi.web.controllers import UserController
from userapi.web.mappings import (
    DeleteMapping,
    GetMapping,
    PostMapping,
    PutMapping,
    RestController,
    RouteMetadata,
)
from userapi.web.response import ResponseEntity
from userapi.web.route_builder import RouteBuilder
from userapi.web.serialization import serialize_json

__all__ = [
    "UserController",
    "RestController",
    "GetMapping",
    "PostMapping",
    "PutMapping",
    "DeleteMapping",
    "RouteMetadata",
    "ResponseEntity",
    "RouteBuilder",
    "serialize_json",
]
