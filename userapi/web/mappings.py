from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class RouteMetadata:
    method: str
    path: str
    operation_id: Optional[str] = None


def _mapping(method: str, path: str = "", operation_id: Optional[str] = None):
    def decorator(func: Callable) -> Callable:
        func.__userapi_route__ = RouteMetadata(
            method=method, path=path, operation_id=operation_id or func.__name__
        )
        return func

    return decorator


def GetMapping(path: str = "", operation_id: Optional[str] = None):
    return _mapping("GET", path, operation_id)


def PostMapping(path: str = "", operation_id: Optional[str] = None):
    return _mapping("POST", path, operation_id)


def PutMapping(path: str = "", operation_id: Optional[str] = None):
    return _mapping("PUT", path, operation_id)


def DeleteMapping(path: str = "", operation_id: Optional[str] = None):
    return _mapping("DELETE", path, operation_id)


def RestController(base_path: str = ""):
    """Mark a class as a controller whose handlers are mounted under base_path."""

    def decorator(cls):
        cls.__userapi_base_path__ = base_path
        return cls

    return decorator
