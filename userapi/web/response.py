from typing import Any, Dict, Optional


class ResponseEntity:
    """
    Handler result carrying body, status and headers.

    Usage:
        return ResponseEntity.ok(user)
        return ResponseEntity.created(user)
        return ResponseEntity.not_found()
    """

    def __init__(
        self,
        body: Any = None,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.body = body
        self.status = status
        self.headers = headers or {}

    def __repr__(self) -> str:
        return f"ResponseEntity(status={self.status}, body={self.body!r})"

    @classmethod
    def ok(cls, body: Any = None, headers: Optional[Dict[str, str]] = None):
        return cls(body, 200, headers)

    @classmethod
    def created(cls, body: Any = None, headers: Optional[Dict[str, str]] = None):
        return cls(body, 201, headers)

    @classmethod
    def no_content(cls, headers: Optional[Dict[str, str]] = None):
        return cls(None, 204, headers)

    @classmethod
    def not_found(cls, body: Any = None, headers: Optional[Dict[str, str]] = None):
        return cls(body, 404, headers)
