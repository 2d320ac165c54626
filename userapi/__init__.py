from userapi.core.server import create_app, run
from userapi.data import User, UserRepository
from userapi.web.response import ResponseEntity

__all__ = ["create_app", "run", "User", "UserRepository", "ResponseEntity"]
