"""
Static API documentation.

Nothing here influences request handling; it is only read when the
OpenAPI document is rendered.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from userapi.config.properties import ConfigurationProperties


@dataclass(frozen=True)
class ApiInfo:
    title: str = "User Management API"
    version: str = "1.0"
    description: str = "RESTful API + ORM implementation and deployment"

    @classmethod
    def from_config(cls, config: Optional[ConfigurationProperties]) -> "ApiInfo":
        if config is None:
            return cls()
        defaults = cls()
        return cls(
            title=str(config.get("openapi.title", defaults.title)),
            version=str(config.get("openapi.version", defaults.version)),
            description=str(config.get("openapi.description", defaults.description)),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "version": self.version,
            "description": self.description,
        }


USER_TAG = {"name": "User", "description": "User management APIs"}

USER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "integer", "format": "int64", "readOnly": True},
        "name": {"type": "string"},
        "email": {"type": "string"},
    },
}

_USER_REF = {"$ref": "#/components/schemas/User"}
_NOT_FOUND = {"description": "User not found"}


def _json(schema: Dict[str, Any]) -> Dict[str, Any]:
    return {"application/json": {"schema": schema}}


OPERATIONS: Dict[str, Dict[str, Any]] = {
    "createUser": {
        "summary": "Create new user",
        "description": "Creates a new user and returns the created user with ID",
        "requestBody": {
            "description": "User object that needs to be created",
            "required": True,
            "content": {
                "application/json": {
                    "schema": _USER_REF,
                    "example": {"name": "John Doe", "email": "john.doe@example.com"},
                }
            },
        },
        "responses": {
            "201": {"description": "User created successfully", "content": _json(_USER_REF)},
            "400": {"description": "Invalid input"},
        },
    },
    "getAllUsers": {
        "summary": "Get all users",
        "description": "Returns a list of all users",
        "responses": {
            "200": {
                "description": "List of users",
                "content": _json({"type": "array", "items": _USER_REF}),
            },
        },
    },
    "getUserById": {
        "summary": "Get user by ID",
        "description": "Returns a single user by ID",
        "responses": {
            "200": {"description": "User found", "content": _json(_USER_REF)},
            "404": _NOT_FOUND,
        },
    },
    "updateUser": {
        "summary": "Update user by ID",
        "description": "Updates a user by ID and returns the updated user",
        "requestBody": {
            "description": "Updated user object",
            "required": True,
            "content": {
                "application/json": {
                    "schema": _USER_REF,
                    "example": {"name": "Jane Doe", "email": "jane.doe@example.com"},
                }
            },
        },
        "responses": {
            "200": {"description": "User updated successfully", "content": _json(_USER_REF)},
            "404": _NOT_FOUND,
        },
    },
    "deleteUserById": {
        "summary": "Delete user by ID",
        "description": "Deletes a user by ID",
        "responses": {
            "204": {"description": "User deleted successfully"},
            "404": _NOT_FOUND,
        },
    },
}
