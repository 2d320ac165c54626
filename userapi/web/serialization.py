import dataclasses
import json
from typing import Any


class UserApiJSONEncoder(json.JSONEncoder):
    """JSON encoder that writes dataclass entities as objects."""

    def default(self, obj: Any) -> Any:
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        return super().default(obj)


def serialize_json(data: Any) -> bytes:
    """Serialize to compact UTF-8 JSON bytes."""
    return json.dumps(
        data, cls=UserApiJSONEncoder, ensure_ascii=False, separators=(",", ":")
    ).encode("utf-8")
