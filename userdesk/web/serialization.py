import dataclasses
import json
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID


class UserdeskJSONEncoder(json.JSONEncoder):
    """JSON encoder for the types userdesk handlers return."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime, date, time)):
            return obj.isoformat()
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, Enum):
            return obj.value
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        return super().default(obj)


def serialize_json(data: Any) -> bytes:
    return json.dumps(data, cls=UserdeskJSONEncoder, ensure_ascii=False).encode(
        "utf-8"
    )
