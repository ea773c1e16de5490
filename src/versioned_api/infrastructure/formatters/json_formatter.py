"""JSON response formatter (format token ``json``).

Content mapping:
    - ``str`` -> ``{"message": <str>}``
    - pydantic models -> their JSON dump without unset optional fields
    - anything else -> FastAPI's ``jsonable_encoder`` (dataclasses, dates,
      UUIDs, enums...)

Output is compact: ``{"message":"bar"}``.
"""

import json
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel


class JsonResponseFormatter:
    """Serialize response content as compact UTF-8 JSON."""

    media_type = "application/json"

    def format(self, content: Any) -> bytes:
        if isinstance(content, str):
            content = {"message": content}
        elif isinstance(content, BaseModel):
            content = content.model_dump(mode="json", exclude_none=True)
        return json.dumps(
            jsonable_encoder(content),
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")
