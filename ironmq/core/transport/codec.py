"""JSON codec for request and response bodies."""

import json
from typing import Any

from ..errors import ProtocolError


class JsonCodec:
    """Encode request bodies and decode response bodies as JSON."""

    def encode(self, value: Any) -> bytes:
        try:
            return json.dumps(value, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise ProtocolError(
                f"Request body is not JSON serializable: {e}",
                error_code="UNENCODABLE_REQUEST",
            ) from e

    def decode(self, raw: bytes) -> Any:
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ProtocolError(
                f"Response body is not valid JSON: {e}",
                error_context={"body_prefix": _preview(raw)},
            ) from e


def _preview(raw: bytes, limit: int = 200) -> str:
    return raw[:limit].decode("utf-8", errors="replace")
