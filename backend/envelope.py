"""API response envelope shared by every route."""

from datetime import datetime, timezone
from typing import Any


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def success(data: Any) -> dict:
    return {"success": True, "data": data, "timestamp": _timestamp()}


def failure(message: str, code: str | None = None) -> dict:
    return {
        "success": False,
        "error": {"message": message, "code": code},
        "timestamp": _timestamp(),
    }
