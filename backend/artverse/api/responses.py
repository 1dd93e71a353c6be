"""
Success envelope shared by every router: {"success": true, "data": ..., "message": ...}
"""
from typing import Any, Optional


def success(data: Any = None, message: Optional[str] = None, **extra) -> dict:
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body
