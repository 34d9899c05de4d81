"""JSON envelopes shared by every endpoint: ``{success, message?, data?, ...}``."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(data: Any = None, message: str | None = None, status_code: int = 200, **extra: Any) -> JSONResponse:
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def failure(message: str, status_code: int, **extra: Any) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "message": message}
    body.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))
