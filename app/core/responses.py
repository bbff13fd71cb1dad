from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(success: bool, data: Any = None, message: str = "", errors: Any = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": bool(success), "data": data, "message": message}
    if errors is not None:
        payload["errors"] = errors
    return payload


def error_response(status_code: int, message: str, errors: Any = None, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(api_response(False, None, message, errors)),
        headers=headers,
    )
