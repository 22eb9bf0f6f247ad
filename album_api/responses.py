"""
Album API - Response Helpers
=============================

What:  Builders for the three response shapes the API sends.
How:   The payload is encoded up front with FastAPI's jsonable_encoder and
       JSONResponse rendering. If encoding fails the error is logged and the
       client still receives the intended status code with an empty body.
Who:   Route handlers (success bodies) and the exception handlers in main.py
       (error bodies).

Shapes:
    json_response(201, album)          → application/json, album JSON
    error_response(404, "album not found") → application/json, {"error": "..."}
    empty_response(204)                → no body
"""

import logging
from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def _render(
    status_code: int,
    content: Any,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    try:
        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder(content),
            headers=headers,
        )
    except (TypeError, ValueError) as e:
        logger.error("Failed to encode JSON response (status %d): %s", status_code, str(e))
        return Response(
            status_code=status_code,
            media_type=JSON_MEDIA_TYPE,
            headers=headers,
        )


def json_response(
    status_code: int,
    data: Any,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """JSON success response: pydantic models, lists of them, or plain data."""
    return _render(status_code, data, headers)


def error_response(
    status_code: int,
    message: str,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """JSON error response with body `{"error": message}`."""
    return _render(status_code, {"error": message}, headers)


def empty_response(status_code: int = 204) -> Response:
    """Response without a body (204 No Content)."""
    return Response(status_code=status_code)
