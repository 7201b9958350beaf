"""
Response shapes shared by the HTTP app and the Lambda entry point.
"""

from __future__ import annotations

from typing import Any, Dict

CONTENT_TYPE = "application/json; charset=utf-8"
MISSING_INPUT_MESSAGE = "Provide either reviewText or shopName"

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "content-type",
    "Access-Control-Allow-Methods": "POST,OPTIONS",
}


def client_error(message: str = MISSING_INPUT_MESSAGE) -> Dict[str, Any]:
    return {"message": message}


def server_error(exc: BaseException) -> Dict[str, Any]:
    return {"message": "Analysis failed", "error": str(exc) or type(exc).__name__}
