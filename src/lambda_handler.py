"""
AWS Lambda entry point (API Gateway HTTP API, payload v2 or v1).
Handler: lambda_handler.handler
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Dict, Optional

from data_loader import load_place_catalog
from reviewscore.clients import build_clients
from reviewscore.config import get_settings
from reviewscore.fuzzy import CanonicalResolver
from reviewscore.models import AnalyzeRequest
from reviewscore.pipeline import MissingInputError, ReviewAnalyzer, build_analyzer
from reviewscore.responses import CONTENT_TYPE, CORS_HEADERS, client_error, server_error

logger = logging.getLogger(__name__)
logger.setLevel(get_settings().log_level.upper())

_analyzer: Optional[ReviewAnalyzer] = None


def get_analyzer() -> ReviewAnalyzer:
    """Build the analyzer on cold start; reused by warm invocations."""
    global _analyzer
    if _analyzer is None:
        settings = get_settings()
        places, aliases = load_place_catalog(settings.places_file)
        _analyzer = build_analyzer(build_clients(settings), settings, CanonicalResolver(places, aliases))
    return _analyzer


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": CONTENT_TYPE, **CORS_HEADERS},
        "body": json.dumps(body, ensure_ascii=False),
    }


def _method(event: Dict[str, Any]) -> str:
    http = (event.get("requestContext") or {}).get("http") or {}
    return str(http.get("method") or event.get("httpMethod") or "").upper()


def _parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    body = event.get("body")
    if isinstance(body, str):
        try:
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body, validate=True).decode("utf-8")
            body = json.loads(body or "{}")
        except ValueError:
            logger.info("Request body is not valid base64 or JSON")
            return {}
    return body if isinstance(body, dict) else {}


def handler(event: Optional[Dict[str, Any]], context: Any = None) -> Dict[str, Any]:
    event = event or {}
    if _method(event) == "OPTIONS":
        return _response(200, {})
    try:
        request = AnalyzeRequest.model_validate(_parse_body(event))
        result = get_analyzer().analyze(request)
    except MissingInputError as exc:
        return _response(400, client_error(str(exc)))
    except Exception as exc:
        logger.error("Analysis failed: %s", exc, exc_info=True)
        return _response(500, server_error(exc))
    return _response(200, result.model_dump(by_alias=True))
