"""
Review Credibility Service - API
Scores one review, or every stored review of a shop, for fake rate and sentiment
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Dict

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from data_loader import load_place_catalog
from reviewscore.clients import build_clients
from reviewscore.config import get_settings
from reviewscore.fuzzy import CanonicalResolver
from reviewscore.models import AnalyzeRequest
from reviewscore.pipeline import MissingInputError, ReviewAnalyzer, build_analyzer
from reviewscore.responses import CONTENT_TYPE, CORS_HEADERS, client_error, server_error

# Load environment variables early so Settings picks them up
load_dotenv()

settings = get_settings()

# Logging configuration
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('logs/reviewscore.log') if os.path.exists('logs') else logging.NullHandler()
    ]
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"
TITLE = "Review Credibility Service"
DESCRIPTION = "Fake-review and sentiment scoring for single reviews and whole shops"


class UTF8JSONResponse(JSONResponse):
    media_type = CONTENT_TYPE


def cors_response(status_code: int, body: Dict[str, Any]) -> UTF8JSONResponse:
    # Error responses built outside the header middleware still need CORS headers
    return UTF8JSONResponse(status_code=status_code, content=body, headers=dict(CORS_HEADERS))


# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("=" * 60)
    logger.info(f"Starting {TITLE} v{VERSION}")
    logger.info("=" * 60)

    if getattr(app.state, "analyzer", None) is None:
        places, aliases = load_place_catalog(settings.places_file)
        clients = build_clients(settings)
        app.state.analyzer = build_analyzer(clients, settings, CanonicalResolver(places, aliases))
    logger.info(f"  Region: {settings.bedrock_region}")
    logger.info(f"  Model: {settings.bedrock_model_id}")
    logger.info(f"  Table: {settings.table_name}")
    logger.info(f"  Translate target: {settings.translate_target_lang}")
    logger.info("Service ready")

    yield

    logger.info("Shutdown complete")


# FastAPI application
app = FastAPI(
    title=TITLE,
    version=VERSION,
    description=DESCRIPTION,
    default_response_class=UTF8JSONResponse,
    lifespan=lifespan
)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    """Permissive CORS headers on every response"""
    response = await call_next(request)
    origins = settings.get_cors_origins()
    origin = request.headers.get("origin")
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    if origins and "*" not in origins:
        response.headers["Access-Control-Allow-Origin"] = origin if origin in origins else origins[0]
        response.headers["Vary"] = "Origin"
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or empty bodies carry neither input"""
    logger.info(f"Rejected request body: {exc.errors()}")
    return cors_response(status.HTTP_400_BAD_REQUEST, client_error())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return cors_response(status.HTTP_500_INTERNAL_SERVER_ERROR, server_error(exc))


def get_analyzer(request: Request) -> ReviewAnalyzer:
    analyzer = getattr(request.app.state, "analyzer", None)
    if analyzer is None:
        raise RuntimeError("Analyzer is not initialized")
    return analyzer


# API endpoints
@app.get("/health")
async def health_check():
    """Liveness probe"""
    return {"status": "ok", "service": TITLE, "version": VERSION}


@app.options("/analyze")
async def analyze_preflight():
    """CORS preflight"""
    return cors_response(status.HTTP_200_OK, {})


@app.post("/analyze")
def analyze(payload: AnalyzeRequest, analyzer: ReviewAnalyzer = Depends(get_analyzer)):
    """Score reviewText if present, otherwise every stored review of shopName"""
    try:
        result = analyzer.analyze(payload)
    except MissingInputError as e:
        return cors_response(status.HTTP_400_BAD_REQUEST, client_error(str(e)))
    except Exception as e:
        logger.error(f"Analysis failed: {e}", exc_info=True)
        return cors_response(status.HTTP_500_INTERNAL_SERVER_ERROR, server_error(e))
    return cors_response(status.HTTP_200_OK, result.model_dump(by_alias=True))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
        log_level="info"
    )
