"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.routes import blackjack
from api.schemas import ErrorResponse
from config import config, setup_logging
from core.errors import BlackjackError, StorageError

setup_logging()
logger = logging.getLogger(__name__)

# HTTP status per error kind; anything unlisted is a server error
ERROR_STATUS_CODES: dict[str, int] = {
    "not_found": 404,
    "cannot_create": 409,
    "game_over": 409,
    "game_not_over": 409,
    "already_claimed": 409,
    "player_not_done_yet": 409,
    "player_already_pressed_stay": 409,
    "dealer_already_pressed_stay": 409,
    "player_already_won": 409,
    "player_already_lost": 409,
    "dealer_already_won": 409,
    "dealer_already_lost": 409,
    "storage": 503,
}

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def _blackjack_error_handler(request: Request, exc: BlackjackError) -> JSONResponse:
    """Map engine errors to structured failures."""
    status_code = ERROR_STATUS_CODES.get(exc.kind, 500)
    if isinstance(exc, StorageError) or status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(kind=exc.kind, message=exc.detail).model_dump(),
    )


app = FastAPI(
    title="Blackjack Sessions",
    description="Resumable per-player blackjack sessions",
    version="0.1.0",
)

# Add rate limiter to app state and exception handlers
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(BlackjackError, _blackjack_error_handler)

# CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
async def health_check(request: Request) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(blackjack.router, prefix="/api/blackjack", tags=["blackjack"])
