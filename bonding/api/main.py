"""FastAPI application exposing the bonding curve market.

The service hosts a single market on an in-process runtime. Identities are
supplied by callers in request bodies; authentication belongs to the
infrastructure in front of the service.
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bonding import __version__
from bonding.api.endpoints import router
from bonding.errors import AuthorizationError, BondingCurveError
from bonding.models.responses import ErrorResponse
from bonding.safe_int import SafeIntError

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("BONDING_HOST", "0.0.0.0")
PORT = int(os.environ.get("BONDING_PORT", "8000"))
DEBUG = os.environ.get("BONDING_DEBUG", "false").lower() in ("true", "1", "yes")

logger = structlog.get_logger()

app = FastAPI(
    title="Bonding Curve Market",
    description="Curve-priced token issuance backed by a redeemable reserve",
    version=__version__,
)


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(BondingCurveError)
async def handle_market_error(request: Request, exc: BondingCurveError) -> JSONResponse:
    """Render rejected operations as {"error", "detail"}; 403 for authorization."""
    status_code = 403 if isinstance(exc, AuthorizationError) else 400
    logger.info(
        "request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=status_code,
    )
    return _error_response(status_code, exc)


@app.exception_handler(SafeIntError)
async def handle_arithmetic_error(request: Request, exc: SafeIntError) -> JSONResponse:
    """Arithmetic overflow on oversized inputs is a client error."""
    logger.warning("arithmetic_rejected", path=request.url.path, error=type(exc).__name__)
    return _error_response(400, exc)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def configure_logging(debug: bool = DEBUG) -> None:
    """Console logging for the service, debug level when requested."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
    )


def run() -> None:
    """Run the market API server.

    Configuration via environment variables:
    - BONDING_HOST: Host to bind to (default: 0.0.0.0)
    - BONDING_PORT: Port to bind to (default: 8000)
    - BONDING_DEBUG: Enable debug logging and reload (default: false)
    - BONDING_* market settings, see bonding.config.MarketConfig.from_env
    """
    configure_logging()
    uvicorn.run(
        "bonding.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
