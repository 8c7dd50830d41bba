"""FastAPI application entry point.

Serves the scan result consumed by the HTML page:

    GET /api/scan   scan result dictionary, or 500 {"error": ...}
    GET /health     liveness check
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator

from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bw_scanner import __version__
from bw_scanner.config import ScannerConfig, TradierConfig
from bw_scanner.exceptions import ConfigurationError, ScanAbortedError
from bw_scanner.formatters import scan_result_to_dict
from bw_scanner.gateway import QuoteGateway
from bw_scanner.scanner import BWScanner
from bw_scanner.server.config import settings
from bw_scanner.tradier import TradierClient

logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Buy-write scan of leveraged ETFs",
    version=__version__,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)


class GatewayUnavailable(Exception):
    """Raised by the gateway dependency when no credential is configured."""

    pass


def get_gateway() -> Iterator[QuoteGateway]:
    """Yield a Tradier client for the duration of one request."""
    try:
        client = TradierClient(TradierConfig.load())
    except ConfigurationError as e:
        raise GatewayUnavailable(str(e)) from e
    try:
        yield client
    finally:
        client.close()


def get_scanner_config() -> ScannerConfig:
    """Scanner configuration for one request."""
    path = Path(settings.scanner_config_path) if settings.scanner_config_path else None
    return ScannerConfig.load_from_file(path)


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message}
    )


@app.exception_handler(GatewayUnavailable)
async def gateway_unavailable_handler(request, exc):
    """Missing credential is scan-fatal."""
    logger.error(f"Gateway unavailable: {exc}")
    return _error(str(exc))


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request, exc):
    """Invalid scanner configuration is scan-fatal."""
    logger.error(f"Configuration error: {exc}")
    return _error(str(exc))


@app.get("/api/scan", tags=["scan"], summary="Run a buy-write scan")
def run_scan(
    gateway: QuoteGateway = Depends(get_gateway),
    config: ScannerConfig = Depends(get_scanner_config),
) -> Any:
    """Run one scan and return the positional tables.

    Returns:
        Scan result dictionary, or a 500 response with ``error`` when the
        scan is aborted
    """
    try:
        result = BWScanner(gateway, config).run()
    except ScanAbortedError as e:
        logger.error(f"Scan aborted: {e}")
        return _error(str(e))
    return scan_result_to_dict(result)


@app.get("/health", status_code=status.HTTP_200_OK, tags=["health"])
async def health_check() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bw_scanner.server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
